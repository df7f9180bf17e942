class SharelinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:sharelinks_error'


class ConfigurationError(SharelinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InfrastructureError(SharelinksError):
    """Base exception for all infrastructure (AWS) errors."""

    error_code = 'infra:infrastructure_error'


class AppConfigError(InfrastructureError):
    """Raised when AppConfig responds with erroneous data."""

    error_code = 'infra:appconfig_error'


class ClientInputError(SharelinksError):
    """Base exception for requests rejected because of caller input."""

    error_code = 'client:client_input_error'


class InvalidLongURLError(ClientInputError):
    """Raised when the long URL is missing, empty or not a string."""

    error_code = 'client:invalid_long_url_error'


class DisallowedDomainError(ClientInputError):
    """Raised when the long URL points outside the domain allow-list."""

    error_code = 'client:disallowed_domain_error'


class LinkNotFoundError(SharelinksError):
    """Raised when a share id cannot be resolved to a long URL.

    Covers malformed ids, ids that were never issued, expired records,
    corrupt records and store failures alike.
    """

    error_code = 'client:link_not_found_error'
