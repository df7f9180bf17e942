"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`) and deployed to the
corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "issue_link": {
                "redis": {"host": "...", "port": 6379, "db": 0, ...},
                "allow_list": {
                    "preview_origin": "https://sharelinks-git-main.vercel.app",
                    "production_hostnames": ["offshoremate.com", ".vercel.app"]
                }
            },
            "resolve_link": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"issue_link"`) from this AppConfig
document and turns it into validated configuration structs (`RedisConfig`,
`AllowListConfig`) which are handed to the DAOs and link services explicitly.

Typical usage inside a Lambda handler:
    >>> from sharelinks.utils.config import load_config, RedisConfig
    >>> app_config = load_config('issue_link')
    >>> RedisConfig.from_dict(app_config['redis']).host
    'redis-15501.host.docker.internal'
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
from dataclasses import dataclass, field
from pathlib import Path
from collections.abc import Callable
from typing import Any

import boto3
import yaml

from sharelinks.constants import ENV
from sharelinks.types import AppConfigDataClient, AppConfigDocument, LambdaConfiguration
from sharelinks.utils.helpers import require_environment
from sharelinks.utils.runtime import running_locally
from sharelinks.exceptions import AppConfigError, BadConfigurationError


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


# -------------------------------
# Configuration structs
# -------------------------------


@dataclass(frozen=True)
class RedisConfig:
    """Validated connection settings for the shared Redis store.

    Attributes:
        host (str): Redis hostname (required).
        port (int): Redis port, 6379 by default.
        db (int): Redis database index, 0 by default.
        username (str | None): ACL username, if any.
        password (str | None): ACL password, if any.
        ssl (bool): Connect over TLS.
        socket_timeout (float): Upper bound (seconds) for every store call.
        key_prefix (str | None): Optional key namespace, e.g. 'sharelinks:dev'.
    """

    host: str
    port: int = 6379
    db: int = 0
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    ssl: bool = False
    socket_timeout: float = 3.0
    key_prefix: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> 'RedisConfig':
        """Build a RedisConfig, failing fast on missing or invalid values.

        Raises:
            BadConfigurationError: If the section is absent or holds invalid values.
        """
        if not isinstance(data, dict):
            raise BadConfigurationError("Missing 'redis' configuration section.")

        host = data.get('host')
        if not isinstance(host, str) or not host:
            raise BadConfigurationError("Redis configuration requires a non-empty 'host'.")

        try:
            port = int(data.get('port', 6379))
            db = int(data.get('db', 0))
            socket_timeout = float(data.get('socket_timeout', 3.0))
        except (TypeError, ValueError) as e:
            raise BadConfigurationError(f'Invalid Redis configuration value: {e}') from e

        if not 0 < port < 65536:
            raise BadConfigurationError(f'Redis port must be within 1..65535 (given value: {port}).')
        if db < 0:
            raise BadConfigurationError(f'Redis db must be a non-negative integer (given value: {db}).')
        if socket_timeout <= 0:
            raise BadConfigurationError(f'Redis socket_timeout must be positive (given value: {socket_timeout}).')

        key_prefix = data.get('key_prefix')
        if key_prefix is not None and not isinstance(key_prefix, str):
            raise BadConfigurationError(f'Redis key_prefix must be a string (given type: {type(key_prefix)}).')

        return cls(
            host=host,
            port=port,
            db=db,
            username=data.get('username') or None,
            password=data.get('password') or None,
            ssl=bool(data.get('ssl', False)),
            socket_timeout=socket_timeout,
            key_prefix=key_prefix or None,
        )

    def dao_kwargs(self) -> dict[str, Any]:
        """Keyword arguments understood by RedisClientMixin-based DAOs."""
        return {
            'redis_host': self.host,
            'redis_port': self.port,
            'redis_db': self.db,
            'redis_username': self.username,
            'redis_password': self.password,
            'redis_ssl': self.ssl,
            'redis_socket_timeout': self.socket_timeout,
            'prefix': self.key_prefix,
        }


@dataclass(frozen=True)
class AllowListConfig:
    """Origins (besides the request's own) that long URLs may point to.

    Attributes:
        preview_origin (str | None):
            Deployment preview origin, e.g. 'https://sharelinks-git-main.vercel.app'.
            A bare host is treated as 'https://<host>'.
        production_hostnames (tuple[str, ...]):
            Hostname fragments accepted anywhere in the long URL,
            e.g. ('offshoremate.com', '.vercel.app').
    """

    preview_origin: str | None = None
    production_hostnames: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> 'AllowListConfig':
        """Build an AllowListConfig. A missing section allows the request origin only.

        Raises:
            BadConfigurationError: If the section holds values of the wrong type.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise BadConfigurationError("'allow_list' configuration section must be a mapping.")

        preview_origin = data.get('preview_origin') or None
        if preview_origin is not None:
            if not isinstance(preview_origin, str):
                raise BadConfigurationError(f'preview_origin must be a string (given type: {type(preview_origin)}).')
            if '://' not in preview_origin:
                preview_origin = f'https://{preview_origin}'
            preview_origin = preview_origin.rstrip('/')

        hostnames = data.get('production_hostnames') or []
        if isinstance(hostnames, str):
            hostnames = [hostnames]
        if not isinstance(hostnames, list) or not all(isinstance(h, str) and h for h in hostnames):
            raise BadConfigurationError('production_hostnames must be a list of non-empty strings.')

        return cls(preview_origin=preview_origin, production_hostnames=tuple(hostnames))


# -------------------------------
# Configuration loading
# -------------------------------


def _lambda_section(document: AppConfigDocument, lambda_name: str) -> LambdaConfiguration:
    """Extract the active backend section (plus the allow-list) for one Lambda.

    Raises:
        AppConfigError: If the document doesn't follow the expected structure.
    """
    try:
        backend = document['active_backend']
        section = document['configs'][lambda_name]
        data = {backend: section[backend]}
    except (KeyError, TypeError) as e:
        raise AppConfigError(f"AppConfig document has no '{lambda_name}' configuration for the active backend.") from e

    if 'allow_list' in section:
        data['allow_list'] = section['allow_list']
    return data


def _sam_load_local_appconfig(func: Callable) -> Callable:  # pragma: no cover
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    def __validate_appconfig_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = _lambda_section(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'issue_link', 'resolve_link').

    Raises:
        MissingEnvironmentVariableError: If the AppConfig identifiers aren't set.
        AppConfigError: If the deployed document is not valid JSON or lacks the section.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise AppConfigError('AppConfig returned a document which is not valid JSON.') from e

    data = _lambda_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data


def load_config_file(path: str | Path, lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from a local YAML (or JSON) document.

    The file follows the same structure as the AppConfig document. Used by
    developer tooling which runs outside of AWS.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        AppConfigError: If the document lacks the requested section.
    """
    path = Path(path)
    with path.open('r', encoding='utf-8') as f:
        document = yaml.safe_load(f) or {}

    logger.debug('Loaded configuration file.', extra={'path': str(path), 'lambdaName': lambda_name})
    return _lambda_section(document, lambda_name)
