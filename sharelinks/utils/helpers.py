"""Helper utilities for AWS lambda functions.

Functions:
    request_host() -> str
        Extract the host the client addressed from an API Gateway event
    request_origin() -> str
        Derive the canonical origin (scheme://host) of the current request
    base_url() -> str
        Derive the public base URL short links are built on
    get_short_url() -> str
        Get string representation of short URL for a given share id
    isoformat_utc() -> str
        Format a datetime as ISO-8601 UTC with millisecond precision
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_response(fallback) -> Callable
        Decorator factory: Turn unexpected handler failures into a fallback response
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler failures into a generic 500 response
    guarantee_404_response(handler) -> Callable
        Decorator: Turn unexpected handler failures into the not found page

Example:
    Typical usage inside a Lambda handler:

        >>> from sharelinks.utils.helpers import request_origin, base_url
        >>> event = {
        ...     "headers": {"Host": "offshoremate.com"},
        ...     "requestContext": {"domainName": "offshoremate.com", "stage": "Prod"}
        ... }
        >>> request_origin(event)
        'https://offshoremate.com'
        >>> base_url(event)
        'https://offshoremate.com'

        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import logging
import functools
from datetime import datetime, UTC
from typing import Any
from collections.abc import Callable

from sharelinks.constants import DEFAULT_HOST, SHORT_URL_PATH, UNKNOWN_INTERNAL_SERVER_ERROR
from sharelinks.exceptions import MissingEnvironmentVariableError
from sharelinks.utils.runtime import running_locally
from sharelinks.utils.responses import response_404, response_500


logger = logging.getLogger(__name__)


def request_host(event: dict[str, Any]) -> str:
    """Extract the host the client addressed

    Prefers the `Host` header (case-insensitive), then the API Gateway
    domain name, then falls back to the local development host.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: host with optional port, e.g. "offshoremate.com" or "localhost:3000"
    """
    headers = event.get('headers') or {}
    for name, value in headers.items():
        if name.lower() == 'host' and value:
            return value

    domain = (event.get('requestContext') or {}).get('domainName')
    return domain or DEFAULT_HOST


def request_origin(event: dict[str, Any]) -> str:
    """Derive the canonical origin of the current request

    Local hosts are served over plain HTTP, everything else over HTTPS.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: origin, e.g.:
             - "https://offshoremate.com"
             - "http://localhost:3000"
    """
    host = request_host(event)
    scheme = 'http' if 'localhost' in host else 'https'
    return f'{scheme}://{host}'


def base_url(event: dict[str, Any]) -> str:
    """Derive public base URL for short links

    Works seamlessly with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://offshoremate.com"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    origin = request_origin(event)
    stage = (event.get('requestContext') or {}).get('stage', '')

    if 'execute-api' in origin and stage:
        return f'{origin}/{stage}'
    return origin


def get_short_url(share_id: str, base: str) -> str:
    """Get string representation of a short URL

    Args:
        share_id (str): share identifier
        base (str): public base URL (see base_url())

    Returns:
        str: short url string representation, e.g. "https://offshoremate.com/s/V1StGXR8"
    """
    return f'{base.rstrip("/")}{SHORT_URL_PATH}{share_id}'


def isoformat_utc(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with millisecond precision and a 'Z' suffix.

    Example:
        >>> isoformat_utc(datetime(2025, 10, 15, tzinfo=UTC))
        '2025-10-15T00:00:00.000Z'
    """
    # fmt: off
    return moment.astimezone(UTC) \
                 .isoformat(timespec='milliseconds') \
                 .replace('+00:00', 'Z')
    # fmt: on


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_response(fallback: Callable[[], dict]) -> Callable:
    """Decorator factory: answer with `fallback()` when a Lambda handler blows up.

    The exception and its traceback are logged, never returned to the caller.
    When running locally the exception is re-raised instead to ease debugging.

    Args:
        fallback (Callable[[], dict]):
            Builds the response returned in place of the failed invocation.
    """

    def decorator(handler: Callable) -> Callable:
        @functools.wraps(handler)
        def wrapper(event, context):
            try:
                return handler(event, context)
            except Exception:
                if running_locally():
                    raise
                logger.exception(
                    'Unhandled exception in Lambda handler. Responding with fallback response.',
                    extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
                )
                return fallback()

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with a generic 500 when a Lambda handler blows up."""
    return guarantee_response(lambda: response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR))(handler)


def guarantee_404_response(handler: Callable) -> Callable:
    """Decorator: respond with the standard not found page when a Lambda handler blows up."""
    return guarantee_response(response_404)(handler)
