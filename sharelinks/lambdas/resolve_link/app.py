import logging

from sharelinks.types import LambdaContext, LambdaEvent, LambdaResponse
from sharelinks.exceptions import ConfigurationError, InfrastructureError, LinkNotFoundError
from sharelinks.dao.redis import ShareLinkRedisDAO
from sharelinks.dao.exceptions import DAOError
from sharelinks.links import LinkResolver
from sharelinks.utils import load_config, RedisConfig, is_valid_share_id
from sharelinks.utils.helpers import guarantee_404_response
from sharelinks.utils.responses import response_302, response_404
from sharelinks.lambdas.resolve_link.constants import (
    CONFIGURATION_ERROR,
    DATA_STORE_ERROR,
    LINK_NOT_FOUND,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_404_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle browser navigations to short links

    This Lambda handler follows this procedure to resolve short links:
    - Step 1: Extract the share id from the request path
    - Step 2: Reject malformed share ids without touching the store
    - Step 3: Load the application's config and connect to the store
    - Step 4: Resolve the share id to its long URL
    - Step 5: Redirect the client to the long URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: long URL destination
        404: Not found page
            malformed, unknown or expired share id, or any store failure

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the shareId path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shareId': 'V1StGXR8'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://offshoremate.com/shared/abc123'
    """
    # 1- Extract the share id from the request path
    method = (event.get('httpMethod') or 'GET').upper()
    if method not in {'GET', 'HEAD'}:
        logger.info('Method %s not allowed on short links. Responding with 404.', method, extra={'event': LINK_NOT_FOUND})
        return response_404()
    share_id = (event.get('pathParameters') or {}).get('shareId')

    # 2- Reject malformed share ids without touching the store
    if not is_valid_share_id(share_id):
        logger.info('Malformed share id in path. Responding with 404.', extra={'event': LINK_NOT_FOUND})
        return response_404()

    # 3- Load the application's config and connect to the store
    try:
        app_config = load_config('resolve_link')
        redis_config = RedisConfig.from_dict(app_config.get('redis'))
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load configuration for resolve link function. Responding with 404.', extra={'event': CONFIGURATION_ERROR})
        return response_404()

    try:
        dao = ShareLinkRedisDAO(**redis_config.dao_kwargs())
    except DAOError:
        logger.exception('Data store unavailable. Responding with 404.', extra={'event': DATA_STORE_ERROR, 'shareId': share_id})
        return response_404()

    # 4- Resolve the share id to its long URL
    try:
        long_url = LinkResolver(dao).resolve(share_id)
    except LinkNotFoundError as e:
        logger.info('Share link not found. Responding with 404.', extra={'event': LINK_NOT_FOUND, 'shareId': share_id, 'reason': str(e)})
        return response_404()

    # 5- Redirect the client to the long URL
    logger.info('Redirecting client to long URL. Responding with 302.', extra={'event': REDIRECT_SUCCESS, 'shareId': share_id})
    return response_302(location=long_url)
