import json
import logging

from sharelinks.types import LambdaContext, LambdaEvent, LambdaResponse
from sharelinks.exceptions import ConfigurationError, DisallowedDomainError, InfrastructureError, InvalidLongURLError
from sharelinks.models import OriginContext
from sharelinks.dao.redis import ShareLinkRedisDAO
from sharelinks.dao.exceptions import DAOError
from sharelinks.links import LinkIssuer, require_long_url, require_allowed_domain
from sharelinks.utils import load_config, RedisConfig, AllowListConfig, request_origin, base_url
from sharelinks.utils.helpers import guarantee_500_response
from sharelinks.utils.responses import response_200, response_400, response_405, response_500
from sharelinks.lambdas.issue_link.constants import (
    METHOD_NOT_ALLOWED,
    INVALID_JSON_BODY,
    INVALID_LONG_URL,
    DISALLOWED_DOMAIN,
    CONFIGURATION_ERROR,
    DATA_STORE_ERROR,
    LINK_ISSUED,
)


logger = logging.getLogger(__name__)


def _http_method(event: LambdaEvent) -> str:
    method = event.get('httpMethod') or (event.get('requestContext') or {}).get('httpMethod') or ''
    return method.upper()


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to issue share links

    This Lambda handler follows this procedure to issue share links:
    - Step 1: Reject any method other than POST
    - Step 2: Extract and check the long URL from the request body
    - Step 3: Load the allow-list from the application's config
    - Step 4: Check the long URL against the allow-list for the request origin
    - Step 5: Issue the share link (connect, store, verify)
    - Step 6: Respond to the client with 200 success

    Client input is fully checked before Redis is contacted, so rejected
    requests never cost a store round trip.

    HTTP responses:
        200: Successful issuance
            shortUrl: newly issued short url
            shareId: newly generated share id
            expiresAt: ISO-8601 expiry of the share link
        400: Bad client request
            error: invalid JSON body, invalid/missing longUrl or disallowed domain
        405: Method not allowed
            error: only POST is accepted
        500: Internal server error
            error: generic message, details are only logged

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'httpMethod': 'POST', 'headers': {'Host': 'offshoremate.com'},
        ...          'body': '{"longUrl": "https://offshoremate.com/shared/abc123"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortUrl']
        'https://offshoremate.com/s/V1StGXR8'
    """
    # 1- Reject any method other than POST
    method = _http_method(event)
    if method != 'POST':
        logger.info('Method %s not allowed. Responding with 405.', method, extra={'event': METHOD_NOT_ALLOWED})
        return response_405(allow='POST')

    # 2- Extract and check the long URL from the request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400('Invalid JSON body', error_code=INVALID_JSON_BODY)

    try:
        long_url = require_long_url(request_body.get('longUrl') if isinstance(request_body, dict) else None)
    except InvalidLongURLError as e:
        logger.info('Rejected share link request. Responding with 400.', extra={'event': INVALID_LONG_URL, 'reason': str(e)})
        return response_400(str(e), error_code=INVALID_LONG_URL)

    # 3- Load the allow-list from the application's config
    try:
        app_config = load_config('issue_link')
        allow_list = AllowListConfig.from_dict(app_config.get('allow_list'))
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load configuration for issue link function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    # 4- Check the long URL against the allow-list for the request origin
    origin = OriginContext(origin=request_origin(event), base_url=base_url(event))
    try:
        require_allowed_domain(long_url, origin, allow_list)
    except DisallowedDomainError as e:
        logger.info('Rejected share link request. Responding with 400.', extra={'event': DISALLOWED_DOMAIN, 'reason': str(e)})
        return response_400(str(e), error_code=DISALLOWED_DOMAIN)

    # 5- Issue the share link
    try:
        redis_config = RedisConfig.from_dict(app_config.get('redis'))
    except ConfigurationError:
        logger.exception('Invalid Redis configuration for issue link function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    try:
        dao = ShareLinkRedisDAO(**redis_config.dao_kwargs())
        issued = LinkIssuer(dao, allow_list).issue(long_url, origin)
    except DAOError:
        logger.exception('Data store failure while issuing share link. Responding with 500.', extra={'event': DATA_STORE_ERROR})
        return response_500()

    # 6- Respond to the client with 200 success
    logger.info(
        'Issued share link. Responding with 200.',
        extra={'event': LINK_ISSUED, 'shareId': issued.share_id, 'expiresAt': issued.to_dict()['expiresAt']},
    )
    return response_200(issued.to_dict())
