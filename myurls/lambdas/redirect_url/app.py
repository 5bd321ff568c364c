import json
import logging

from myurls.types import LambdaEvent, LambdaContext, LambdaResponse
from myurls.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from myurls.exceptions import ConfigurationError
from myurls.services import ShortLinkService, build_short_link_service
from myurls.utils import load_config, get_short_url, app_prefix
from myurls.utils.helpers import guarantee_500_response
from myurls.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_LINK_NOT_FOUND,
    CONFIGURATION_ERROR,
    DATA_STORE_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)

# Reused across invocations of the same Lambda container
_service: ShortLinkService | None = None


def get_service() -> ShortLinkService:
    global _service
    if _service is None:
        _service = build_short_link_service(load_config('redirect_url'), prefix=app_prefix())
    return _service


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 500,
        'body': json.dumps(body),
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'body': json.dumps(body),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Not Found'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 404,
        'body': json.dumps(body),
    }


def response_301(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {
            'Location': location,
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
        },
        'body': json.dumps({}),  # no body needed for redirects
    }


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve shortcode to its long URL (renewing the link as a side effect)
    - Step 3: Redirect client to the long URL

    HTTP responses:
        301: Successful redirect
            headers:
                Location: long URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: short link doesn't exist or has expired
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'pathParameters': {'shortcode': 'aZ3k9Q'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get the lifecycle engine (built once per container)
    try:
        service = get_service()
    except ConfigurationError:
        logger.exception('Bad or missing configuration. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500(error_code=DATA_STORE_UNAVAILABLE)

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info(
            'Missing "shortcode" in path. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve shortcode (missing and expired links look the same)
    try:
        long_url = service.resolve(shortcode)
    except ShortLinkNotFoundError:
        logger.info(
            'Short link not found or expired. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_LINK_NOT_FOUND},
        )
        return response_404(
            message=f"short url {get_short_url(shortcode, event)} doesn't exist or has expired",
            error_code=SHORT_LINK_NOT_FOUND,
        )
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500(error_code=DATA_STORE_UNAVAILABLE)

    # 3- Redirect client to long URL
    logger.info(
        'Redirecting client to long URL. Responding with 301.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_301(location=long_url)
