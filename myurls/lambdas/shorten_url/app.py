import json
import base64
import binascii
import logging

from myurls.types import LambdaEvent, LambdaContext, LambdaResponse
from myurls.dao.exceptions import DataStoreError
from myurls.exceptions import (
    ConfigurationError,
    EmptyLongURLError,
    InvalidLengthError,
    InvalidTTLError,
    KeyConflictError,
    MalformedShortcodeError,
    ShortcodeExhaustedError,
)
from myurls.services import ShortLinkService, build_short_link_service
from myurls.utils import load_config, get_short_url, app_prefix
from myurls.utils.helpers import guarantee_500_response
from myurls.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    EMPTY_LONG_URL,
    INVALID_BASE64,
    INVALID_LENGTH,
    INVALID_TTL,
    MALFORMED_SHORTCODE,
    SHORTCODE_CONFLICT,
    SHORTCODE_EXHAUSTED,
    CONFIGURATION_ERROR,
    DATA_STORE_UNAVAILABLE,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)

# Reused across invocations of the same Lambda container
_service: ShortLinkService | None = None

INPUT_ERROR_CODES = {
    EmptyLongURLError: EMPTY_LONG_URL,
    InvalidLengthError: INVALID_LENGTH,
    InvalidTTLError: INVALID_TTL,
    MalformedShortcodeError: MALFORMED_SHORTCODE,
}


def get_service() -> ShortLinkService:
    global _service
    if _service is None:
        _service = build_short_link_service(load_config('shorten_url'), prefix=app_prefix())
    return _service


def response_200(*, long_url: str, short_url: str, shortcode: str, reused: bool) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {
            'Content-Type': 'application/json',
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
        },
        'body': json.dumps(
            {
                'message': f'Successfully shortened {long_url} to {short_url}',
                'long_url': long_url,
                'short_url': short_url,
                'shortcode': shortcode,
                'reused': reused,
            }
        ),
    }


def response_error(status_code: int, base: str, message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': status_code,
        'body': json.dumps(body),
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(400, 'Bad Request', message, error_code)


def response_409(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(409, 'Conflict', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(500, 'Internal Server Error', message, error_code)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract long URL, explicit shortcode and shortcode length from request body
    - Step 2: Create (or reuse) the short link via the lifecycle engine
    - Step 3: Respond to user with 200 success

    Request body (JSON):
        long_url (str):         URL to shorten (required)
        short_key (str):        explicit shortcode (optional)
        short_url_len (int):    generated shortcode length (optional)
        base64 (bool):          long_url is base64 encoded (optional)

    HTTP responses:
        200: Successful URL shortening
            long_url, short_url, shortcode, reused
        400: Bad client request
            errorCode: INVALID_JSON_BODY | EMPTY_LONG_URL | INVALID_BASE64 |
                       INVALID_LENGTH | INVALID_TTL | MALFORMED_SHORTCODE
        409: Explicit shortcode already bound to another URL
            errorCode: SHORTCODE_CONFLICT
        500: Internal server error
            errorCode: CONFIGURATION_ERROR | DATA_STORE_UNAVAILABLE | SHORTCODE_EXHAUSTED |
                       UNKNOWN_INTERNAL_SERVER_ERROR

    Example:
        >>> event = {'body': '{"long_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['short_url']
        'https://s.example.com/aZ3k9Q'
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

    # 1- Extract request parameters from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    long_url = request_body.get('long_url') or ''
    shortcode = request_body.get('short_key') or None
    length = request_body.get('short_url_len')
    if not isinstance(long_url, str) or not isinstance(shortcode, str | None):
        return response_400(message="'long_url' and 'short_key' must be strings", error_code=INVALID_JSON_BODY)

    if long_url and request_body.get('base64'):
        try:
            long_url = base64.b64decode(long_url, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError):
            logger.info('Undecodable base64 long URL. Responding with 400.', extra={'event': INVALID_BASE64})
            return response_400(message="'long_url' is not valid base64", error_code=INVALID_BASE64)

    if isinstance(length, str) and length.strip():
        try:
            length = int(length)
        except ValueError:
            return response_400(message="'short_url_len' must be a number", error_code=INVALID_LENGTH)
    elif length == '':
        length = None

    # 2- Create or reuse the short link
    try:
        link = service.create(long_url, length=length, shortcode=shortcode)
    except tuple(INPUT_ERROR_CODES) as e:
        error_code = INPUT_ERROR_CODES[type(e)]
        logger.info('Rejected shortening request. Responding with 400.', extra={'event': error_code, 'reason': str(e)})
        return response_400(message=str(e), error_code=error_code)
    except KeyConflictError as e:
        logger.info('Shortcode already taken. Responding with 409.', extra={'event': SHORTCODE_CONFLICT, 'shortcode': shortcode})
        return response_409(message=str(e), error_code=SHORTCODE_CONFLICT)
    except ShortcodeExhaustedError:
        logger.exception('No free shortcode found. Responding with 500.', extra={'event': SHORTCODE_EXHAUSTED})
        return response_500(error_code=SHORTCODE_EXHAUSTED)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500(error_code=DATA_STORE_UNAVAILABLE)

    # 3- Return successful response to user
    short_url = get_short_url(link.shortcode, event)
    logger.info(
        'Shortened long URL. Responding with 200.',
        extra={'event': SHORTEN_SUCCESS, 'shortcode': link.shortcode, 'reused': link.reused},
    )
    return response_200(long_url=long_url, short_url=short_url, shortcode=link.shortcode, reused=link.reused)
