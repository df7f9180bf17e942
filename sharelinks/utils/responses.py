"""API Gateway (Lambda proxy) response builders shared by the Lambda handlers.

JSON error bodies follow the `{"error": "<message>"}` contract consumed by
the front-end share action. JSON responses carry CORS headers so a cross-origin
front end can read error messages as well as results.
"""

import json


JSON_HEADERS = {'Content-Type': 'application/json'}

# TODO: restrict to the front-end origin once the share modal is served from the same domain
CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST',
}

NOT_FOUND_PAGE = """<!DOCTYPE html>
<html lang="en">
  <head><meta charset="utf-8"><title>404: This page could not be found.</title></head>
  <body><h1>404</h1><p>This page could not be found.</p></body>
</html>
"""


def response_200(body: dict) -> dict:
    return {
        'statusCode': 200,
        'headers': {**JSON_HEADERS, **CORS_HEADERS},
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': '',  # no body needed for redirects
    }


def response_400(message: str, error_code: str | None = None) -> dict:
    body = {'error': message}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'headers': {**JSON_HEADERS, **CORS_HEADERS},
        'body': json.dumps(body),
    }


def response_404() -> dict:
    return {
        'statusCode': 404,
        'headers': {'Content-Type': 'text/html; charset=utf-8'},
        'body': NOT_FOUND_PAGE,
    }


def response_405(*, allow: str) -> dict:
    return {
        'statusCode': 405,
        'headers': {**JSON_HEADERS, **CORS_HEADERS, 'Allow': allow},
        'body': json.dumps({'error': 'Method not allowed'}),
    }


def response_500(error_code: str | None = None) -> dict:
    # The message is intentionally generic: store details stay in the logs
    body = {'error': 'Internal Server Error'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 500,
        'headers': {**JSON_HEADERS, **CORS_HEADERS},
        'body': json.dumps(body),
    }
