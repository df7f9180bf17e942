# Log event / error codes emitted by the issue_link Lambda
METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_LONG_URL = 'INVALID_LONG_URL'
DISALLOWED_DOMAIN = 'DISALLOWED_DOMAIN'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
LINK_ISSUED = 'LINK_ISSUED'
