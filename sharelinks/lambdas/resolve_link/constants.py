# Log event codes emitted by the resolve_link Lambda
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
