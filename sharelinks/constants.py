from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Share link TTL duration (data retention period) (90 days in seconds)
    NINETY_DAYS = 7_776_000  # 60 * 60 * 24 * 90


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Path marker preceding the schedule id inside a long URL
SHARED_PATH_MARKER = '/shared/'
# Fallback schedule id when the long URL carries none
UNKNOWN_SCHEDULE_ID = 'unknown'
# Path segment preceding the share id inside a short URL
SHORT_URL_PATH = '/s/'

# Fallback host when a request carries no host information
DEFAULT_HOST = 'localhost:3000'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
