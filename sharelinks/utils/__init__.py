from sharelinks.utils.config import app_env, app_name, load_config, load_config_file, RedisConfig, AllowListConfig
from sharelinks.utils.helpers import request_origin, base_url, get_short_url, isoformat_utc, require_environment
from sharelinks.utils.shortener import generate_share_id, is_valid_share_id
from sharelinks.utils.logging import initialize_logging


__all__ = [
    'generate_share_id',
    'is_valid_share_id',
    'app_env',
    'app_name',
    'load_config',
    'load_config_file',
    'RedisConfig',
    'AllowListConfig',
    'request_origin',
    'base_url',
    'get_short_url',
    'isoformat_utc',
    'require_environment',
    'initialize_logging',
]
