from sharelinks.links.allow_list import is_allowed_domain
from sharelinks.links.issuer import LinkIssuer, extract_schedule_id, require_long_url, require_allowed_domain
from sharelinks.links.resolver import LinkResolver


__all__ = [
    'is_allowed_domain',
    'extract_schedule_id',
    'require_long_url',
    'require_allowed_domain',
    'LinkIssuer',
    'LinkResolver',
]
