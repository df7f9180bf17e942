"""Link resolver: turn a share id back into the long URL it was issued for."""

import logging

from sharelinks.exceptions import LinkNotFoundError
from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.exceptions import ShareLinkNotFoundError
from sharelinks.utils.shortener import is_valid_share_id


logger = logging.getLogger(__name__)


class LinkResolver:
    """Resolve share ids against the shared store.

    Every failure (malformed id, unknown or expired id, corrupt record, store
    outage) surfaces as LinkNotFoundError: the caller either redirects or
    shows the not found page. Resolution never writes to the store.

    Example:
        >>> resolver = LinkResolver(dao)
        >>> resolver.resolve('V1StGXR8')
        'https://offshoremate.com/shared/abc123'
        >>> resolver.resolve('short_1')
        Traceback (most recent call last):
            ...
        sharelinks.exceptions.LinkNotFoundError: Malformed share id.
    """

    def __init__(self, dao: ShareLinkBaseDAO):
        self.dao = dao

    def resolve(self, share_id: object) -> str:
        # Malformed ids never reach the store
        if not is_valid_share_id(share_id):
            raise LinkNotFoundError('Malformed share id.')

        try:
            record = self.dao.get(share_id)
        except ShareLinkNotFoundError as e:
            raise LinkNotFoundError(f"Share link '{share_id}' doesn't exist or has expired.") from e
        except Exception as e:
            logger.warning(
                'Failed to look up share link, treating it as not found.',
                exc_info=True,
                extra={'shareId': share_id, 'errorType': type(e).__name__},
            )
            raise LinkNotFoundError(f"Share link '{share_id}' could not be looked up.") from e

        return record.long_url
