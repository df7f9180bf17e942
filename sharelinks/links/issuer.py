"""Link issuer: turn a long schedule URL into a short, expiring share link.

Classes:
    LinkIssuer:
        Validate a long URL, allocate a share id, persist the mapping record
        and confirm it is readable before handing out the short URL.

Functions:
    extract_schedule_id(long_url) -> str:
        Pull the schedule id following '/shared/' out of a long URL.
    require_long_url(long_url) -> str:
        Check the long URL is a non-empty string.
    require_allowed_domain(long_url, origin, allow_list) -> None:
        Check the long URL against the domain allow-list.
"""

import logging
from datetime import datetime, timedelta, UTC
from collections.abc import Callable

from sharelinks.constants import TTL, SHARED_PATH_MARKER, UNKNOWN_SCHEDULE_ID
from sharelinks.exceptions import DisallowedDomainError, InvalidLongURLError
from sharelinks.models import IssuedLink, MappingRecord, OriginContext
from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.exceptions import CorruptRecordError, ShareLinkNotFoundError, WriteVerificationError
from sharelinks.links.allow_list import is_allowed_domain
from sharelinks.utils.config import AllowListConfig
from sharelinks.utils.helpers import get_short_url
from sharelinks.utils.shortener import generate_share_id


logger = logging.getLogger(__name__)


def extract_schedule_id(long_url: str) -> str:
    """Return the path segment following '/shared/' up to the query string.

    Example:
        >>> extract_schedule_id('https://offshoremate.com/shared/abc123?x=1')
        'abc123'
        >>> extract_schedule_id('https://offshoremate.com/')
        'unknown'
    """
    _, marker, tail = long_url.partition(SHARED_PATH_MARKER)
    if not marker:
        return UNKNOWN_SCHEDULE_ID
    segment = tail.split(SHARED_PATH_MARKER, 1)[0].split('?', 1)[0]
    return segment or UNKNOWN_SCHEDULE_ID


def require_long_url(long_url: object) -> str:
    """Return `long_url` if it is a non-empty string.

    Raises:
        InvalidLongURLError: If the long URL is missing, empty or not a string.
    """
    if not isinstance(long_url, str) or not long_url:
        raise InvalidLongURLError('Invalid or missing longUrl')
    return long_url


def require_allowed_domain(long_url: str, origin: OriginContext, allow_list: AllowListConfig) -> None:
    """Raise DisallowedDomainError unless `long_url` passes the domain allow-list."""
    if not is_allowed_domain(long_url, origin.origin, allow_list):
        logger.info('Rejected long URL outside the domain allow-list.', extra={'origin': origin.origin})
        raise DisallowedDomainError('Invalid URL domain')


class LinkIssuer:
    """Issue share links backed by a time-bounded mapping record.

    The issuer holds no state between calls; the DAO is the only shared resource.

    Attributes:
        dao (ShareLinkBaseDAO):
            Store client receiving the mapping records.
        allow_list (AllowListConfig):
            Extra origins/hostnames long URLs may point to.
        ttl (int):
            Record lifetime in seconds (90 days).
        id_generator (Callable[[], str]):
            Share id source, `generate_share_id` by default.

    Example:
        >>> issuer = LinkIssuer(dao, AllowListConfig(production_hostnames=('offshoremate.com',)))
        >>> link = issuer.issue('https://offshoremate.com/shared/abc123', origin_context)
        >>> link.short_url
        'https://offshoremate.com/s/V1StGXR8'
    """

    def __init__(
        self,
        dao: ShareLinkBaseDAO,
        allow_list: AllowListConfig | None = None,
        ttl: int = TTL.NINETY_DAYS,
        id_generator: Callable[[], str] = generate_share_id,
    ):
        self.dao = dao
        self.allow_list = allow_list or AllowListConfig()
        self.ttl = ttl
        self.id_generator = id_generator

    def issue(self, long_url: object, origin: OriginContext) -> IssuedLink:
        """Shorten `long_url` into a share link.

        Procedure:
        - Step 1: Validate the long URL is a non-empty string
        - Step 2: Validate the long URL against the domain allow-list
        - Step 3: Generate a share id (collisions are not checked, last write wins)
        - Step 4: Build the mapping record (created_at, expires_at = created_at + TTL, schedule id)
        - Step 5: Store the record with a store-level expiry equal to the TTL
        - Step 6: Read the record back to confirm the write
        - Step 7: Return the short URL, the share id and the expiry

        Args:
            long_url (object):
                Long schedule URL received from the client.
            origin (OriginContext):
                Origin of the current request.

        Returns:
            IssuedLink: short URL, share id and expiry of the new link.

        Raises:
            InvalidLongURLError:
                If the long URL is missing, empty or not a string.
            DisallowedDomainError:
                If the long URL fails the domain allow-list.
            DataStoreError:
                If the store fails to write or confirm the record.
        """
        long_url = require_long_url(long_url)
        require_allowed_domain(long_url, origin, self.allow_list)

        share_id = self.id_generator()
        created_at = datetime.now(UTC)
        record = MappingRecord(
            long_url=long_url,
            created_at=created_at,
            expires_at=created_at + timedelta(seconds=self.ttl),
            schedule_id=extract_schedule_id(long_url),
        )

        logger.debug('Storing share link mapping.', extra={'shareId': share_id, 'scheduleId': record.schedule_id})
        self.dao.insert(share_id, record, ttl=self.ttl)
        self._verify(share_id, record)

        return IssuedLink(
            short_url=get_short_url(share_id, origin.base_url),
            share_id=share_id,
            expires_at=record.expires_at,
        )

    def _verify(self, share_id: str, record: MappingRecord) -> None:
        """Read a just-written record back, catching writes the store silently dropped."""
        try:
            stored = self.dao.get(share_id)
        except (ShareLinkNotFoundError, CorruptRecordError) as e:
            raise WriteVerificationError(f"Share link '{share_id}' is not readable after write.") from e

        if stored.long_url != record.long_url:
            raise WriteVerificationError(f"Share link '{share_id}' was overwritten right after write.")
        logger.debug('Verified share link mapping.', extra={'shareId': share_id})
