"""Data models shared by the link issuer, the link resolver and the DAOs.

Classes:
    MappingRecord:
        Persisted association between a share id and a long URL.
    IssuedLink:
        Result of a successful issuance returned to the caller.
    OriginContext:
        Origin information derived from the current request.

Example:
    >>> from datetime import datetime, UTC
    >>> record = MappingRecord(
    ...     long_url='https://offshoremate.com/shared/abc123?x=1',
    ...     created_at=datetime(2025, 10, 15, tzinfo=UTC),
    ...     expires_at=datetime(2026, 1, 13, tzinfo=UTC),
    ...     schedule_id='abc123',
    ... )
    >>> record.to_dict()['scheduleId']
    'abc123'
"""

from dataclasses import dataclass
from datetime import datetime

from sharelinks.constants import UNKNOWN_SCHEDULE_ID
from sharelinks.types import MappingDocument
from sharelinks.utils.helpers import isoformat_utc


# fmt: off
@dataclass(frozen=True)
class MappingRecord:
    long_url: str                           # Original destination (absolute URL)
    created_at: datetime | None = None      # Issuance time
    expires_at: datetime | None = None      # created_at + TTL (advisory, the store enforces expiry)
    schedule_id: str = UNKNOWN_SCHEDULE_ID  # Correlation token extracted from long_url
# fmt: on

    def to_dict(self) -> MappingDocument:
        """Serialize into the stored document shape (camelCase keys, ISO-8601 timestamps)."""
        return {
            'longUrl': self.long_url,
            'createdAt': isoformat_utc(self.created_at) if self.created_at else None,
            'expiresAt': isoformat_utc(self.expires_at) if self.expires_at else None,
            'scheduleId': self.schedule_id,
        }

    @classmethod
    def from_dict(cls, document: MappingDocument) -> 'MappingRecord':
        """Deserialize a stored document.

        Only `longUrl` is mandatory. Missing or unreadable timestamps become None
        since the store, not the record, is authoritative about expiry.

        Raises:
            ValueError:
                If `longUrl` is missing or empty.
        """
        long_url = document.get('longUrl')
        if not isinstance(long_url, str) or not long_url:
            raise ValueError("Mapping document is missing 'longUrl'.")

        schedule_id = document.get('scheduleId')
        return cls(
            long_url=long_url,
            created_at=_parse_timestamp(document.get('createdAt')),
            expires_at=_parse_timestamp(document.get('expiresAt')),
            schedule_id=schedule_id if isinstance(schedule_id, str) and schedule_id else UNKNOWN_SCHEDULE_ID,
        )


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


# fmt: off
@dataclass(frozen=True)
class IssuedLink:
    short_url: str        # <base url>/s/<share id>
    share_id: str         # 8-character share identifier
    expires_at: datetime  # When the store evicts the mapping
# fmt: on

    def to_dict(self) -> MappingDocument:
        return {
            'shortUrl': self.short_url,
            'shareId': self.share_id,
            'expiresAt': isoformat_utc(self.expires_at),
        }


@dataclass(frozen=True)
class OriginContext:
    """Origin of the request currently being served.

    Attributes:
        origin (str):
            scheme://host[:port] of the request, used by the domain allow-list.
        base_url (str):
            Public base URL short links are built on. Equals `origin` except on
            default API Gateway domains, where the stage path is appended.
    """

    origin: str
    base_url: str
