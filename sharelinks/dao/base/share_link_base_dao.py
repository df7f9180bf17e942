"""Abstract base class for share link data access objects (DAOs).

This class establishes a consistent contract for all share link DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, DynamoDB).

Responsibilities:
    - Provide an interface for storing and retrieving MappingRecord objects by share id.
    - Standardize error handling across multiple data store implementations.
    - Delegate expiry to the data store itself (no sweeping, no deletion).

Example:
    Typical usage with a datastore-specific implementation:

        >>> from sharelinks.models import MappingRecord
        >>> from sharelinks.dao.redis import ShareLinkRedisDAO

        >>> dao = ShareLinkRedisDAO(...)

        >>> record = MappingRecord(long_url="https://offshoremate.com/shared/abc123")
        >>> dao.insert("V1StGXR8", record, ttl=7_776_000)

        >>> retrieved = dao.get("V1StGXR8")
        >>> print(retrieved.long_url)
        https://offshoremate.com/shared/abc123
"""

from abc import ABC, abstractmethod

from sharelinks.models import MappingRecord
from sharelinks.constants import TTL


class ShareLinkBaseDAO(ABC):
    """Interface for share link data access objects (DAOs).

    Methods:
        insert(share_id: str, record: MappingRecord, ttl: int, **kwargs) -> ShareLinkBaseDAO:
            Store a MappingRecord under a share id, expiring after `ttl` seconds.
            Overwrites any record previously stored under the same share id.
            Raises DataStoreError on connection or write failure.

        get(share_id: str, **kwargs) -> MappingRecord:
            Retrieve the MappingRecord stored under a share id.
            Raises ShareLinkNotFoundError if absent (never written or expired).
            Raises CorruptRecordError if the stored record can't be decoded.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShareLinkRedisDAO) must extend
        this class and implement all abstract methods.

    NOTE:
        - Mappings are expected to expire automatically. The DAO does not
          provide an interface to update, list or delete entries.
    """

    @abstractmethod
    def insert(self, share_id: str, record: MappingRecord, ttl: int = TTL.NINETY_DAYS, **kwargs) -> 'ShareLinkBaseDAO':
        """Store a MappingRecord under a share id.

        Args:
            share_id (str):
                The share id addressing the record.

            record (MappingRecord):
                The MappingRecord instance to be stored.

            ttl (int):
                Seconds after which the data store evicts the record.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShareLinkBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, share_id: str, **kwargs) -> MappingRecord:
        """Retrieve a MappingRecord from the data store by its share id.

        Args:
            share_id (str):
                The share id of the MappingRecord to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            MappingRecord: The stored MappingRecord instance.

        Raises:
            ShareLinkNotFoundError:
                If no MappingRecord is stored under the given share id.

            CorruptRecordError:
                If the stored MappingRecord is malformed.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
