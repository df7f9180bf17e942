"""Data Access Object (DAO) implementation for managing share links in Redis

This module provides a Redis-based implementation of ShareLinkBaseDAO for storing
and retrieving MappingRecord instances.

Responsibilities:
    - Store mapping records as JSON documents under `share:<share id>` with a TTL;
    - Retrieve and decode mapping records;
    - Leave expiry entirely to Redis (no sweeping, no deletion);
    - Translate Redis failures and unreadable values into DAO exceptions.

Classes:
    ShareLinkRedisDAO:
        DAO for storing and retrieving MappingRecord in a Redis datastore.

Example:
    >>> from sharelinks.models import MappingRecord
    >>> from sharelinks.dao.redis import ShareLinkRedisDAO

    >>> dao = ShareLinkRedisDAO(redis_host="localhost")

    >>> record = MappingRecord(long_url="https://offshoremate.com/shared/abc123")
    >>> dao.insert("V1StGXR8", record, ttl=7_776_000)
    <ShareLinkRedisDAO>

    >>> dao.get("V1StGXR8").long_url
    'https://offshoremate.com/shared/abc123'
"""

import json

from beartype import beartype

from sharelinks.constants import TTL
from sharelinks.models import MappingRecord
from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.redis.mixins import RedisClientMixin
from sharelinks.dao.redis.helpers import handle_redis_connection_error
from sharelinks.dao.exceptions import CorruptRecordError, DataStoreError, ShareLinkNotFoundError


class ShareLinkRedisDAO(RedisClientMixin, ShareLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing share link mappings

    This class implements the ShareLinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(share_id: str, record: MappingRecord, ttl: int, **kwargs) -> ShareLinkRedisDAO:
            SET the JSON-encoded record with an expiry of `ttl` seconds.
            Raises DataStoreError on connectivity issues with Redis.

        get(share_id: str, **kwargs) -> MappingRecord:
            GET and decode the record stored under a share id.
            Raises ShareLinkNotFoundError when the key doesn't exist (or expired).
            Raises CorruptRecordError when the stored value can't be decoded.
            Raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, share_id: str, record: MappingRecord, ttl: int = TTL.NINETY_DAYS, **kwargs) -> 'ShareLinkRedisDAO':
        """Store a share link mapping in Redis

        A single SET ... EX command is issued, so the write is atomic and Redis
        owns the expiry. An existing record under the same key is overwritten
        (last write wins).

        Args:
            share_id (str):
                Share id addressing the record.
            record (MappingRecord):
                MappingRecord instance to store.
            ttl (int):
                Seconds until Redis evicts the record.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShareLinkRedisDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If Redis doesn't acknowledge the write or a Redis connection issue occurs.

        Example:
            >>> dao.insert('V1StGXR8', MappingRecord(long_url='https://offshoremate.com/shared/abc123'))
            <ShareLinkRedisDAO>
        """
        if ttl <= 0:
            raise ValueError(f'TTL must be a positive integer (given value: {ttl}).')

        share_key = self.keys.share_key(share_id)
        acknowledged = self.redis.set(share_key, json.dumps(record.to_dict()), ex=ttl)
        if not acknowledged:
            raise DataStoreError(f"Redis did not acknowledge the write for share id '{share_id}'.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, share_id: str, **kwargs) -> MappingRecord:
        """Retrieve a stored share link mapping by share id

        Args:
            share_id (str):
                The share id of the mapping record.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            MappingRecord:
                The retrieved MappingRecord instance if found.

        Raises:
            ShareLinkNotFoundError:
                If the share link does not exist in Redis (never written or expired).
            CorruptRecordError:
                If the stored value is not a JSON object with a 'longUrl'.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('V1StGXR8')
            MappingRecord(long_url='https://offshoremate.com/shared/abc123', ...)
        """
        raw = self.redis.get(self.keys.share_key(share_id))
        if raw is None:
            raise ShareLinkNotFoundError(f"Share link with id '{share_id}' not found.")

        try:
            document = json.loads(raw)
            if not isinstance(document, dict):
                raise ValueError('Mapping document is not a JSON object.')
            return MappingRecord.from_dict(document)
        except (TypeError, ValueError) as e:
            raise CorruptRecordError(f"Share link with id '{share_id}' holds a malformed record.") from e
