import json
from datetime import datetime, timedelta, UTC

import pytest
from pytest import MonkeyPatch

from sharelinks.constants import TTL
from sharelinks.models import MappingRecord, OriginContext
from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.exceptions import CorruptRecordError, ShareLinkNotFoundError


class InMemoryShareLinkDAO(ShareLinkBaseDAO):
    """Store double honoring the set-with-expiry / get contract of the shared store.

    Records are kept JSON-encoded (as in Redis) together with their eviction
    deadline. Every access is counted so tests can assert store traffic.
    """

    def __init__(self):
        self.entries: dict[str, tuple[str, datetime]] = {}
        self.reads = 0
        self.writes = 0

    @staticmethod
    def key(share_id: str) -> str:
        return f'share:{share_id}'

    def insert(self, share_id: str, record: MappingRecord, ttl: int = TTL.NINETY_DAYS, **kwargs) -> 'InMemoryShareLinkDAO':
        self.writes += 1
        self.entries[self.key(share_id)] = (json.dumps(record.to_dict()), datetime.now(UTC) + timedelta(seconds=ttl))
        return self

    def get(self, share_id: str, **kwargs) -> MappingRecord:
        self.reads += 1
        entry = self.entries.get(self.key(share_id))
        if entry is None or datetime.now(UTC) >= entry[1]:
            raise ShareLinkNotFoundError(f"Share link with id '{share_id}' not found.")
        try:
            return MappingRecord.from_dict(json.loads(entry[0]))
        except ValueError as e:
            raise CorruptRecordError(str(e)) from e

    @property
    def accesses(self) -> int:
        return self.reads + self.writes


@pytest.fixture
def store() -> InMemoryShareLinkDAO:
    return InMemoryShareLinkDAO()


@pytest.fixture
def origin() -> OriginContext:
    return OriginContext(origin='https://example.com', base_url='https://example.com')


@pytest.fixture(autouse=True)
def _not_running_locally(monkeypatch: MonkeyPatch) -> None:
    """Keep guarantee_*_response decorators in their deployed behavior."""
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
    monkeypatch.setenv('APP_ENV', 'test')
