"""Unit tests for the data models in models.py

Test coverage includes:

1. MappingRecord
   - Ensures records are immutable.
   - Ensures to_dict() produces the camelCase stored document.
   - Ensures from_dict() restores records and tolerates missing metadata.
   - Ensures from_dict() rejects documents without a 'longUrl'.

2. IssuedLink
   - Ensures to_dict() produces the issue endpoint response body.
"""

import dataclasses
from datetime import datetime, UTC

import pytest

from sharelinks.models import IssuedLink, MappingRecord, OriginContext


CREATED_AT = datetime(2025, 10, 15, 8, 0, 0, tzinfo=UTC)
EXPIRES_AT = datetime(2026, 1, 13, 8, 0, 0, tzinfo=UTC)


@pytest.fixture
def record() -> MappingRecord:
    return MappingRecord(
        long_url='https://offshoremate.com/shared/abc123?x=1',
        created_at=CREATED_AT,
        expires_at=EXPIRES_AT,
        schedule_id='abc123',
    )


# -------------------------------
# 1. MappingRecord
# -------------------------------


def test_mapping_record_is_immutable(record):
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.long_url = 'https://evil.example/phish'


def test_mapping_record_defaults():
    record = MappingRecord(long_url='https://offshoremate.com/')
    assert record.created_at is None
    assert record.expires_at is None
    assert record.schedule_id == 'unknown'


def test_mapping_record_to_dict(record):
    assert record.to_dict() == {
        'longUrl': 'https://offshoremate.com/shared/abc123?x=1',
        'createdAt': '2025-10-15T08:00:00.000Z',
        'expiresAt': '2026-01-13T08:00:00.000Z',
        'scheduleId': 'abc123',
    }


def test_mapping_record_from_dict(record):
    assert MappingRecord.from_dict(record.to_dict()) == record


def test_mapping_record_from_dict_with_minimal_document():
    restored = MappingRecord.from_dict({'longUrl': 'https://offshoremate.com/shared/xyz'})

    assert restored.long_url == 'https://offshoremate.com/shared/xyz'
    assert restored.created_at is None
    assert restored.expires_at is None
    assert restored.schedule_id == 'unknown'


@pytest.mark.parametrize(
    'document',
    [
        {},
        {'longUrl': ''},
        {'longUrl': None},
        {'longUrl': 42},
        {'createdAt': '2025-10-15T08:00:00.000Z', 'scheduleId': 'abc123'},
    ],
)
def test_mapping_record_from_dict_requires_long_url(document):
    with pytest.raises(ValueError, match='longUrl'):
        MappingRecord.from_dict(document)


@pytest.mark.parametrize(
    'created_at, expires_at',
    [
        ('yesterday', 'soon'),
        (12345, None),
        ('', ['2026-01-13']),
    ],
)
def test_mapping_record_from_dict_with_bad_timestamps(created_at, expires_at):
    """Unreadable advisory timestamps don't invalidate a record with a long URL."""
    restored = MappingRecord.from_dict(
        {'longUrl': 'https://offshoremate.com/', 'createdAt': created_at, 'expiresAt': expires_at, 'scheduleId': 7}
    )

    assert restored.long_url == 'https://offshoremate.com/'
    assert restored.created_at is None
    assert restored.expires_at is None
    assert restored.schedule_id == 'unknown'


# -------------------------------
# 2. IssuedLink
# -------------------------------


def test_issued_link_to_dict():
    link = IssuedLink(short_url='https://offshoremate.com/s/V1StGXR8', share_id='V1StGXR8', expires_at=EXPIRES_AT)

    assert link.to_dict() == {
        'shortUrl': 'https://offshoremate.com/s/V1StGXR8',
        'shareId': 'V1StGXR8',
        'expiresAt': '2026-01-13T08:00:00.000Z',
    }


def test_origin_context_fields():
    origin = OriginContext(origin='https://offshoremate.com', base_url='https://offshoremate.com')
    assert origin.origin == origin.base_url == 'https://offshoremate.com'
