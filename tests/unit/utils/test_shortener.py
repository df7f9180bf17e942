"""Unit tests for share id generation and validation in shortener.py.

Test coverage includes:

1. generate_share_id() output format
   - Ensures ids are 8 characters long by default.
   - Ensures every character belongs to the URL-safe alphabet.
   - Ensures the 'length' argument is respected.

2. Randomness
   - Ensures consecutive ids are independent (no repeats in a large sample).
   - Ensures ids are drawn from the `secrets` module.

3. Error handling
   - Ensures invalid lengths raise the appropriate exceptions.

4. is_valid_share_id() shape checks
"""

from unittest.mock import patch

import pytest

from sharelinks.utils import generate_share_id, is_valid_share_id
from sharelinks.utils.shortener import ALPHABET, SHARE_ID_LENGTH


# -------------------------------
# 1. Output format
# -------------------------------


def test_generate_share_id_default_length():
    """Ensure generated ids are 8 characters long by default."""
    assert SHARE_ID_LENGTH == 8
    assert len(generate_share_id()) == 8


def test_generate_share_id_alphabet():
    """Ensure all characters belong to [A-Za-z0-9_-]."""
    for _ in range(200):
        share_id = generate_share_id()
        assert all(char in ALPHABET for char in share_id)
        assert is_valid_share_id(share_id)


def test_alphabet_is_url_safe():
    assert len(ALPHABET) == 64
    assert set(ALPHABET) - set('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_') == set()


@pytest.mark.parametrize('length', [1, 5, 12, 21])
def test_generate_share_id_custom_length(length):
    """Ensure the 'length' argument is respected."""
    assert len(generate_share_id(length)) == length


# -------------------------------
# 2. Randomness
# -------------------------------


def test_generate_share_id_is_not_repeating():
    """Ensure a large sample of ids holds no duplicates."""
    sample = {generate_share_id() for _ in range(5_000)}
    assert len(sample) == 5_000


def test_generate_share_id_uses_secrets():
    """Ensure ids come from the cryptographically strong `secrets` module."""
    with patch('sharelinks.utils.shortener.secrets.choice', return_value='Z') as choice:
        assert generate_share_id() == 'ZZZZZZZZ'
    assert choice.call_count == 8


# -------------------------------
# 3. Error handling
# -------------------------------


@pytest.mark.parametrize('length', ['8', 8.0, None])
def test_generate_share_id_invalid_length_type(length):
    with pytest.raises(TypeError):
        generate_share_id(length)


@pytest.mark.parametrize('length', [0, -1])
def test_generate_share_id_non_positive_length(length):
    with pytest.raises(ValueError, match='Length must be a positive integer'):
        generate_share_id(length)


# -------------------------------
# 4. Shape checks
# -------------------------------


@pytest.mark.parametrize('value', ['V1StGXR8', 'abc-_123', '________', 'ZZZZZZZZ'])
def test_is_valid_share_id(value):
    assert is_valid_share_id(value) is True


@pytest.mark.parametrize(
    'value',
    [
        'short_1',  # 7 characters
        'toolong_1',  # 9 characters
        'abc 1234',  # whitespace
        'abc/1234',  # path separator
        'abc.1234',  # dot
        'abcdefg\n',  # trailing newline
        'ábcdefgh',  # non-ASCII letter
        '',
        None,
        12345678,
    ],
)
def test_is_valid_share_id_rejects_malformed_values(value):
    assert is_valid_share_id(value) is False
