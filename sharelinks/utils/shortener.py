"""Share id generation utility

This module provides helpers for generating and validating the short, random
identifiers that address share links.

Functions:
    generate_share_id(length=8):
        Generate a random URL-safe identifier suitable for use as a URL slug.
    is_valid_share_id(value, length=8):
        Check whether a value has the shape of a share id.

Example:
    >>> from sharelinks.utils import generate_share_id, is_valid_share_id
    >>> share_id = generate_share_id()
    >>> len(share_id)
    8
    >>> is_valid_share_id(share_id)
    True
    >>> is_valid_share_id('short_1')
    False
"""

import re
import secrets
import string


ALPHABET = string.ascii_letters + string.digits + '-_'
SHARE_ID_LENGTH = 8
SHARE_ID_PATTERN = re.compile(rf'[A-Za-z0-9_-]{{{SHARE_ID_LENGTH}}}')


def generate_share_id(length: int = SHARE_ID_LENGTH) -> str:
    """Generate a random, URL-safe share id.

    Every character is drawn independently from a 64-symbol alphabet
    (A-Z, a-z, 0-9, '-', '_') with the cryptographically strong `secrets`
    module. No counter and no coordination between callers is involved.

    Args:
        length (int, optional):
            Number of characters in the resulting id.
            Defaults to 8.

    Returns:
        str: A random identifier, e.g. 'V1StGXR8'.

    NOTE:
        - Ids are not checked for collisions before use. With 64^8 (~2.8 * 10^14)
          possible values and links expiring after 90 days the risk is accepted:
          a collision overwrites the older mapping (last write wins).
    """
    if not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def is_valid_share_id(value: object, length: int = SHARE_ID_LENGTH) -> bool:
    """Return True if `value` is exactly `length` characters from the share id alphabet."""
    if not isinstance(value, str) or len(value) != length:
        return False
    if length == SHARE_ID_LENGTH:
        return SHARE_ID_PATTERN.fullmatch(value) is not None
    return all(char in ALPHABET for char in value)
