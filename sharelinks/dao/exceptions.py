"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShareLinkNotFoundError:
        Raised when no mapping record exists for a share id (never written or expired).

    CorruptRecordError:
        Raised when a stored mapping record can't be decoded.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

    WriteVerificationError:
        Raised when a just-written mapping record can't be read back.

Example:
    >>> from sharelinks.dao.exceptions import ShareLinkNotFoundError
    >>> raise ShareLinkNotFoundError("Share link with id 'V1StGXR8' not found.")
    Traceback (most recent call last):
        ...
    sharelinks.dao.exceptions.ShareLinkNotFoundError: Share link with id 'V1StGXR8' not found.
"""

from sharelinks.exceptions import SharelinksError


class DAOError(SharelinksError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShareLinkNotFoundError(DAOError):
    """Raised when a MappingRecord is not found in the data store."""

    error_code = 'dao:share_link_not_found_error'


class CorruptRecordError(DAOError):
    """Raised when a stored MappingRecord is malformed (e.g. missing 'longUrl')."""

    error_code = 'dao:corrupt_record_error'


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, and out-of-memory failures.
    """

    error_code = 'dao:data_store_error'


class WriteVerificationError(DataStoreError):
    """Raised when a write was acknowledged but the record can't be read back."""

    error_code = 'dao:write_verification_error'
