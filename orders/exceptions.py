"""Error kinds raised by the orders core.

Validation and not-found signals use DRF's own ``ValidationError`` and
``NotFound``; the classes below cover storage and persistence failures. The
client-attributable storage errors map to 400, everything else to 500.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class StorageError(APIException):
    """Unexpected failure while writing or reading an uploaded file."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "File upload failed"
    default_code = "storage_error"


class InvalidFileType(StorageError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid file type. Only PDF and Word documents are allowed."
    default_code = "invalid_file_type"


class FileTooLarge(StorageError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "File too large."
    default_code = "file_too_large"


class TooManyFiles(StorageError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Too many files."
    default_code = "too_many_files"


class PersistenceError(APIException):
    """The database rejected or could not complete a write."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Database operation failed"
    default_code = "persistence_error"


class DuplicateOrderId(PersistenceError):
    default_detail = "Order id already exists"
    default_code = "duplicate_order_id"
