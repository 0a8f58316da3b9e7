"""File store for documents uploaded with an order.

Files are written below ``settings.ORDER_UPLOAD_ROOT`` using a generated
storage name (millisecond timestamp, random UUID, and the original
extension when it is short and alphanumeric), so two customers uploading
``document.pdf`` at the same time never overwrite each other. The
client-supplied name is only kept for display and download headers.
"""

import logging
import os
import re
import time
import uuid
from dataclasses import dataclass
from datetime import datetime

from django.conf import settings
from django.core.files.storage import FileSystemStorage
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from .exceptions import FileTooLarge, InvalidFileType, StorageError, TooManyFiles

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "orders"

# Extensions outside this shape are dropped from the storage name.
EXTENSION_RE = re.compile(r"\.[a-z0-9]{1,10}")


@dataclass(frozen=True)
class StoredFile:
    """A file written to the store, ready to be attached to an order."""

    name: str
    original_name: str
    size: int
    type: str
    path: str
    upload_date: datetime


def _storage_name(filename: str) -> str:
    _, ext = os.path.splitext(filename or "")
    ext = ext.lower()
    if not EXTENSION_RE.fullmatch(ext):
        ext = ""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{ext}"


def _megabytes(size: int) -> str:
    return f"{size / (1024 * 1024):g}MB"


class OrderFileStore:
    """Save, open, and delete order documents on a Django storage backend."""

    def __init__(self, storage=None, max_file_size=None, max_files=None, allowed_types=None):
        self.storage = storage or FileSystemStorage(location=settings.ORDER_UPLOAD_ROOT)
        self.max_file_size = (
            max_file_size if max_file_size is not None else settings.ORDER_MAX_FILE_SIZE
        )
        self.max_files = max_files if max_files is not None else settings.ORDER_MAX_FILES
        self.allowed_types = frozenset(allowed_types or settings.ORDER_ALLOWED_CONTENT_TYPES)

    def check(self, uploads) -> None:
        """Validate a whole batch of uploads before anything is written."""
        if not uploads:
            raise ValidationError({"files": "At least one file is required"})
        if len(uploads) > self.max_files:
            raise TooManyFiles(f"Too many files. Maximum {self.max_files} files allowed.")
        for upload in uploads:
            content_type = (getattr(upload, "content_type", "") or "").lower()
            if content_type not in self.allowed_types:
                logger.info("Rejected upload %r with type %r", upload.name, content_type)
                raise InvalidFileType()
            if (upload.size or 0) > self.max_file_size:
                raise FileTooLarge(
                    f"File too large. Maximum size is {_megabytes(self.max_file_size)}."
                )

    def save(self, upload) -> StoredFile:
        locator = f"{UPLOAD_PREFIX}/{_storage_name(upload.name)}"
        try:
            saved = self.storage.save(locator, upload)
        except OSError as exc:
            raise StorageError("File upload failed") from exc

        logger.info("Stored upload %r as %s", upload.name, saved)
        return StoredFile(
            name=os.path.basename(saved),
            original_name=upload.name,
            size=upload.size,
            type=upload.content_type,
            path=saved,
            upload_date=timezone.now(),
        )

    def exists(self, locator: str) -> bool:
        return bool(locator) and self.storage.exists(locator)

    def open(self, locator: str):
        """Open a stored file for binary reading."""
        if not self.exists(locator):
            raise NotFound("File not found on disk")
        return self.storage.open(locator, "rb")

    def delete(self, locator: str) -> None:
        """Remove a stored file; missing files are ignored."""
        if locator:
            self.storage.delete(locator)
