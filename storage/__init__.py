"""Storage backends.

``SqlStorage`` lives in ``storage.sql_storage`` and is imported on demand,
since it depends on the ORM models which in turn import ``storage.records``.
"""

from flask import current_app

from .abstract_storage import AbstractStorage
from .errors import DuplicateEmailError, StorageError
from .memory_storage import MemoryStorage

EXTENSION_KEY = "storage"


def get_storage() -> AbstractStorage:
    """Return the storage backend bound to the current application."""

    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "AbstractStorage",
    "DuplicateEmailError",
    "MemoryStorage",
    "StorageError",
    "get_storage",
]
