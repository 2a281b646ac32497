"""Storage backends and the collection persistence adapter."""

from adminflow.storage.adapter import PersistenceAdapter
from adminflow.storage.file import FileStorage
from adminflow.storage.local import LocalStorage
from adminflow.storage.protocol import (
    ACCOUNTS_RECORD,
    SESSION_RECORD,
    TASKS_RECORD,
    TOKEN_RECORD,
    Storage,
)

__all__ = [
    "Storage",
    "LocalStorage",
    "FileStorage",
    "PersistenceAdapter",
    "ACCOUNTS_RECORD",
    "TASKS_RECORD",
    "SESSION_RECORD",
    "TOKEN_RECORD",
]
