"""Storage protocol for swappable byte-record backends.

The storage layer only moves bytes under well-known record names:
- Local in-memory (default, tests)
- JSON files in a directory (durable)

Usage:
    backend = LocalStorage()
    adapter = PersistenceAdapter(backend)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

ACCOUNTS_RECORD = "adminflow_users"
TASKS_RECORD = "adminflow_tasks"
SESSION_RECORD = "adminflow_user"
TOKEN_RECORD = "adminflow_token"


class Storage(Protocol):
    """Abstract byte-record storage. Implementations handle durability."""

    def read(self, name: str) -> bytes | None:
        """Return the record's bytes, or None if it was never written."""
        ...

    def write(self, records: Mapping[str, bytes]) -> None:
        """Write every given record in one call."""
        ...

    def delete(self, name: str) -> None:
        """Remove a record. Missing records are ignored."""
        ...
