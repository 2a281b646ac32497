"""Local in-memory storage implementation.

Simple dict-based storage suitable for single-process use and testing.
Contents are lost when the process exits.

Usage:
    backend = LocalStorage()
    store = EntityStore(PersistenceAdapter(backend))
"""

from __future__ import annotations

from collections.abc import Mapping


class LocalStorage:
    """In-memory byte records keyed by name.

    Args:
        records: Optional initial records, copied on construction.
    """

    def __init__(self, records: Mapping[str, bytes] | None = None):
        """Initialize local storage.

        Args:
            records: Optional initial records, copied on construction.
        """
        self._records: dict[str, bytes] = dict(records or {})

    def read(self, name: str) -> bytes | None:
        """Get a record.

        Args:
            name: Record name.

        Returns:
            Stored bytes or None if absent.
        """
        return self._records.get(name)

    def write(self, records: Mapping[str, bytes]) -> None:
        """Store all records at once.

        Args:
            records: Record name -> bytes.
        """
        self._records.update(records)

    def delete(self, name: str) -> None:
        """Remove a record if present.

        Args:
            name: Record name.
        """
        self._records.pop(name, None)
