"""Persistence adapter: accounts and tasks to and from byte records.

Usage:
    adapter = PersistenceAdapter(LocalStorage())
    adapter.save(accounts, tasks)
    accounts, tasks = adapter.load()
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from adminflow.core.entity import Account, Task
from adminflow.errors import StorageError
from adminflow.storage.local import LocalStorage
from adminflow.storage.protocol import ACCOUNTS_RECORD, TASKS_RECORD, Storage

T = TypeVar("T")


def encode_records(items: Sequence[Account] | Sequence[Task]) -> bytes:
    """Serialize a collection to a UTF-8 JSON array."""
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False).encode("utf-8")


def decode_records(name: str, data: bytes, factory: Callable[[dict[str, Any]], T]) -> list[T]:
    """Parse a JSON array record into entities.

    Args:
        name: Record name, for error messages.
        data: Raw record bytes.
        factory: Builds one entity from one decoded object.

    Returns:
        Decoded entities in stored order.

    Raises:
        StorageError: If the record is not a JSON array of valid entities.
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StorageError(f"record {name!r} is not valid JSON") from e
    if not isinstance(raw, list):
        raise StorageError(f"record {name!r} must hold a JSON array")
    try:
        return [factory(item) for item in raw]
    except (KeyError, TypeError, ValueError) as e:
        raise StorageError(f"record {name!r} holds a malformed entry: {e}") from e


class PersistenceAdapter:
    """Loads and saves both collections through a byte-record backend.

    Args:
        storage: Backend to use (default: fresh LocalStorage).
    """

    def __init__(self, storage: Storage | None = None):
        self._storage = storage or LocalStorage()

    @property
    def storage(self) -> Storage:
        return self._storage

    def load(self) -> tuple[list[Account], list[Task]]:
        """Read both collections.

        Returns:
            (accounts, tasks); a never-written record loads as an empty list.

        Raises:
            StorageError: If a stored record cannot be decoded.
        """
        accounts_raw = self._storage.read(ACCOUNTS_RECORD)
        tasks_raw = self._storage.read(TASKS_RECORD)
        accounts = (
            decode_records(ACCOUNTS_RECORD, accounts_raw, Account.from_dict)
            if accounts_raw is not None
            else []
        )
        tasks = (
            decode_records(TASKS_RECORD, tasks_raw, Task.from_dict) if tasks_raw is not None else []
        )
        return accounts, tasks

    def save(self, accounts: Sequence[Account], tasks: Sequence[Task]) -> None:
        """Write both collections together.

        Both records are encoded before the backend sees either one.

        Args:
            accounts: Full account collection.
            tasks: Full task collection.
        """
        records = {
            ACCOUNTS_RECORD: encode_records(accounts),
            TASKS_RECORD: encode_records(tasks),
        }
        self._storage.write(records)
