"""JSON file storage implementation.

Each record lives in ``<directory>/<name>.json``. Writes go to a temporary
sibling file first and are moved into place with ``os.replace``, so a reader
never observes a half-written record.

Usage:
    backend = FileStorage("~/.adminflow")
    store = EntityStore(PersistenceAdapter(backend))
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from adminflow.errors import StorageError

logger = logging.getLogger(__name__)


class FileStorage:
    """Byte records stored as files in one directory.

    Args:
        directory: Directory holding the record files; created if missing.
    """

    def __init__(self, directory: str | Path):
        """Initialize file storage.

        Args:
            directory: Directory holding the record files; created if missing.
        """
        self._directory = Path(directory).expanduser()
        self._directory.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        return self._directory / f"{name}.json"

    def read(self, name: str) -> bytes | None:
        """Read a record file.

        Args:
            name: Record name.

        Returns:
            File contents, or None if the record was never written.

        Raises:
            StorageError: If the file exists but cannot be read.
        """
        path = self._path(name)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"cannot read record {name!r} from {path}") from e

    def write(self, records: Mapping[str, bytes]) -> None:
        """Write every record through a temporary file.

        All temporary files are written before any of them replaces its
        target. If a replace fails part way, the records already replaced
        are put back to their previous contents, so readers see either the
        old set of records or the new one.

        Args:
            records: Record name -> bytes.

        Raises:
            StorageError: If any record cannot be written.
        """
        staged: list[tuple[Path, Path]] = []
        previous: dict[Path, bytes | None] = {}
        committed: list[Path] = []
        try:
            for name, data in records.items():
                target = self._path(name)
                tmp = target.with_suffix(".json.tmp")
                tmp.write_bytes(data)
                staged.append((tmp, target))
            for _, target in staged:
                previous[target] = _read_if_exists(target)
            for tmp, target in staged:
                os.replace(tmp, target)
                committed.append(target)
        except OSError as e:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            self._restore(committed, previous)
            raise StorageError(f"cannot write records to {self._directory}") from e
        logger.debug("Wrote records %s to %s", sorted(records), self._directory)

    def _restore(self, committed: list[Path], previous: Mapping[Path, bytes | None]) -> None:
        for target in committed:
            try:
                old = previous[target]
                if old is None:
                    target.unlink(missing_ok=True)
                else:
                    target.write_bytes(old)
            except OSError:
                logger.exception("Could not restore %s after a failed write", target)
        if committed:
            logger.warning("Rolled back %d record(s) in %s", len(committed), self._directory)

    def delete(self, name: str) -> None:
        """Remove a record file if present.

        Args:
            name: Record name.
        """
        self._path(name).unlink(missing_ok=True)


def _read_if_exists(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
