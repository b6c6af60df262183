"""
Key/value backing stores for the dashboard document.

A backing store holds opaque text values under string keys, the way
browser local storage does. The document store keeps its whole document
in a single key; nothing here knows about the document's shape.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    Abstract text key/value store.

    Subclasses must implement get, set and remove. Write failures are
    raised to the caller unchanged.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key. Removing a missing key is not an error."""

    def close(self) -> None:
        """Release any held resources."""


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store backed by a dict. Used in tests and demos."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """
    Store that keeps each key in its own file under a directory.

    Each value is written to <directory>/<key>.json in full on every set.
    There is no partial-write recovery: a failed write raises OSError.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        """
        Initialize store rooted at directory.

        Args:
            directory: Folder holding one file per key. Created on first write.
        """
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not key or '/' in key or '\\' in key or key.startswith('.'):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding='utf-8')

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_text(value, encoding='utf-8')
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
