# artcert/worldstate.py
"""
World state collaborators.

The world state is the key-value snapshot of current ledger contents.
The registry only talks to it through the WorldState interface:

    get(key)                 -> bytes or None when absent
    put(key, value)
    delete(key)
    scan(start_key, end_key) -> StateIterator of (key, value)

Scans run in lexicographic key order with start_key inclusive and
end_key exclusive. An empty string on either side leaves that side
unbounded, so scan("", "") walks the whole namespace.

Implementations signal failures by raising WorldStateError.
"""

import base64
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import WorldStateError

logger = logging.getLogger(__name__)

StateEntry = Tuple[str, bytes]


class StateIterator:
    """
    Closable cursor over the results of a range scan.

    Usage:
        with state.scan("", "") as results:
            for key, value in results:
                ...
    """

    def __init__(self, entries: Iterable[StateEntry]):
        self._entries: Iterator[StateEntry] = iter(entries)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self):
        """Release the cursor. Safe to call more than once."""
        self._closed = True

    def __iter__(self) -> "StateIterator":
        return self

    def __next__(self) -> StateEntry:
        if self._closed:
            raise WorldStateError("iterator is closed")
        return next(self._entries)

    def __enter__(self) -> "StateIterator":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def _in_range(key: str, start_key: str, end_key: str) -> bool:
    if start_key and key < start_key:
        return False
    if end_key and key >= end_key:
        return False
    return True


class WorldState(ABC):
    """Key-addressed store the registry reads and writes."""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the value at key, or None when nothing is stored there."""
        pass

    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def scan(self, start_key: str, end_key: str) -> StateIterator:
        pass


class MemoryWorldState(WorldState):
    """
    In-process world state.

    Scans iterate a sorted snapshot taken when scan() is called, so
    writes made while a cursor is open are not seen by that cursor.
    """

    def __init__(self, initial: Dict[str, bytes] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def put(self, key: str, value: bytes) -> None:
        if not key:
            raise WorldStateError("key must not be empty")
        if not isinstance(value, (bytes, bytearray)):
            raise WorldStateError(f"value for {key} must be bytes, got {type(value).__name__}")
        self._data[key] = bytes(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def scan(self, start_key: str, end_key: str) -> StateIterator:
        entries = [
            (key, self._data[key])
            for key in sorted(self._data)
            if _in_range(key, start_key, end_key)
        ]
        return StateIterator(entries)

    def keys(self) -> List[str]:
        """All stored keys in scan order."""
        return sorted(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class FileWorldState(MemoryWorldState):
    """
    World state persisted to a JSON file.

    Structure:
        {
            "version": "1.0",
            "state": {"<key>": "<base64 value>", ...}
        }

    The file is loaded on construction and rewritten after every
    put or delete.
    """

    def __init__(self, path: Path | str):
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self):
        """Load state from disk."""
        if not self.path.exists():
            return
        try:
            with open(self.path) as f:
                data = json.load(f)
            self._data = {
                key: base64.b64decode(value, validate=True)
                for key, value in data.get("state", {}).items()
            }
        except (OSError, ValueError, TypeError, AttributeError) as e:
            raise WorldStateError(f"cannot load world state from {self.path}: {e}") from e
        logger.debug(f"Loaded {len(self._data)} keys from {self.path}")

    def _save(self):
        """Save state to disk."""
        data = {
            "version": "1.0",
            "state": {
                key: base64.b64encode(value).decode("ascii")
                for key, value in sorted(self._data.items())
            },
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise WorldStateError(f"cannot write world state to {self.path}: {e}") from e

    def _commit(self, previous: Dict[str, bytes]):
        # Roll memory back to match the file when the write fails
        try:
            self._save()
        except WorldStateError:
            self._data = previous
            raise

    def put(self, key: str, value: bytes) -> None:
        previous = dict(self._data)
        super().put(key, value)
        self._commit(previous)

    def delete(self, key: str) -> None:
        previous = dict(self._data)
        super().delete(key)
        self._commit(previous)
