"""
Persistence ports for Minesweeper snapshots.

The engine only knows the StateStore protocol; whoever builds the
engine picks the backend. Both backends here keep snapshots under a
fixed key so several games or apps can share one storage area.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from .errors import DeserializationError
from .serialization import dumps_state, loads_state

logger = logging.getLogger(__name__)

DEFAULT_KEY = "minesweeper"


class StateStore(Protocol):
    """Somewhere to keep the latest snapshot."""

    def save(self, state: Dict[str, Any]) -> None:
        ...

    def load(self) -> Optional[Dict[str, Any]]:
        ...


# ============================================================================
# In-memory Store
# ============================================================================

class MemoryStateStore:
    """
    Key-value store kept in process memory.

    Snapshots are held as JSON text, so later board changes never leak
    into what was saved.
    """

    def __init__(self, key: str = DEFAULT_KEY) -> None:
        self.key = key
        self._items: Dict[str, str] = {}

    def save(self, state: Dict[str, Any]) -> None:
        self._items[self.key] = dumps_state(state)

    def load(self) -> Optional[Dict[str, Any]]:
        text = self._items.get(self.key)
        if text is None:
            return None
        return loads_state(text)

    def clear(self) -> None:
        self._items.clear()


# ============================================================================
# JSON File Store
# ============================================================================

class JsonFileStateStore:
    """
    Key-value store backed by a single JSON file.

    The file holds a JSON object mapping keys to snapshots; saving
    rewrites the whole file but keeps entries under other keys.
    I/O errors propagate to the caller.
    """

    def __init__(self, path: Union[str, Path], key: str = DEFAULT_KEY) -> None:
        """
        Initialize the store.

        Args:
            path: JSON file to read and write. Parent directories are
                created on first save.
            key: Entry name inside the file.
        """
        self.path = Path(path)
        self.key = key

    def _read_entries(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "rb") as f:
            raw = f.read()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DeserializationError(
                f"Save file {self.path} is not UTF-8 text: {exc}"
            ) from exc
        return loads_state(text)

    def save(self, state: Dict[str, Any]) -> None:
        try:
            entries = self._read_entries()
        except DeserializationError:
            logger.warning("Overwriting unreadable save file %s", self.path)
            entries = {}
        entries[self.key] = state
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Readers only ever see a complete file
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(entries, f, indent=2)
            tmp_path.replace(self.path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
        logger.debug("Saved game to %s under %r", self.path, self.key)

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Read the snapshot stored under this key.

        Returns:
            The snapshot, or None if the file or key is missing.

        Raises:
            DeserializationError: If the file is not UTF-8 text holding
                a JSON object.
        """
        state = self._read_entries().get(self.key)
        if state is None:
            return None
        if not isinstance(state, dict):
            raise DeserializationError(f"Entry {self.key!r} is not an object")
        return state
