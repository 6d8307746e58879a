import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from pydantic import ValidationError

from config import load_config
from models.state import AppState
from utils.errors import StateWriteError

logger = logging.getLogger(__name__)

STATE_FILENAME = "state.json"

_store: Optional["StateStore"] = None


def write_json_atomic(path: Path, data: dict) -> None:
    """Write JSON to a sibling temp file, then rename it over the target."""
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    os.replace(tmp_path, path)


def read_state_file(path: Path) -> Optional[AppState]:
    """Parse the state document; None if it is missing or unreadable."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return AppState.model_validate(raw)
    except FileNotFoundError:
        return None
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Could not read state file %s, using defaults: %s", path, exc)
        return None


class StateStore:
    """Owns the user-state aggregate and is its only writer.

    Mutations go through ``transaction()``: a deep copy is handed out, and it
    only replaces the in-memory state after the durable write succeeded.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._state = AppState()

    def load(self) -> AppState:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            state = read_state_file(self.path)
            if state is None:
                state = AppState()
                if not self.path.exists():
                    logger.info("Creating user data file %s from defaults (first run)", self.path)
                    self._write(state)
            self._state = state
            return self._state

    def snapshot(self) -> AppState:
        with self._lock:
            return self._state.model_copy(deep=True)

    @contextmanager
    def transaction(self) -> Iterator[AppState]:
        with self._lock:
            working = self._state.model_copy(deep=True)
            yield working
            self._write(working)
            self._state = working

    def reset(self) -> AppState:
        with self._lock:
            fresh = AppState()
            self._write(fresh)
            self._state = fresh
            logger.info("User state reset to defaults")
            return fresh.model_copy(deep=True)

    def _write(self, state: AppState) -> None:
        try:
            write_json_atomic(self.path, state.to_json())
        except OSError as exc:
            logger.error("Failed to persist state to %s", self.path, exc_info=True)
            raise StateWriteError(f"could not write {self.path}: {exc}") from exc


def init_store(config: Optional[dict] = None) -> StateStore:
    """Create the process-wide store from config and load state from disk."""
    global _store
    config = config or load_config()
    data_dir = Path(config["paths"]["data_dir"])
    store = StateStore(data_dir / STATE_FILENAME)
    store.load()
    _store = store
    return store


def get_store() -> StateStore:
    """FastAPI dependency returning the store, initializing it on first use."""
    if _store is None:
        return init_store()
    return _store
