import os
import json
import logging
import threading

from .errors import StateUnavailable
from .utils import ensure_dir

TARGET_TIME = "target_time"
LAST_FOCUS_TIME = "last_focus_time"
IS_RESTING = "is_resting"

DEFAULTS = {
    TARGET_TIME: 0,
    LAST_FOCUS_TIME: 0,
    IS_RESTING: False,
}


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if type(value) is int and value in (0, 1):
        return bool(value)
    raise ValueError(f"not a flag: {value!r}")


class StateStore:
    """Small key/value state that survives restarts, kept in a JSON file.

    Every ``set`` is written through. Read or write failures never propagate:
    they are logged and the in-memory values keep serving.
    """

    def __init__(self, path: str | None, logger: logging.Logger):
        self._path = path
        self._logger = logger
        self._lock = threading.Lock()
        self._values = dict(DEFAULTS)

    def load(self) -> None:
        try:
            data = self._read()
        except StateUnavailable as e:
            self._logger.warning(f"State unavailable, using defaults: {e}")
            return

        cleaned = dict(DEFAULTS)
        for key, default in DEFAULTS.items():
            value = data.get(key, default)
            try:
                cleaned[key] = _as_bool(value) if isinstance(default, bool) else int(value)
            except (TypeError, ValueError):
                self._logger.warning(f"State key {key}={value!r} invalid, using default")
        with self._lock:
            self._values = cleaned

    def _read(self) -> dict:
        if not self._path or not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StateUnavailable(f"cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StateUnavailable(f"{self._path} does not hold an object")
        return data

    def save(self) -> None:
        if not self._path:
            return
        with self._lock:
            data = dict(self._values)
        try:
            ensure_dir(os.path.dirname(self._path))
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            self._logger.warning(f"State unavailable, keeping it in memory: {e}")

    def get(self, key: str):
        with self._lock:
            return self._values.get(key, DEFAULTS.get(key))

    def set(self, key: str, value) -> None:
        with self._lock:
            if self._values.get(key) == value:
                return
            self._values[key] = value
        self.save()

    def snapshot(self) -> dict:
        with self._lock:
            return dict(self._values)
