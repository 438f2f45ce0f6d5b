import os
import math
from dataclasses import dataclass

from .errors import InvalidConfiguration

APP_TITLE = "Blink 20"
LOGGER_NAME = "BlinkTwenty"
APPDATA_DIR = os.path.join(os.getenv("APPDATA") or os.path.expanduser("~"), "BlinkTwenty")

STATE_FILE = os.path.join(APPDATA_DIR, "state.json")

LOG_DIR = os.path.join(APPDATA_DIR, "logs")
LOG_FILE = os.path.join(LOG_DIR, "blink_twenty.log")

TICK_MS = 1000
FOCUS_POLL_MS = 500
TOAST_DISMISS_MS = 5000

# 20-20-20 rule
INTERVAL_MS = 20 * 60 * 1000
REST_DURATION_MS = 20 * 1000
RESET_THRESHOLD_MS = 5 * 60 * 1000

# Fast profile for development runs
FAST_INTERVAL_MS = 10 * 1000
FAST_REST_DURATION_MS = 5 * 1000
FAST_RESET_THRESHOLD_MS = 2 * 1000

FAST_ENV_VAR = "BLINK20_FAST"

CHIME_NOTES_HZ = (659.25, 783.99, 1046.50)
CHIME_NOTE_SEC = 0.16
CHIME_VOLUME = 0.4
SAMPLE_RATE = 44100


def _to_ms(name: str, value, scale: int) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}") from e
    ms = number * scale
    if not math.isfinite(ms):
        raise InvalidConfiguration(f"{name} must be finite, got {value!r}")
    return int(ms)


@dataclass
class Settings:
    interval_ms: int = INTERVAL_MS
    rest_duration_ms: int = REST_DURATION_MS
    reset_threshold_ms: int = RESET_THRESHOLD_MS
    allow_skip: bool = False
    language: str | None = None
    fast: bool = False

    @classmethod
    def fast_profile(cls, **overrides) -> "Settings":
        values = dict(
            interval_ms=FAST_INTERVAL_MS,
            rest_duration_ms=FAST_REST_DURATION_MS,
            reset_threshold_ms=FAST_RESET_THRESHOLD_MS,
            fast=True,
        )
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_args(cls, args, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        fast = bool(getattr(args, "fast", False)) or environ.get(FAST_ENV_VAR, "") not in ("", "0")

        settings = cls.fast_profile() if fast else cls()
        settings.allow_skip = bool(getattr(args, "allow_skip", False))
        settings.language = getattr(args, "language", None)

        for arg, field, scale in (
            ("interval_min", "interval_ms", 60 * 1000),
            ("rest_sec", "rest_duration_ms", 1000),
            ("reset_min", "reset_threshold_ms", 60 * 1000),
        ):
            value = getattr(args, arg, None)
            if value is not None:
                setattr(settings, field, _to_ms(arg, value, scale))

        settings.validate()
        return settings

    @property
    def rest_steps(self) -> int:
        return self.rest_duration_ms // 1000

    def validate(self) -> None:
        for name in ("interval_ms", "rest_duration_ms", "reset_threshold_ms"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise InvalidConfiguration(f"{name} must be a positive number of milliseconds, got {value!r}")
        if self.rest_steps < 1:
            raise InvalidConfiguration(
                f"rest_duration_ms must be at least 1000, got {self.rest_duration_ms}"
            )
