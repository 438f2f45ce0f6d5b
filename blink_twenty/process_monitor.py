import os
import sys
import ctypes
import logging

import psutil

from .config import FOCUS_POLL_MS

FOREGROUND_SUPPORTED = sys.platform == "win32"


def get_foreground_pid() -> int | None:
    if not FOREGROUND_SUPPORTED:
        return None
    user32 = ctypes.windll.user32
    hwnd = user32.GetForegroundWindow()
    if not hwnd:
        return None
    pid = ctypes.c_ulong(0)
    user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
    return pid.value or None


def safe_process_name(pid: int | None) -> str | None:
    if not pid:
        return None
    try:
        return psutil.Process(pid).name()
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
        return None


class TargetMatcher:
    """Matches process names against comma-separated work-app patterns.

    ``*`` matches any run of characters, a pattern with a dot must equal the
    name, anything else is a substring match. Case-insensitive.
    """

    def __init__(self, text: str = ""):
        self._patterns: list[str] = []
        self.set_from_text(text)

    @property
    def empty(self) -> bool:
        return not self._patterns

    def set_from_text(self, text: str) -> None:
        tokens = [t.strip() for t in (text or "").split(",")]
        self._patterns = [t.lower() for t in tokens if t]

    def matches(self, proc_name: str | None) -> bool:
        if not proc_name:
            return False
        pn = proc_name.lower()
        for pat in self._patterns:
            if "*" in pat:
                parts = [p for p in pat.split("*") if p]
                if not parts:
                    return True
                idx = 0
                ok = True
                for part in parts:
                    found = pn.find(part, idx)
                    if found < 0:
                        ok = False
                        break
                    idx = found + len(part)
                if ok:
                    return True
            elif "." in pat:
                if pn == pat:
                    return True
            elif pat in pn:
                return True
        return False


def make_work_focus_probe(
    matcher: TargetMatcher,
    own_pid: int | None = None,
    foreground=get_foreground_pid,
    name_of=safe_process_name,
    supported: bool = FOREGROUND_SUPPORTED,
):
    """Build the ``() -> bool`` probe telling whether a work app is in front.

    Our own windows (the rest prompt) always count as focused. With no
    foreground window at all (locked screen) the user is away.
    """
    own_pid = os.getpid() if own_pid is None else own_pid

    def probe() -> bool:
        if not supported:
            return True
        pid = foreground()
        if not pid:
            return False
        if pid == own_pid or matcher.empty:
            return True
        return matcher.matches(name_of(pid))

    return probe


class FocusWatcher:
    def __init__(self, scheduler, probe, on_blur, on_focus, logger: logging.Logger, poll_ms: int = FOCUS_POLL_MS):
        self._scheduler = scheduler
        self._probe = probe
        self._on_blur = on_blur
        self._on_focus = on_focus
        self._logger = logger
        self._poll_ms = poll_ms

        self._focused = True
        self._handle = None
        self._running = False

    def is_focused(self) -> bool:
        return self._focused

    def start(self) -> None:
        self._running = True
        self._focused = self._sample(default=True)
        self._logger.info(f"Focus watcher started focused={self._focused}")
        self._schedule()

    def stop(self) -> None:
        self._running = False
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _sample(self, default: bool) -> bool:
        try:
            return bool(self._probe())
        except Exception:
            self._logger.exception("Focus probe failed")
            return default

    def _schedule(self) -> None:
        if not self._running:
            return
        self._handle = self._scheduler.call_later(self._poll_ms, self._poll)

    def _poll(self) -> None:
        self._handle = None
        focused = self._sample(default=self._focused)
        try:
            if focused != self._focused:
                self._focused = focused
                self._logger.info(f"Focus {'ENTER' if focused else 'EXIT'}")
                if focused:
                    self._on_focus()
                else:
                    self._on_blur()
        finally:
            self._schedule()
