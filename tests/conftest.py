import heapq
import itertools
import logging

import pytest

from blink_twenty.config import Settings
from blink_twenty.i18n import Messages
from blink_twenty.state_store import StateStore
from blink_twenty.timer import RestTimer
from blink_twenty.timer_state import TimerState

T0 = 1_700_000_000_000


class FakeClock:
    def __init__(self, now: int = T0):
        self.now = now

    def __call__(self) -> int:
        return self.now


class ManualScheduler:
    """Deterministic stand-in for Tk's after(): time only moves in run_until."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self._queue = []
        self._seq = itertools.count()
        self._cancelled = set()

    def call_later(self, delay_ms, callback):
        handle = next(self._seq)
        heapq.heappush(self._queue, (self.clock.now + int(delay_ms), handle, callback))
        return handle

    def cancel(self, handle) -> None:
        self._cancelled.add(handle)

    @property
    def pending(self) -> int:
        return sum(1 for _, h, _ in self._queue if h not in self._cancelled)

    def run_until(self, t: int) -> None:
        while self._queue and self._queue[0][0] <= t:
            due, handle, callback = heapq.heappop(self._queue)
            if handle in self._cancelled:
                continue
            self.clock.now = max(self.clock.now, due)
            callback()
        self.clock.now = max(self.clock.now, t)


class FakeProgress:
    def __init__(self, notifier):
        self._notifier = notifier
        self.reports = []
        self.closed = False

    def report(self, increment, message):
        if "report" in self._notifier.fail_on:
            raise RuntimeError("progress gone")
        self.reports.append((increment, message))

    def close(self):
        self.closed = True


class RecordingNotifier:
    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.choice = None
        self.fail_on = set()
        self.prompts = []
        self.progresses = []
        self.infos = []

    def ask(self, message, buttons):
        if "ask" in self.fail_on:
            raise RuntimeError("no display")
        self.prompts.append((self.clock.now, message, list(buttons)))
        return self.choice

    def open_progress(self, title):
        if "progress" in self.fail_on:
            raise RuntimeError("no display")
        progress = FakeProgress(self)
        self.progresses.append((title, progress))
        return progress

    def show_info(self, message):
        if "info" in self.fail_on:
            raise RuntimeError("no display")
        self.infos.append((self.clock.now, message))


class StatusSink:
    def __init__(self):
        self.history = []

    @property
    def text(self):
        return self.history[-1][0] if self.history else None

    def set_status(self, text, tooltip):
        self.history.append((text, tooltip))


class FakeFocus:
    def __init__(self, focused: bool = True):
        self.focused = focused

    def __call__(self) -> bool:
        return self.focused


class Harness:
    def __init__(self, settings: Settings, store: StateStore | None = None):
        self.logger = logging.getLogger("BlinkTwentyTest")
        self.clock = FakeClock()
        self.scheduler = ManualScheduler(self.clock)
        self.notifier = RecordingNotifier(self.clock)
        self.status = StatusSink()
        self.focus = FakeFocus()
        self.store = store or StateStore(None, self.logger)
        self.chimes = 0
        self.timer = RestTimer(
            settings=settings,
            state=TimerState(self.store),
            scheduler=self.scheduler,
            notifier=self.notifier,
            status=self.status,
            is_focused=self.focus,
            messages=Messages("en"),
            logger=self.logger,
            clock=self.clock,
            chime=self._chime,
        )

    def _chime(self):
        self.chimes += 1

    def at(self, offset_ms: int) -> None:
        self.scheduler.run_until(T0 + offset_ms)


@pytest.fixture
def fast_settings() -> Settings:
    return Settings.fast_profile()


@pytest.fixture
def harness(fast_settings) -> Harness:
    return Harness(fast_settings)


@pytest.fixture
def make_harness():
    def _make(settings: Settings | None = None, store: StateStore | None = None) -> Harness:
        return Harness(settings or Settings.fast_profile(), store)

    return _make
