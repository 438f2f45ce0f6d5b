import time
import logging

from .config import Settings, TICK_MS
from .i18n import Messages
from .rest_sequence import RestSequencer
from .timer_state import TimerState
from .utils import ms_to_mmss

EYE = "\U0001F441"


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class RestTimer:
    """Owns the eye-rest cycle: the 1 Hz poller, focus reconciliation and
    the rest sequence. All methods must be called from the scheduler's
    thread.

    Collaborators:
      scheduler  call_later(delay_ms, callback) -> handle, cancel(handle)
      notifier   ask / open_progress / show_info (see RestSequencer)
      status     set_status(text, tooltip)
      is_focused () -> bool
      clock      () -> wall-clock milliseconds
    """

    def __init__(
        self,
        settings: Settings,
        state: TimerState,
        scheduler,
        notifier,
        status,
        is_focused,
        messages: Messages,
        logger: logging.Logger,
        clock=wall_clock_ms,
        chime=None,
    ):
        self._settings = settings
        self._state = state
        self._scheduler = scheduler
        self._status = status
        self._is_focused = is_focused
        self._messages = messages
        self._logger = logger
        self._clock = clock

        self._polling = False
        self._tick_handle = None
        self._disposed = False

        self._sequencer = RestSequencer(
            settings=settings,
            notifier=notifier,
            scheduler=scheduler,
            messages=messages,
            logger=logger,
            on_done=self._on_rest_done,
            chime=chime,
        )

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def polling(self) -> bool:
        return self._polling

    # Lifecycle
    def start(self) -> None:
        now = self._clock()

        if self._state.is_resting:
            self._logger.info("Clearing stale resting flag from previous session")
            self._state.clear_rest()

        last_blur = self._state.last_blur
        if last_blur > 0 and (now - last_blur) > self._settings.reset_threshold_ms:
            self._logger.info(f"Long absence on startup ({(now - last_blur) / 1000:.0f}s), resetting cycle")
            self.reset(now)
        elif self._state.target_time <= 0:
            self.reset(now)
        self._state.last_blur = 0

        self._start_poller()
        self._logger.info(f"Timer started target_in={ms_to_mmss(self.remaining_ms(now))}")

    def stop(self) -> None:
        self._polling = False
        if self._tick_handle is not None:
            self._scheduler.cancel(self._tick_handle)
            self._tick_handle = None

    def dispose(self) -> None:
        self._disposed = True
        self.stop()
        self._state.last_blur = self._clock()
        self._logger.info("Timer disposed")

    # Cycle
    def reset(self, now: int | None = None) -> None:
        now = self._clock() if now is None else now
        self._state.rearm(now + self._settings.interval_ms)
        self.refresh_status(now)

    def remaining_ms(self, now: int | None = None) -> int:
        now = self._clock() if now is None else now
        return max(0, self._state.target_time - now)

    def is_due(self, now: int | None = None) -> bool:
        now = self._clock() if now is None else now
        target = self._state.target_time
        return target > 0 and now >= target

    def refresh_status(self, now: int | None = None) -> None:
        if self._state.is_resting:
            text = f"{EYE} {self._messages.get('resting')}"
        else:
            text = f"{EYE} {ms_to_mmss(self.remaining_ms(now))}"
        self._status.set_status(text, self._messages.get("status_tooltip"))

    # Poller
    def tick(self) -> None:
        now = self._clock()
        self.refresh_status(now)
        self._maybe_fire(now, self._is_focused())

    def _start_poller(self) -> None:
        self._polling = True
        self.refresh_status()
        self._schedule_tick()

    def _schedule_tick(self) -> None:
        if self._polling and self._tick_handle is None:
            self._tick_handle = self._scheduler.call_later(TICK_MS, self._on_tick)

    def _on_tick(self) -> None:
        self._tick_handle = None
        try:
            self.tick()
        finally:
            self._schedule_tick()

    # Focus
    def on_blur(self) -> None:
        self._state.last_blur = self._clock()

    def on_focus(self) -> None:
        now = self._clock()
        last_blur = self._state.last_blur
        self._state.last_blur = 0

        if self._state.is_resting:
            return

        if last_blur > 0 and (now - last_blur) > self._settings.reset_threshold_ms:
            self._logger.info(f"Long absence ({(now - last_blur) / 1000:.0f}s), resetting cycle")
            self.reset(now)
            return

        self._maybe_fire(now, True)

    # Rest
    def _maybe_fire(self, now: int, focused: bool) -> bool:
        if not focused or self._state.is_resting or self._sequencer.running:
            return False
        if not self.is_due(now):
            return False

        self._state.begin_rest()
        self.stop()
        self.refresh_status(now)
        self._logger.info("Rest due")
        self._sequencer.run()
        return True

    def _on_rest_done(self) -> None:
        if self._disposed:
            return
        self.reset()
        self._start_poller()
