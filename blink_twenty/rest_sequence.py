import logging

from .config import Settings, TICK_MS
from .errors import NotificationUnavailable
from .i18n import Messages


class RestSequencer:
    """Prompt, countdown, completion notice, then hand the cycle back.

    ``on_done`` is called exactly once per run, whatever happens on the way:
    normal completion, a skip, or a host surface that raised.
    """

    def __init__(
        self,
        settings: Settings,
        notifier,
        scheduler,
        messages: Messages,
        logger: logging.Logger,
        on_done,
        chime=None,
    ):
        self._settings = settings
        self._notifier = notifier
        self._scheduler = scheduler
        self._messages = messages
        self._logger = logger
        self._on_done = on_done
        self._chime = chime

        self._running = False
        self._progress = None

    @property
    def running(self) -> bool:
        return self._running

    def run(self) -> bool:
        if self._running:
            return False
        self._running = True
        self._progress = None

        start_label = self._messages.get("start_rest")
        skip_label = self._messages.get("skip_rest")
        buttons = [start_label, skip_label] if self._settings.allow_skip else [start_label]

        self._play_chime()
        try:
            choice = self._notifier.ask(self._messages.get("rest_prompt"), buttons)
        except Exception as e:
            self._fail("prompt", e)
            return True

        # Closing the dialog counts as starting the rest.
        if self._settings.allow_skip and choice == skip_label:
            self._logger.info("Rest skipped")
            self._finish()
            return True

        self._logger.info(f"Rest started steps={self._settings.rest_steps} choice={choice!r}")
        try:
            self._progress = self._notifier.open_progress(self._messages.get("rest_progress"))
        except Exception as e:
            self._fail("progress", e)
            return True

        self._step(0)
        return True

    def _step(self, index: int) -> None:
        total = self._settings.rest_steps
        if index >= total:
            self._complete()
            return

        self._logger.debug(f"Rest countdown {total - index}s left")
        try:
            self._progress.report(100.0 / total, f"{total - index}s")
        except Exception as e:
            self._fail("progress", e)
            return

        self._scheduler.call_later(TICK_MS, lambda: self._step(index + 1))

    def _complete(self) -> None:
        self._close_progress()
        self._play_chime()
        try:
            self._notifier.show_info(self._messages.get("rest_complete"))
        except Exception as e:
            self._logger.error(f"Rest completion notice failed: {NotificationUnavailable(e)!r}")
        self._logger.info("Rest complete")
        self._finish()

    def _fail(self, stage: str, error: Exception) -> None:
        if not isinstance(error, NotificationUnavailable):
            error = NotificationUnavailable(f"{stage}: {error}")
        self._logger.error(f"Rest {stage} unavailable, resetting cycle: {error!r}")
        self._close_progress()
        self._finish()

    def _close_progress(self) -> None:
        if self._progress is None:
            return
        try:
            self._progress.close()
        except Exception:
            self._logger.exception("Closing rest progress failed")
        self._progress = None

    def _play_chime(self) -> None:
        if self._chime is None:
            return
        try:
            self._chime()
        except Exception:
            self._logger.exception("Chime failed")

    def _finish(self) -> None:
        self._running = False
        self._on_done()
