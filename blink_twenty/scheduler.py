import logging


class TkScheduler:
    """Runs callbacks on the Tk main loop.

    Every timer callback in the app goes through here, so timer state is
    only ever touched from the Tk thread.
    """

    def __init__(self, root, logger: logging.Logger):
        self._root = root
        self._logger = logger

    def call_later(self, delay_ms: int, callback):
        def _run():
            try:
                callback()
            except Exception:
                self._logger.exception("Scheduled callback failed")

        return self._root.after(int(delay_ms), _run)

    def cancel(self, handle) -> None:
        try:
            self._root.after_cancel(handle)
        except Exception:
            pass
