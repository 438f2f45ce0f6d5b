from dataclasses import dataclass

from .state_store import StateStore, TARGET_TIME, LAST_FOCUS_TIME, IS_RESTING


@dataclass(frozen=True)
class Idle:
    target_time: int


@dataclass(frozen=True)
class Resting:
    pass


RESTING = Resting()


class TimerState:
    """Typed view over the persisted timer keys.

    The cycle is either ``Idle(target_time)`` or ``RESTING``; the stored
    target is kept while resting but has no meaning until the next rearm.
    """

    def __init__(self, store: StateStore):
        self._store = store

    @property
    def phase(self) -> Idle | Resting:
        if self.is_resting:
            return RESTING
        return Idle(self.target_time)

    @property
    def is_resting(self) -> bool:
        return bool(self._store.get(IS_RESTING))

    @property
    def target_time(self) -> int:
        return int(self._store.get(TARGET_TIME) or 0)

    @property
    def last_blur(self) -> int:
        return int(self._store.get(LAST_FOCUS_TIME) or 0)

    @last_blur.setter
    def last_blur(self, value: int) -> None:
        self._store.set(LAST_FOCUS_TIME, int(value))

    def rearm(self, target_time: int) -> None:
        self._store.set(TARGET_TIME, int(target_time))
        self._store.set(IS_RESTING, False)

    def begin_rest(self) -> None:
        self._store.set(IS_RESTING, True)

    def clear_rest(self) -> None:
        self._store.set(IS_RESTING, False)
