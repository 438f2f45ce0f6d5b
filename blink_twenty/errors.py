class BlinkError(Exception):
    pass


class StateUnavailable(BlinkError):
    """Persisted timer state could not be read or written."""


class NotificationUnavailable(BlinkError):
    """The host could not present a prompt, progress window or notice."""


class InvalidConfiguration(BlinkError):
    pass
