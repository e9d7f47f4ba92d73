"""Error taxonomy raised by the action descriptor core."""

import logging

mylogger = logging.getLogger(__name__)


class ActionsError(Exception):
    """Base exception with a message, optionally logged on creation."""

    def __init__(self, message: str = "An actions error occurred", log: bool = False):
        self.message = message
        super().__init__(self.message)
        if log:
            mylogger.error(message)


class ActionsIOError(ActionsError):
    """Filesystem or emit failure while writing a descriptor."""


class ActionsNotImplemented(ActionsError, NotImplementedError):
    """Requested operation has nothing to act on (e.g. no target path)."""

    def __init__(self, message: str = "Descriptor has no path to write to", log: bool = False):
        super().__init__(message, log=log)


__all__ = [
    "ActionsError",
    "ActionsIOError",
    "ActionsNotImplemented",
]
