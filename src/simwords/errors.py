from __future__ import annotations


class SimWordsError(Exception):
    """Base class for every error raised by simwords."""


class IOFailure(SimWordsError, OSError):
    """Word list unreadable or index storage unwritable."""


class NotFoundError(SimWordsError, FileNotFoundError):
    """No index at the given location."""


class IndexReadError(SimWordsError, ValueError):
    """Index is corrupt, of an incompatible format, or already closed."""


class UsageError(SimWordsError, ValueError):
    """Malformed command invocation."""


class UnknownKeyError(SimWordsError, KeyError):
    """Character has no key on the keyboard layout."""

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message
        return str(self.args[0]) if self.args else ""
