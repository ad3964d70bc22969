"""Exceptions raised inside a single poll cycle. None of them are fatal."""


class WatcherError(Exception):
    """Base class for recoverable poll-cycle errors."""


class NoCandidateFound(WatcherError):
    def __init__(self, root: str):
        super().__init__(f"No journal file found under {root}")
        self.root = root


class ReadFailure(WatcherError):
    """A journal could not be stat'ed, opened, positioned or read.

    ``offset`` is the cursor the read started from; callers keep it as-is.
    """

    def __init__(self, path: str, offset: int, reason: Exception):
        super().__init__(f"Failed to read {path} at offset {offset}: {reason}")
        self.path = path
        self.offset = offset
        self.reason = reason
