from __future__ import annotations


class SvoxBatchError(Exception):
    """Base class for errors raised by svox-batch."""


class EntryPointUnreachable(SvoxBatchError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"entry point {url} unreachable: {reason}")
        self.url = url
        self.reason = reason


class SessionNotOpen(SvoxBatchError):
    """Raised when a session method is used before open() or after close()."""
