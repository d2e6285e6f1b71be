from __future__ import annotations


class TailError(Exception):
    """Base class for every failure tailsieve reports to the user."""


class SourceNotFound(TailError):
    def __init__(self, path: str) -> None:
        super().__init__(f"file doesn't exist: {path}")
        self.path = path


class SourceReadError(TailError):
    """open/stat/seek/read failed on the tailed file."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"cannot read '{path}': {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class EncodingError(TailError):
    """A byte range of the source is not valid UTF-8."""

    def __init__(self, path: str, start: int, end: int, cause: UnicodeDecodeError) -> None:
        super().__init__(f"bytes {start}..{end} of '{path}' are not valid UTF-8 ({cause.reason})")
        self.path = path
        self.start = start
        self.end = end


class ConfigError(TailError):
    pass
