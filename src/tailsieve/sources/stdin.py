from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from tailsieve.errors import EncodingError, SourceReadError

STDIN_NAME = "<stdin>"


class StdinSource:
    """
    Line-buffered, unseekable source.

    Nothing can be located backwards here, so the whole input is buffered and
    walked from the end instead. An interactive terminal is never read.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdin
        self._lines: Optional[List[str]] = None

    def __repr__(self) -> str:
        return "StdinSource()"

    def _interactive(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def _read_text(self) -> str:
        # bytes when available: strict UTF-8 and no newline translation, like FileSource
        raw = getattr(self.stream, "buffer", None)
        try:
            if raw is None:
                return self.stream.read()
            return raw.read().decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(STDIN_NAME, e.start, e.end, e) from e
        except OSError as e:
            raise SourceReadError(STDIN_NAME, e) from e

    def _buffer(self) -> List[str]:
        if self._lines is None:
            if self._interactive():
                self._lines = []
            else:
                lines = self._read_text().split("\n")
                if lines[-1] == "":
                    lines.pop()
                self._lines = lines
        return self._lines

    def last_lines(self, n: int) -> str:
        lines = self._buffer()
        out: List[str] = []
        for line in reversed(lines):
            if len(out) >= n:
                break
            out.insert(0, f"{line}\n")
        return "".join(out)
