from __future__ import annotations

import errno
from pathlib import Path
from typing import BinaryIO, List

from tailsieve.errors import EncodingError, SourceNotFound, SourceReadError
from tailsieve.sources.locator import locate_tail_start


def _read_upto(f: BinaryIO, count: int) -> bytes:
    # raw reads may come back short
    chunks: List[bytes] = []
    while count > 0:
        block = f.read(count)
        if not block:
            break
        chunks.append(block)
        count -= len(block)
    return b"".join(chunks)


class FileSource:
    """
    Seekable, sized source backed by a path.

    `observed_size` is the number of bytes already delivered. Handles are
    opened per operation, so rotation by another process is always seen
    through a fresh stat.
    """

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise SourceNotFound(path)
        if self.path.is_dir():
            raise SourceReadError(path, IsADirectoryError(errno.EISDIR, "Is a directory"))
        self.observed_size = self.current_size()

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r}, observed_size={self.observed_size})"

    def current_size(self) -> int:
        try:
            return self.path.stat().st_size
        except OSError as e:
            raise SourceReadError(str(self.path), e) from e

    def read_bytes(self, start: int, end: int) -> bytes:
        """Raw bytes [start, end); the caller decides how to decode them."""
        if end <= start:
            return b""
        try:
            with self.path.open("rb") as f:
                f.seek(start)
                return f.read(end - start)
        except OSError as e:
            raise SourceReadError(str(self.path), e) from e

    def last_lines(self, n: int) -> str:
        """Text of the last `n` lines as of `observed_size`."""
        size = self.observed_size
        try:
            # unbuffered: every backward read(1) must cost one byte, not a refill
            with self.path.open("rb", buffering=0) as f:
                start = locate_tail_start(f, size, n)
                f.seek(start)
                data = _read_upto(f, size - start)
        except OSError as e:
            raise SourceReadError(str(self.path), e) from e
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(str(self.path), start, start + len(data), e) from e
