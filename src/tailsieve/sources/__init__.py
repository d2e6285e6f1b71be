from __future__ import annotations

from typing import Optional, TextIO, Union

from tailsieve.sources.file import FileSource
from tailsieve.sources.locator import locate_tail_start
from tailsieve.sources.stdin import StdinSource

Source = Union[FileSource, StdinSource]


def open_source(path: Optional[str], stdin: Optional[TextIO] = None) -> Source:
    """FileSource for a path, StdinSource when no path was given."""
    if path is None or path == "-":
        return StdinSource(stdin)
    return FileSource(path)


__all__ = ["FileSource", "StdinSource", "Source", "locate_tail_start", "open_source"]
