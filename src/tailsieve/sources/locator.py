from __future__ import annotations

import os
from typing import BinaryIO

NEWLINE = b"\n"


def locate_tail_start(fh: BinaryIO, size: int, n: int) -> int:
    """
    Offset from which reading up to `size` yields the last `n` lines.

    Walks backwards one byte at a time, so the cost is proportional to the
    length of the tail, not of the file.
    - a newline that is the last byte of the region only terminates the last
      line and is not counted
    - a trailing line without newline counts as one of the `n`
    - fewer than `n` lines -> 0 (whole region)
    """
    if n <= 0 or size <= 0:
        return size

    pos = size - 1
    fh.seek(pos, os.SEEK_SET)
    if fh.read(1) == NEWLINE:
        pos -= 1

    found = 0
    while pos >= 0:
        fh.seek(pos, os.SEEK_SET)
        if fh.read(1) == NEWLINE:
            found += 1
            if found == n:
                return pos + 1
        pos -= 1

    return 0
