from __future__ import annotations

import threading
from typing import Callable, List, Optional, Tuple

from tailsieve.config import TRUNCATION_NOTICE
from tailsieve.errors import EncodingError
from tailsieve.output import Output
from tailsieve.sources.file import FileSource


def split_lines(chunk: str) -> List[str]:
    """Split an appended chunk on newlines, without the empty tail a final newline leaves."""
    lines = chunk.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def decode_complete(data: bytes) -> Tuple[str, int, Optional[UnicodeDecodeError]]:
    """
    Decode an appended chunk as far as it is whole.

    Returns (text, bytes consumed, error). If decoding stops, text covers the
    lines up to the last newline before the bad byte.
    - chunk ends inside a character (writer flushed mid-sequence): the
      unfinished line is left for the next cycle, error is None
    - invalid bytes: error is the UnicodeDecodeError, the rest is unusable
    """
    try:
        return data.decode("utf-8"), len(data), None
    except UnicodeDecodeError as e:
        cut = data.rfind(b"\n", 0, e.start) + 1
        text = data[:cut].decode("utf-8")
        if e.reason == "unexpected end of data":
            return text, cut, None
        return text, cut, e


def render_line(line: str, sieve: str, decorate: Callable[[str], str]) -> Optional[str]:
    """
    Text to print for one appended line, or None if the sieve rejects it.
    An empty sieve lets every line through untouched.
    """
    if not sieve:
        return f"{line}\n"
    if sieve not in line:
        return None
    return decorate(sieve).join(line.split(sieve)) + "\n"


class FollowEngine:
    """
    Growth/truncation state machine for one FileSource.

    on_change() is safe to call for any notification, including spurious
    ones: with no growth it prints nothing. Calls are serialized because
    watchdog delivers events from its own thread.
    """

    def __init__(
        self,
        source: FileSource,
        output: Output,
        sieve: str = "",
        truncation_notice: str = TRUNCATION_NOTICE,
    ) -> None:
        self.source = source
        self.output = output
        self.sieve = sieve
        self.truncation_notice = truncation_notice
        self._lock = threading.Lock()

    def on_change(self) -> int:
        """Handle one notification. Returns how many lines were printed."""
        with self._lock:
            current = self.source.current_size()
            observed = self.source.observed_size

            if current < observed:
                # rotated/truncated: old offset is meaningless, restart from new EOF
                self.output.notice(self.truncation_notice)
                self.source.observed_size = current
                return 0

            data = self.source.read_bytes(observed, current)
            chunk, consumed, bad = decode_complete(data)

            out: List[str] = []
            for line in split_lines(chunk):
                rendered = render_line(line, self.sieve, self.output.decorate)
                if rendered is not None:
                    out.append(rendered)

            self.output.write("".join(out))

            if bad is not None:
                # skip the bad chunk, otherwise every later event fails on it too
                self.source.observed_size = current
                raise EncodingError(str(self.source.path), observed + consumed, current, bad)

            self.source.observed_size = observed + consumed
            return len(out)
