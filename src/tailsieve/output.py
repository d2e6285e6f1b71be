from __future__ import annotations

import sys
from typing import Optional, TextIO

from rich.console import Console
from rich.text import Text


class Output:
    """
    stdout sink. Plain text is written as-is; only sieve matches go through
    rich, which drops colors when the stream is not a terminal.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        highlight_style: str = "red",
        color: Optional[bool] = None,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.highlight_style = highlight_style
        self._console = Console(
            file=self.stream,
            force_terminal=color,
            color_system="standard" if color else "auto",
            no_color=True if color is False else None,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    def decorate(self, text: str) -> str:
        with self._console.capture() as cap:
            self._console.print(Text(text, style=self.highlight_style), end="")
        return cap.get()

    def write(self, text: str) -> None:
        if not text:
            return
        self.stream.write(text)
        self.stream.flush()

    def notice(self, text: str) -> None:
        self.write(f"{text}\n")
