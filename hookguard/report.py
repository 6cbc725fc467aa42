"""Console reporting for hook runs."""

from __future__ import annotations

from typing import IO, Optional

from rich.console import Console

COLOR_MODES = ("auto", "always", "never")


def build_console(color: str = "auto", file: Optional[IO[str]] = None) -> Console:
    """Return a console honoring the requested color mode.

    ``auto`` colors only when writing to a terminal, ``always`` forces ANSI
    output and ``never`` strips every style.
    """

    if color not in COLOR_MODES:
        raise ValueError(f"Unknown color mode {color!r}; expected one of {', '.join(COLOR_MODES)}")
    options = {"file": file, "markup": False, "highlight": False, "emoji": False, "soft_wrap": True}
    if color == "always":
        options.update(force_terminal=True, color_system="standard")
    elif color == "never":
        options.update(color_system=None)
    return Console(**options)


class Reporter:
    """Write styled status lines; markup in messages is never interpreted."""

    def __init__(self, color: str = "auto", file: Optional[IO[str]] = None) -> None:
        self.console = build_console(color, file)

    def line(self, text: str = "", style: Optional[str] = None) -> None:
        self.console.print(text, style=style)

    def heading(self, text: str) -> None:
        self.line(text, style="bold yellow")

    def warn(self, text: str) -> None:
        self.line(text, style="yellow")

    def hint(self, text: str) -> None:
        self.line(text, style="blue")

    def success(self, text: str) -> None:
        self.line(text, style="green")

    def error(self, text: str) -> None:
        self.line(text, style="red")

    def output(self, text: str) -> None:
        """Echo captured tool output verbatim."""

        if text:
            self.line(text.rstrip("\n"))
