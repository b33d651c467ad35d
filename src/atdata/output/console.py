"""Rich Console factory and theme for atdata output.

Consoles render into a StringIO buffer so formatters keep a
``format_result() -> str`` contract. Outside a terminal (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ATDATA_THEME = Theme(
    {
        "atd.ok": "bold green",
        "atd.error": "bold red",
        "atd.warning": "bold yellow",
        "atd.op": "bold cyan",
        "atd.key": "dim",
        "atd.output": "bold",
        "atd.cid": "bold blue",
        "atd.absent": "italic magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps long hex output on one line in tests).
    """
    return Console(
        file=StringIO(),
        theme=ATDATA_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
