"""Rich Console factory and theme for roomdir output.

Consoles render to a StringIO buffer so formatters keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich
automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ROOMDIR_THEME = Theme(
    {
        "rd.ok": "bold green",
        "rd.error": "bold red",
        "rd.warning": "bold yellow",
        "rd.op": "bold cyan",
        "rd.key": "dim",
        "rd.alias": "bold magenta",
        "rd.room": "bold blue",
        "rd.code": "red",
    }
)

# data keys rendered with an identifier style
KEY_STYLES: dict[str, str] = {
    "alias": "rd.alias",
    "room_id": "rd.room",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ROOMDIR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
