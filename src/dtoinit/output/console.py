"""Rich Console factory and theme for dtoinit output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DTO_THEME = Theme(
    {
        "dto.ok": "bold green",
        "dto.error": "bold red",
        "dto.warning": "bold yellow",
        "dto.op": "bold cyan",
        "dto.key": "dim",
        "dto.type": "bold blue",
        "dto.shape.primitive": "green",
        "dto.shape.sequence": "yellow",
        "dto.shape.composite": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DTO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_shape(shape_kind: str | None) -> str:
    if not shape_kind:
        return "dim"
    return f"dto.shape.{shape_kind}"
