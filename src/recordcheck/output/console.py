"""Rich Console factory and theme for recordcheck output.

Consoles render into a StringIO buffer so renderers keep a
``render_result() -> str`` contract.  Outside a terminal (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

RC_THEME = Theme(
    {
        "rc.ok": "bold green",
        "rc.error": "bold red",
        "rc.warning": "bold yellow",
        "rc.op": "bold cyan",
        "rc.key": "dim",
        "rc.path": "bold blue",
        "rc.type": "magenta",
        "rc.value": "yellow",
        "rc.skipped": "dim",
    }
)

STATUS_STYLES: dict[str, str] = {
    "passed": "rc.ok",
    "failed": "rc.error",
    "skipped": "rc.skipped",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=RC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
