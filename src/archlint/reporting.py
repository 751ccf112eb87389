"""Rendering helpers shared by the ADR and micro-task reporters."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from io import StringIO

# Summary separator printed above the totals block.
RULE = "─" * 45


def timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(tz=timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_console(buf: StringIO, *, color: bool = False) -> Console:
    """Rich console that renders into *buf*.

    ANSI styling is emitted only when *color* is set. Lines are never wrapped
    and rich's automatic highlighting and emoji codes are off, so reports stay
    byte-stable for files and pipes.
    """
    return Console(
        file=buf,
        force_terminal=color,
        no_color=not color,
        width=120,
        soft_wrap=True,
        highlight=False,
        emoji=False,
    )
