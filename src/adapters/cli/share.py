"""
adapters.cli.share - Terminal stand-in for the platform share sheet.

There is no share sheet in a terminal, so "sharing" a report means
telling the user where the finished file is.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel


class ConsoleShareSink:
    """ShareSink that prints the document location."""

    def __init__(self, console: Console):
        self._console = console

    async def share(self, path: Path, dialog_title: str, mime_type: str) -> bool:
        if not path.exists():
            return False
        self._console.print(Panel(
            f"[bold]{path.resolve()}[/bold]\n[dim]{mime_type}[/dim]",
            title=dialog_title,
            border_style="green",
        ))
        return True
