"""Structured logging setup for license-check."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from rich.console import Console
from rich.markup import escape


class RichConsoleRenderer:
    """Render structlog events as single styled lines on a rich console.

    Events go to stderr so that machine readable reports on stdout stay clean.
    """

    _level_styles = {
        "debug": "dim",
        "info": "green",
        "warning": "yellow",
        "error": "bold red",
        "critical": "bold magenta",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console if console is not None else Console(stderr=True)

    def __call__(self, logger: Any, name: str, event_dict: dict[str, Any]) -> str:
        event = event_dict.pop("event", "")
        level = event_dict.pop("level", "info")
        logger_name = event_dict.pop("logger", None)
        event_dict.pop("timestamp", None)
        exception = event_dict.pop("exception", None)

        style = self._level_styles.get(level, "white")
        parts = [f"[{style}]{level.upper():<8}[/{style}]"]
        if logger_name:
            parts.append(f"[bold]{logger_name}[/bold]")
        parts.append(escape(str(event)))
        for key, value in event_dict.items():
            parts.append(f"[cyan]{key}[/cyan]={escape(repr(value))}")

        message = " ".join(parts)
        if exception:
            message += f"\n[red]{escape(str(exception))}[/red]"

        self._console.print(message, highlight=False)
        raise structlog.DropEvent


def setup_logging(level: int = logging.WARNING, console: Console | None = None) -> None:
    """Configure structlog for the command line.

    Args:
        level: Minimum stdlib level that is emitted.
        console: Optional console to render to (defaults to stderr).
    """
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            RichConsoleRenderer(console),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
