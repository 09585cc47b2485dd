"""Plain console logger used when the dashboard is off."""

from typing import Any

from rich.console import Console

from ui.log_utils import format_log_line, is_enabled, write_cli_log

LEVEL_STYLES = {"debug": "dim", "info": "cyan", "warning": "yellow", "error": "red"}


class ConsoleLogger:
    """Print request events to the console and mirror them to the CLI log."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def log_forward(self, target_url: str, status: int) -> None:
        self.log_event("info", "Forwarded request", target_url=target_url, status=status)

    def log_error(self, status: int, message: str, *, target_url: str | None = None) -> None:
        extra: dict[str, Any] = {"status": status}
        if target_url:
            extra["target_url"] = target_url
        self.log_event("error", message, **extra)

    def log_event(self, level: str, message: str, **extra: Any) -> None:
        if not is_enabled(level):
            return
        style = LEVEL_STYLES.get(level.lower(), "")
        self.console.print(format_log_line(level, message, **extra), style=style, markup=False)
        write_cli_log(level, message, **extra)
