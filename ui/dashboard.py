"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock
from typing import Any

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log

console = Console()


class ForwardInfo:
    """Info about a single forwarded request."""

    def __init__(self, target_url: str, status: int, timestamp: datetime):
        self.target_url = target_url[:80] + "..." if len(target_url) > 80 else target_url
        self.status = status
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent forwards and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._forwards: list[ForwardInfo] = []
        self._max_forwards = 10
        self._request_count = {"forwarded": 0, "failed": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_forward(self, target_url: str, status: int) -> None:
        """Log a request relayed from its target."""
        with self._lock:
            self._request_count["forwarded"] += 1
            info = ForwardInfo(target_url, status, datetime.now())
            self._forwards.insert(0, info)
            self._forwards = self._forwards[: self._max_forwards]
            self._refresh()
            write_cli_log("INFO", "Forwarded request", target_url=target_url, status=status)

    def log_error(self, status: int, message: str, *, target_url: str | None = None) -> None:
        """Log a request answered with an error envelope."""
        with self._lock:
            self._request_count["failed"] += 1
            truncated = message[:60] + "..." if len(message) > 60 else message
            self._errors.insert(0, f"{status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            extra = {"status": status}
            if target_url:
                extra["target_url"] = target_url
            write_cli_log("ERROR", message[:200], **extra)

    def log_event(self, level: str, message: str, **extra: Any) -> None:
        """Record a lifecycle or debug event in the CLI log only."""
        write_cli_log(level, message, **extra)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_forwards_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Re-encryption Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Forwarded: {self._request_count['forwarded']}", style="green")
        stats.append("  |  ")
        stats.append(f"Failed: {self._request_count['failed']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_forwards_panel(self) -> Panel:
        """Build the recent forwards table."""
        if self._forwards:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Status", width=6)
            table.add_column("Target", ratio=1)

            for fwd in self._forwards:
                style = "green" if 200 <= fwd.status < 300 else "yellow"
                table.add_row(
                    fwd.timestamp.strftime("%H:%M:%S"),
                    Text(str(fwd.status), style=style),
                    fwd.target_url,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[green]Recent Forwards[/green]", border_style="green")

    def _build_footer(self) -> Panel:
        """Build footer with errors and usage hint."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"curl -H 'X-Target-URL: <url>' http://localhost:{self.config.proxy.port}/",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
