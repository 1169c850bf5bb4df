"""Status bar showing clock, refresh countdown, data state and keyboard hints."""

from datetime import datetime, timedelta

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static


def format_since(delta: timedelta) -> str:
    """Describe how long ago the weather was refreshed."""
    minutes = int(delta.total_seconds() // 60)
    if minutes <= 0:
        return "Updated just now"
    if minutes == 1:
        return "Updated 1 min ago"
    return f"Updated {minutes} mins ago"


def format_countdown(delta: timedelta) -> str:
    """Describe the time left until the next automatic refresh."""
    total = int(delta.total_seconds())
    if total <= 0:
        return "Refreshing..."
    minutes, seconds = divmod(total, 60)
    if minutes:
        return f"Next: {minutes}m {seconds:02d}s"
    return f"Next: {seconds}s"


class StatusBar(Horizontal):
    """Bottom status bar with time, refresh info, live/cached mode and key hints."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
        width: 100%;
    }

    StatusBar Static {
        width: auto;
        padding-right: 2;
    }

    StatusBar #status-activity {
        color: $warning;
    }

    StatusBar #status-spacer {
        width: 1fr;
    }

    StatusBar #status-hints {
        padding-right: 0;
        text-align: right;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._updated_at: datetime | None = None
        self._next_refresh: datetime | None = None

    def compose(self) -> ComposeResult:
        yield Static("", id="status-time")
        yield Static("", id="status-updated")
        yield Static("", id="status-next-refresh")
        yield Static("", id="status-mode")
        yield Static("", id="status-activity")
        yield Static("", id="status-spacer")
        yield Static(
            "[dim]r[/dim] Refresh  [dim]u[/dim] Units  [dim]f[/dim] Favorite  "
            "[dim]l[/dim] Locate  [dim]t[/dim] Theme  [dim]q[/dim] Quit",
            id="status-hints",
        )

    def on_mount(self) -> None:
        """Start clock update timer."""
        self.set_interval(1, self._tick)

    def _tick(self) -> None:
        now = datetime.now()
        self.query_one("#status-time", Static).update(f"[bold]{now:%H:%M:%S}[/bold]")

        updated = format_since(now - self._updated_at) if self._updated_at else ""
        self.query_one("#status-updated", Static).update(f"[dim]{updated}[/dim]")

        countdown = format_countdown(self._next_refresh - now) if self._next_refresh else ""
        self.query_one("#status-next-refresh", Static).update(f"[dim]{countdown}[/dim]")

    def mark_updated(self, when: datetime | None, interval_minutes: int) -> None:
        """Record a data update and schedule the next refresh countdown."""
        self._updated_at = when
        self._next_refresh = datetime.now() + timedelta(minutes=interval_minutes)
        self._tick()

    def set_mode(self, degraded: bool, unit: str = "metric") -> None:
        """Show whether the displayed data is live or served from the cache."""
        unit_label = "°F" if unit == "imperial" else "°C"
        mode = "[yellow]offline/cached[/yellow]" if degraded else "[green]live[/green]"
        self.query_one("#status-mode", Static).update(f"{mode} [dim]{unit_label}[/dim]")

    def set_activity(self, activity: str) -> None:
        """Set current activity message (e.g. "Fetching London...")."""
        self.query_one("#status-activity", Static).update(activity)
