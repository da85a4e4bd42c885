"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_relay_log

console = Console()


class RelayInfo:
    """Info about a single relayed request."""

    def __init__(self, method: str, target_url: str, status: int, elapsed_ms: float, timestamp: datetime):
        self.method = method
        self.target_url = target_url[:80] + "..." if len(target_url) > 80 else target_url
        self.status = status
        self.elapsed_ms = elapsed_ms
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent relays and request counts."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._relays: list[RelayInfo] = []
        self._max_relays = 10
        self._request_count = {"relay": 0, "preflight": 0, "static": 0, "error": 0}
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

    def log_preflight(self, path: str) -> None:
        """Count a pre-flight request."""
        with self._lock:
            self._request_count["preflight"] += 1
            self._refresh()
            if self.config.proxy.debug:
                write_cli_log("PREFLIGHT", path)

    def log_static(self, path: str, *, reserved: bool) -> None:
        """Log a request handed to the static site."""
        with self._lock:
            self._request_count["static"] += 1
            self._refresh()
            write_cli_log("STATIC", path, reserved=reserved)

    def log_relay(
        self,
        method: str,
        target_url: str,
        status: int,
        headers: dict[str, str],
        *,
        elapsed_ms: float,
    ) -> None:
        """Log a request relayed to its target."""
        with self._lock:
            self._request_count["relay"] += 1
            info = RelayInfo(
                method=method,
                target_url=target_url,
                status=status,
                elapsed_ms=elapsed_ms,
                timestamp=datetime.now(),
            )
            self._relays.insert(0, info)
            self._relays = self._relays[: self._max_relays]

            if self.config.proxy.debug:
                write_relay_log(method, target_url, status, headers, elapsed_ms=elapsed_ms)
            write_cli_log("RELAY", f"{method} {target_url}", status=status, ms=round(elapsed_ms))

            self._refresh()

    def log_error(self, target: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._request_count["error"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{status} {target[:40]}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], target=target, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="relays"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["relays"].update(self._build_relays_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("CORS Relay", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Relayed: {self._request_count['relay']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Pre-flight: {self._request_count['preflight']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Static: {self._request_count['static']}", style="green")
        stats.append("  |  ")
        stats.append(f"Errors: {self._request_count['error']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_relays_panel(self) -> Panel:
        """Build recent relays panel."""
        if self._relays:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Status", width=6)
            table.add_column("ms", justify="right", width=7)
            table.add_column("Target", ratio=1)

            for relay in self._relays:
                style = "red" if relay.status >= 400 else "green"
                table.add_row(
                    relay.timestamp.strftime("%H:%M:%S"),
                    relay.method,
                    Text(str(relay.status), style=style),
                    f"{relay.elapsed_ms:.0f}",
                    relay.target_url,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent relays[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and usage hint."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            base = f"http://{self.config.proxy.host}:{self.config.proxy.port}"
            content = Text(
                f"Try {base}/?url=https://example.com or {base}/https://example.com",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
