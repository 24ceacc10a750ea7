# src/ui/app.py

"""Live terminal dashboard for a single market item."""

import logging
from collections import deque
from collections.abc import Callable, Sequence
from datetime import datetime

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, RichLog, Sparkline, Static

from src.config.settings import Settings, WatchConfig
from src.models.price_point import PricePoint
from src.scrapers.steam_market_client import SteamMarketClient
from src.services.poll_loop import PollLoop, PriceClient

logger = logging.getLogger("market_watch.ui")

_RAINBOW = ("red", "dark_orange", "yellow", "green", "blue", "magenta")


def rainbow(message: str) -> Text:
    """Colour each visible character of ``message`` in turn."""
    text = Text()
    colour = 0
    for ch in message:
        if ch.isspace():
            text.append(ch)
            continue
        text.append(ch, style=f"bold {_RAINBOW[colour % len(_RAINBOW)]}")
        colour += 1
    return text


class DashboardSink:
    """Routes poll-loop events into the dashboard's widgets."""

    def __init__(
        self,
        app: "MarketWatchApp",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.app = app
        self._clock = clock

    def log(self, lines: Sequence[str], alert: bool = False) -> None:
        stamp = self._clock().strftime(Settings.TIMESTAMP_FORMAT)
        for line in lines:
            body = Text.from_markup(line)
            if alert:
                body = rainbow(body.plain)
            self.app.write_log(Text.assemble(f"{stamp}: ", body))

    def plot(self, point: PricePoint) -> None:
        self.app.add_point(point)


class MarketWatchApp(App[None]):
    """Settings, price chart and event log for one watched item."""

    TITLE = "Steam Market Watch"

    CSS = """
    #settings {
        height: auto;
        border: round green;
        padding: 0 1;
    }
    #chart_panel {
        height: 1fr;
        border: round green;
    }
    #chart {
        height: 1fr;
        margin: 1 2;
    }
    #chart_caption {
        padding: 0 2;
        text-style: italic;
    }
    #log {
        height: 1fr;
        border: round green;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
        Binding("ctrl+c", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        config: WatchConfig,
        client: PriceClient | None = None,
        poll_loop: PollLoop | None = None,
    ) -> None:
        super().__init__()
        self.config = config
        self.history: deque[PricePoint] = deque(
            maxlen=Settings.CHART_HISTORY
        )
        self.sink = DashboardSink(self)
        self.poll_loop = poll_loop or PollLoop(
            config,
            client or SteamMarketClient(config.app_id),
            self.sink,
        )

    def compose(self) -> ComposeResult:
        """Build the widget tree for the dashboard."""
        yield Header()
        settings = Static(
            escape("\n".join(self.config.summary_lines())), id="settings"
        )
        settings.border_title = "Settings"
        yield settings

        chart_panel = Vertical(
            Sparkline([], summary_function=min, id="chart"),
            Static("Waiting for first price...", id="chart_caption"),
            id="chart_panel",
        )
        chart_panel.border_title = "Prices"
        yield chart_panel

        log = RichLog(id="log", wrap=True)
        log.border_title = "Log"
        yield log
        yield Footer()

    def on_mount(self) -> None:
        """Start polling once the widgets exist."""
        logger.info("Dashboard mounted for '%s'", self.config.item_name)
        self.run_worker(self.poll_loop.run(), name="poll", exclusive=True)

    def write_log(self, line: Text) -> None:
        """Append one rendered line to the log panel."""
        self.query_one("#log", RichLog).write(line)

    def add_point(self, point: PricePoint) -> None:
        """Append a price to the chart and refresh the caption."""
        self.history.append(point)
        prices = [p.price for p in self.history]
        self.query_one("#chart", Sparkline).data = prices
        caption = (
            f"last {point.price:g} at "
            f"{point.timestamp.strftime(Settings.TIMESTAMP_FORMAT)}  "
            f"min {min(prices):g}  max {max(prices):g}  "
            f"({len(prices)} points, {self.config.currency.name})"
        )
        self.query_one("#chart_caption", Static).update(caption)
