# src/cli/runner.py

"""Headless poller: the same loop as the TUI, printed with Rich."""

import logging
from collections import deque
from collections.abc import Callable, Sequence
from datetime import datetime

from rich.console import Console

from src.config.settings import Settings, WatchConfig
from src.models.price_point import PricePoint
from src.scrapers.steam_market_client import SteamMarketClient
from src.services.poll_loop import PollLoop, PriceClient

logger = logging.getLogger("market_watch.cli")


class ConsoleSink:
    """Prints timestamped log lines; chart points are counted."""

    def __init__(
        self,
        console: Console | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.console = console or Console()
        self._clock = clock
        self.points: deque[PricePoint] = deque(maxlen=Settings.CHART_HISTORY)
        self.plotted = 0

    def _stamp(self) -> str:
        return self._clock().strftime(Settings.TIMESTAMP_FORMAT)

    def log(self, lines: Sequence[str], alert: bool = False) -> None:
        stamp = self._stamp()
        for line in lines:
            if alert:
                self.console.print(
                    f"[dim]{stamp}:[/dim] [bold magenta]{line}[/bold magenta]"
                )
            else:
                self.console.print(f"[dim]{stamp}:[/dim] {line}")

    def plot(self, point: PricePoint) -> None:
        self.points.append(point)
        self.plotted += 1
        logger.debug("Plotted %s at %s", point.price, point.timestamp)


def print_settings(config: WatchConfig, console: Console) -> None:
    """Echo the watch settings before the first tick."""
    console.rule("[bold cyan]Settings[/bold cyan]")
    for line in config.summary_lines():
        console.print(f"[dim]{line}[/dim]")
    console.rule()


async def run_headless(
    config: WatchConfig,
    once: bool = False,
    client: PriceClient | None = None,
    console: Console | None = None,
) -> int:
    """Poll without the TUI.

    Runs until interrupted, or for a single tick when ``once`` is set.
    Returns 0 if at least one price was recorded, 1 otherwise.
    """
    sink = ConsoleSink(console)
    print_settings(config, sink.console)
    loop = PollLoop(
        config,
        client or SteamMarketClient(config.app_id),
        sink,
    )
    await loop.run(max_ticks=1 if once else None)
    return 0 if sink.plotted else 1
