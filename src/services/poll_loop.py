# src/services/poll_loop.py

"""Fetch, reduce, track and emit on a fixed delay."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Protocol

from rich.markup import escape

from src.config.settings import Currency, Settings, WatchConfig
from src.core.price_parser import parse_price
from src.core.price_tracker import PriceTracker, PriceUpdate
from src.core.sample_accumulator import SampleAccumulator
from src.models.price_overview import PriceOverview
from src.models.price_point import PricePoint
from src.models.sink import PresentationSink

logger = logging.getLogger("market_watch.poll")

ALERT_MESSAGE = (
    "Deal alert! The price for the item you specified is higher than "
    "your asking price. Time to sell it quick."
)


class PriceClient(Protocol):
    """Anything that can look up a price summary."""

    def fetch_price_overview(
        self, item_name: str, currency: Currency,
    ) -> PriceOverview:
        ...


class PollLoop:
    """Runs one fetch per tick and sleeps ``interval`` seconds between.

    Only one fetch is ever in flight. The delay starts once a tick has
    fully finished, so slow fetches push later ticks back rather than
    overlapping them. ``sleep`` and ``clock`` are injectable so tests
    can drive several ticks without waiting.
    """

    def __init__(
        self,
        config: WatchConfig,
        client: PriceClient,
        sink: PresentationSink,
        accumulator: SampleAccumulator | None = None,
        tracker: PriceTracker | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        clock: Callable[[], datetime] = datetime.now,
        fetch_timeout: float = Settings.FETCH_TIMEOUT,
    ) -> None:
        self.config = config
        self.client = client
        self.sink = sink
        self.accumulator = (
            accumulator if accumulator is not None else SampleAccumulator()
        )
        self.tracker = (
            tracker if tracker is not None
            else PriceTracker(config.price_threshold)
        )
        self._sleep = sleep
        self._clock = clock
        self.fetch_timeout = fetch_timeout
        self.ticks = 0

    async def _fetch(self) -> PriceOverview | None:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(
                    self.client.fetch_price_overview,
                    self.config.item_name,
                    self.config.currency,
                ),
                timeout=self.fetch_timeout,
            )
        except asyncio.TimeoutError:
            # The worker thread runs on; FETCH_TIMEOUT outlasts its retries.
            reason = f"no response within {self.fetch_timeout:g}s"
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
        logger.warning(
            "Fetch failed for '%s': %s", self.config.item_name, reason,
        )
        self.sink.log([f"[yellow]Fetch failed: {escape(reason)}[/yellow]"])
        return None

    def _emit(self, update: PriceUpdate) -> None:
        if update.alert:
            self.sink.log([ALERT_MESSAGE], alert=True)
        message = (
            f"Price for {escape(self.config.item_name)} is currently "
            f"{update.price:g} {self.config.currency.name}"
        )
        delta_text = update.delta_text()
        if delta_text:
            message = f"{message} {delta_text}"
        self.sink.log([message])
        self.sink.plot(PricePoint(timestamp=self._clock(), price=update.price))

    async def tick(self) -> PriceUpdate:
        """Run a single cycle and return the tracker's verdict."""
        self.ticks += 1
        overview = await self._fetch()
        if overview is not None:
            self.accumulator.add(parse_price(overview.median_price_text))

        sample_count = len(self.accumulator)
        current = self.accumulator.reduce()
        self.accumulator.reset()

        update = self.tracker.update(current)
        if update.skipped:
            logger.debug(
                "Tick %d: no usable price from %d sample(s)",
                self.ticks,
                sample_count,
            )
            return update

        logger.info(
            "Tick %d: price=%s classification=%s alert=%s",
            self.ticks,
            update.price,
            update.classification.value,
            update.alert,
        )
        self._emit(update)
        return update

    async def run(self, max_ticks: int | None = None) -> None:
        """Tick forever, or ``max_ticks`` times when given."""
        logger.info(
            "Polling '%s' every %ds (currency=%s, threshold=%s)",
            self.config.item_name,
            self.config.interval,
            self.config.currency.name,
            self.config.price_threshold,
        )
        completed = 0
        while True:
            await self.tick()
            completed += 1
            if max_ticks is not None and completed >= max_ticks:
                break
            await self._sleep(self.config.interval)
