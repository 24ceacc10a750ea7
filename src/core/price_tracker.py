# src/core/price_tracker.py

"""Cycle-to-cycle price movement and threshold alerting."""

import logging
import math
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("market_watch.tracker")


class Classification(Enum):
    """Direction of the price relative to the previous cycle."""

    DECREASED = "decreased"
    INCREASED = "increased"
    UNCHANGED = "unchanged"
    INVALID = "invalid"


class TrackerState(Enum):
    """Whether a previous price is known yet."""

    UNINITIALIZED = "uninitialized"
    TRACKING = "tracking"


def classify(delta: float) -> Classification:
    """Map ``previous - current`` to a Classification."""
    if math.isnan(delta):
        return Classification.INVALID
    if delta > 0:
        return Classification.DECREASED
    if delta < 0:
        return Classification.INCREASED
    return Classification.UNCHANGED


def _format_amount(value: float) -> str:
    # Float noise from subtraction, e.g. 0.30000000000000004
    return f"{value:.10g}"


@dataclass(frozen=True)
class PriceUpdate:
    """Outcome of one :meth:`PriceTracker.update` call."""

    price: float
    delta: float
    classification: Classification
    alert: bool = False
    skipped: bool = False

    def delta_text(self) -> str:
        """Rich-markup description of the movement, empty on bootstrap."""
        if self.skipped:
            return ""
        amount = _format_amount(abs(self.delta))
        if self.classification is Classification.DECREASED:
            return f"[green](down {amount})[/green]"
        if self.classification is Classification.INCREASED:
            return f"[red](up {amount})[/red]"
        if self.classification is Classification.UNCHANGED:
            return "[blue](no change)[/blue]"
        return ""


class PriceTracker:
    """Remembers the last recorded price and classifies each new one.

    ``previous`` only moves on cycles whose price is finite. A cycle
    that produced no usable sample (``inf`` or ``nan``) comes back with
    ``skipped=True`` and leaves the tracker exactly as it was.
    """

    def __init__(self, price_threshold: float | None = None) -> None:
        self.price_threshold = price_threshold
        self._previous: float | None = None

    @property
    def previous(self) -> float | None:
        return self._previous

    @property
    def state(self) -> TrackerState:
        if self._previous is None:
            return TrackerState.UNINITIALIZED
        return TrackerState.TRACKING

    def update(self, current: float) -> PriceUpdate:
        """Compare ``current`` with the previous cycle and record it."""
        previous = math.nan if self._previous is None else self._previous
        delta = previous - current

        if not math.isfinite(current):
            logger.debug(
                "Skipping cycle with no usable price (%s); previous=%s",
                current,
                self._previous,
            )
            return PriceUpdate(
                price=current,
                delta=delta,
                classification=Classification.INVALID,
                skipped=True,
            )

        classification = classify(delta)
        alert = (
            self.price_threshold is not None
            and current > self.price_threshold
        )
        self._previous = current
        logger.debug(
            "Recorded price %s (delta=%s, %s, alert=%s)",
            current,
            delta,
            classification.value,
            alert,
        )
        return PriceUpdate(
            price=current,
            delta=delta,
            classification=classification,
            alert=alert,
        )
