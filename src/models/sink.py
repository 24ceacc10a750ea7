# src/models/sink.py

"""Interface the poll loop emits presentation events through."""

from collections.abc import Sequence
from typing import Protocol

from src.models.price_point import PricePoint


class PresentationSink(Protocol):
    """Receives log lines and chart points for display."""

    def log(self, lines: Sequence[str], alert: bool = False) -> None:
        """Append lines to the log; ``alert`` marks a threshold crossing."""
        ...

    def plot(self, point: PricePoint) -> None:
        """Append a point to the price chart."""
        ...
