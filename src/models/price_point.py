# src/models/price_point.py

"""Chart sample emitted once per recorded polling cycle."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PricePoint:
    """The representative price of one cycle and when it was recorded."""

    timestamp: datetime
    price: float
