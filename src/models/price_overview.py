# src/models/price_overview.py

"""Upstream market price summary for a single item."""

from dataclasses import dataclass


@dataclass
class PriceOverview:
    """Currency-formatted prices as returned by ``priceoverview``.

    Only ``median_price_text`` is guaranteed; Steam omits the other
    fields for items with thin trading volume.
    """

    median_price_text: str
    lowest_price_text: str = ""
    volume: str = ""
