# src/scrapers/steam_market_client.py

"""Client for the Steam Community Market ``priceoverview`` endpoint."""

import logging
import time
from typing import Any
from urllib.parse import quote

from curl_cffi import requests as curl_requests

from src.config.settings import Currency, Settings
from src.models.price_overview import PriceOverview


class FetchError(Exception):
    """The upstream could not produce a price for this request."""


class SteamMarketClient:
    """Looks up the current market price summary for one item.

    Steam answers ``{"success": true, "median_price": "Rp 1.234", ...}``
    for tradable items and ``{"success": false}`` for unknown names.
    It also rate-limits aggressively with HTTP 429.
    """

    def __init__(self, app_id: int = Settings.DEFAULT_APP_ID) -> None:
        self.app_id = app_id
        self.logger = logging.getLogger("market_watch.steam")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def build_url(self, item_name: str, currency: Currency) -> str:
        """Return the ``priceoverview`` URL for an item and currency."""
        return self.settings.PRICE_OVERVIEW_API.format(
            app_id=self.app_id,
            currency=int(currency),
            item=quote(item_name, safe=""),
        )

    def _fetch(self, url: str) -> curl_requests.Response:
        """GET with a fixed number of attempts and linear backoff."""
        last_error = "no attempt made"
        for attempt in range(1, self.settings.MAX_RETRIES + 1):
            try:
                resp = self.session.get(
                    url,
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self.settings.REQUEST_TIMEOUT,
                )
                if resp.status_code == 200:
                    return resp
                last_error = f"HTTP {resp.status_code}"
                self.logger.warning(
                    "[steam] HTTP %d on attempt %d",
                    resp.status_code,
                    attempt,
                )
            except Exception as exc:
                last_error = str(exc)
                self.logger.warning(
                    "[steam] Request error on attempt %d: %s",
                    attempt,
                    exc,
                    exc_info=True,
                )
            if attempt < self.settings.MAX_RETRIES:
                time.sleep(self.settings.RETRY_DELAY * attempt)
        raise FetchError(last_error)

    @staticmethod
    def _parse_overview(data: Any) -> PriceOverview:
        """Validate a decoded response body."""
        if not isinstance(data, dict) or not data.get("success"):
            raise FetchError("Steam reported no price for this item")
        median = data.get("median_price")
        if not median:
            raise FetchError("Response has no median_price")
        return PriceOverview(
            median_price_text=str(median),
            lowest_price_text=str(data.get("lowest_price") or ""),
            volume=str(data.get("volume") or ""),
        )

    def fetch_price_overview(
        self, item_name: str, currency: Currency,
    ) -> PriceOverview:
        """Fetch the price summary for ``item_name`` in ``currency``.

        Raises:
            FetchError: on transport failure, a non-200 status after
                all attempts, a non-JSON body, or a body without a
                median price.
        """
        url = self.build_url(item_name, currency)
        self.logger.debug("[steam] GET %s", url)
        resp = self._fetch(url)
        try:
            data = resp.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON from Steam: {exc}") from exc
        overview = self._parse_overview(data)
        self.logger.info(
            "[steam] %s: median=%s lowest=%s volume=%s",
            item_name,
            overview.median_price_text,
            overview.lowest_price_text or "-",
            overview.volume or "-",
        )
        return overview
