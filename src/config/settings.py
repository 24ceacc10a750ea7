# src/config/settings.py

"""Central configuration for the market_watch poller."""

import os
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(ValueError):
    """Raised at startup when the watch configuration is unusable."""


class Currency(IntEnum):
    """Steam wallet currency identifiers accepted by ``priceoverview``."""

    USD = 1
    GBP = 2
    EUR = 3
    CHF = 4
    RUB = 5
    PLN = 6
    BRL = 7
    JPY = 8
    NOK = 9
    IDR = 10
    MYR = 11
    PHP = 12
    SGD = 13
    THB = 14
    VND = 15
    KRW = 16
    TRY = 17
    UAH = 18
    MXN = 19
    CAD = 20
    AUD = 21
    NZD = 22

    @classmethod
    def parse(cls, value: "str | int | Currency") -> "Currency":
        """Resolve a numeric id (``10``) or code (``idr``) to a Currency."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        try:
            if text.isdigit():
                return cls(int(text))
            return cls[text.upper()]
        except (KeyError, ValueError):
            valid = ", ".join(f"{c.name}={c.value}" for c in cls)
            raise ConfigurationError(
                f"Unknown currency '{value}'. Valid: {valid}"
            ) from None


class Settings:
    """Central configuration for the market_watch poller."""

    # --- Upstream API ---
    PRICE_OVERVIEW_API: str = (
        "https://steamcommunity.com/market/priceoverview/"
        "?appid={app_id}&currency={currency}&market_hash_name={item}"
    )
    DEFAULT_APP_ID: int = 570           # Dota 2

    # --- Polling ---
    DEFAULT_INTERVAL: int = 30          # Seconds between ticks
    DEFAULT_CURRENCY: Currency = Currency.IDR

    # --- Requests ---
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    MAX_RETRIES: int = 2                # Attempts per fetch
    RETRY_DELAY: float = 2.0            # Linear backoff base (secs)

    # Must cover every attempt plus its backoff, or an abandoned fetch
    # thread could still be running when the next tick starts.
    FETCH_TIMEOUT: float = (
        REQUEST_TIMEOUT * MAX_RETRIES
        + RETRY_DELAY * MAX_RETRIES * (MAX_RETRIES - 1) / 2
        + 10.0
    )

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json, text/javascript, */*; q=0.01",
        "Accept-Language": "en-US,en;q=0.9",
        "X-Requested-With": "XMLHttpRequest",
        "Referer": "https://steamcommunity.com/market/",
    }

    # --- Presentation ---
    CHART_HISTORY: int = 120            # Points kept in the TUI chart
    TIMESTAMP_FORMAT: str = "%A %d %b %y %H:%M:%S"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Environment fallbacks for the CLI flags ---
    ENV_ITEM: str = "MARKET_WATCH_ITEM"
    ENV_CURRENCY: str = "MARKET_WATCH_CURRENCY"
    ENV_INTERVAL: str = "MARKET_WATCH_INTERVAL"
    ENV_PRICE: str = "MARKET_WATCH_PRICE"


@dataclass(frozen=True)
class WatchConfig:
    """Per-run watch parameters, fixed once the poller starts."""

    item_name: str
    currency: Currency = Settings.DEFAULT_CURRENCY
    interval: int = Settings.DEFAULT_INTERVAL
    price_threshold: float | None = None
    app_id: int = Settings.DEFAULT_APP_ID

    def validate(self) -> "WatchConfig":
        """Raise ConfigurationError if the config cannot drive a poll loop."""
        if not self.item_name or not self.item_name.strip():
            raise ConfigurationError(
                "An item name is required (--name or "
                f"{Settings.ENV_ITEM})."
            )
        if self.interval < 1:
            raise ConfigurationError(
                f"Interval must be a positive number of seconds, "
                f"got {self.interval}."
            )
        if self.price_threshold is not None and self.price_threshold < 0:
            raise ConfigurationError(
                f"Price limit must not be negative, "
                f"got {self.price_threshold}."
            )
        return self

    def summary_lines(self) -> list[str]:
        """Human-readable settings, omitting unset entries."""
        lines = [
            f"Item Name: {self.item_name}",
            f"Currency Code: {self.currency.value} ({self.currency.name})",
        ]
        if self.price_threshold is not None:
            lines.append(f"Price limit: {self.price_threshold:g}")
        lines.append(f"Interval: {self.interval}s")
        return lines


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be a whole number, got '{value}'."
        ) from None


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be a number, got '{value}'."
        ) from None


def build_config(
    item_name: str | None = None,
    currency: str | None = None,
    interval: str | int | None = None,
    price_threshold: str | float | None = None,
) -> WatchConfig:
    """Merge CLI values over environment values over defaults.

    Raises:
        ConfigurationError: when the merged values are missing or invalid.
    """
    item = item_name or os.getenv(Settings.ENV_ITEM, "")
    currency_raw = currency or os.getenv(Settings.ENV_CURRENCY)
    interval_raw = (
        interval if interval is not None
        else os.getenv(Settings.ENV_INTERVAL)
    )
    price_raw = (
        price_threshold if price_threshold is not None
        else os.getenv(Settings.ENV_PRICE)
    )

    config = WatchConfig(
        item_name=item.strip(),
        currency=(
            Currency.parse(currency_raw)
            if currency_raw
            else Settings.DEFAULT_CURRENCY
        ),
        interval=(
            _parse_int("Interval", str(interval_raw))
            if interval_raw not in (None, "")
            else Settings.DEFAULT_INTERVAL
        ),
        price_threshold=(
            _parse_float("Price limit", str(price_raw))
            if price_raw not in (None, "")
            else None
        ),
    )
    return config.validate()
