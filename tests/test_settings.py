# tests/test_settings.py

"""Tests for Settings constants and the per-run WatchConfig."""

import os
import unittest
from dataclasses import FrozenInstanceError
from pathlib import Path
from unittest.mock import patch

from src.config.settings import (
    ConfigurationError,
    Currency,
    Settings,
    WatchConfig,
    build_config,
)


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_default_interval_is_thirty_seconds(self) -> None:
        self.assertEqual(Settings.DEFAULT_INTERVAL, 30)

    def test_default_currency_is_rupiah(self) -> None:
        self.assertIs(Settings.DEFAULT_CURRENCY, Currency.IDR)
        self.assertEqual(Settings.DEFAULT_CURRENCY.value, 10)

    def test_timeouts_positive(self) -> None:
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)
        self.assertGreater(Settings.FETCH_TIMEOUT, Settings.REQUEST_TIMEOUT)

    def test_fetch_timeout_outlasts_client_retries(self) -> None:
        """A timed-out fetch must not still be retrying at the next tick."""
        worst_case = (
            Settings.REQUEST_TIMEOUT * Settings.MAX_RETRIES
            + sum(
                Settings.RETRY_DELAY * attempt
                for attempt in range(1, Settings.MAX_RETRIES)
            )
        )
        self.assertGreater(Settings.FETCH_TIMEOUT, worst_case)

    def test_max_retries_is_positive(self) -> None:
        self.assertGreaterEqual(Settings.MAX_RETRIES, 1)

    def test_api_template_placeholders(self) -> None:
        for name in ("{app_id}", "{currency}", "{item}"):
            with self.subTest(name=name):
                self.assertIn(name, Settings.PRICE_OVERVIEW_API)

    def test_logs_dir_is_path(self) -> None:
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)


class TestCurrency(unittest.TestCase):
    """Currency.parse accepts ids and codes."""

    def test_parse_numeric(self) -> None:
        self.assertIs(Currency.parse("10"), Currency.IDR)
        self.assertIs(Currency.parse(1), Currency.USD)

    def test_parse_code_case_insensitive(self) -> None:
        self.assertIs(Currency.parse("eur"), Currency.EUR)
        self.assertIs(Currency.parse(" GBP "), Currency.GBP)

    def test_parse_passthrough(self) -> None:
        self.assertIs(Currency.parse(Currency.JPY), Currency.JPY)

    def test_parse_unknown_raises(self) -> None:
        for value in ("XYZ", "999", ""):
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    Currency.parse(value)


class TestWatchConfig(unittest.TestCase):
    """Validation and summary of the per-run configuration."""

    def test_missing_item_name_is_fatal(self) -> None:
        with self.assertRaises(ConfigurationError):
            WatchConfig(item_name="  ").validate()

    def test_non_positive_interval_is_fatal(self) -> None:
        with self.assertRaises(ConfigurationError):
            WatchConfig(item_name="Gem", interval=0).validate()

    def test_negative_threshold_is_fatal(self) -> None:
        with self.assertRaises(ConfigurationError):
            WatchConfig(item_name="Gem", price_threshold=-1).validate()

    def test_validate_returns_self(self) -> None:
        config = WatchConfig(item_name="Gem")
        self.assertIs(config.validate(), config)

    def test_is_frozen(self) -> None:
        config = WatchConfig(item_name="Gem")
        with self.assertRaises(FrozenInstanceError):
            config.interval = 5  # type: ignore[misc]

    def test_summary_omits_unset_threshold(self) -> None:
        lines = WatchConfig(item_name="Gem").summary_lines()
        self.assertIn("Item Name: Gem", lines)
        self.assertFalse(any(line.startswith("Price limit") for line in lines))

    def test_summary_includes_threshold(self) -> None:
        lines = WatchConfig(item_name="Gem", price_threshold=70).summary_lines()
        self.assertIn("Price limit: 70", lines)


@patch.dict(os.environ, {}, clear=True)
class TestBuildConfig(unittest.TestCase):
    """CLI values override environment values override defaults."""

    def test_defaults(self) -> None:
        config = build_config(item_name="Gem")
        self.assertEqual(config.currency, Currency.IDR)
        self.assertEqual(config.interval, 30)
        self.assertIsNone(config.price_threshold)

    def test_cli_values(self) -> None:
        config = build_config(
            item_name="Gem", currency="1", interval="5", price_threshold="12.5"
        )
        self.assertIs(config.currency, Currency.USD)
        self.assertEqual(config.interval, 5)
        self.assertEqual(config.price_threshold, 12.5)

    def test_environment_fallback(self) -> None:
        env = {
            Settings.ENV_ITEM: "Env Gem",
            Settings.ENV_CURRENCY: "eur",
            Settings.ENV_INTERVAL: "60",
            Settings.ENV_PRICE: "3",
        }
        with patch.dict(os.environ, env):
            config = build_config()
        self.assertEqual(config.item_name, "Env Gem")
        self.assertIs(config.currency, Currency.EUR)
        self.assertEqual(config.interval, 60)
        self.assertEqual(config.price_threshold, 3.0)

    def test_cli_beats_environment(self) -> None:
        with patch.dict(os.environ, {Settings.ENV_ITEM: "Env Gem"}):
            config = build_config(item_name="Cli Gem")
        self.assertEqual(config.item_name, "Cli Gem")

    def test_missing_item_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_config()

    def test_bad_interval_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_config(item_name="Gem", interval="soon")

    def test_bad_price_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_config(item_name="Gem", price_threshold="cheap")


if __name__ == "__main__":
    unittest.main()
