# main.py

"""Entry point for market_watch (TUI dashboard or headless poller)."""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.markup import escape

from src.config.logging_config import setup_logging
from src.config.settings import (
    ConfigurationError,
    Currency,
    Settings,
    WatchConfig,
    build_config,
)

logger = logging.getLogger("market_watch.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    currencies = ", ".join(f"{c.name}={c.value}" for c in Currency)

    parser = argparse.ArgumentParser(
        prog="market_watch",
        description="Live Steam Community Market price tracker.",
        epilog=f"Currencies: {currencies}",
    )
    parser.add_argument(
        "--name",
        default=None,
        dest="item_name",
        help=(
            "Market hash name of the item to watch "
            f"(env {Settings.ENV_ITEM})."
        ),
    )
    parser.add_argument(
        "--currency",
        default=None,
        help=(
            "Steam currency id or code "
            f"(default: {Settings.DEFAULT_CURRENCY.value} = "
            f"{Settings.DEFAULT_CURRENCY.name})."
        ),
    )
    parser.add_argument(
        "--interval",
        default=None,
        help=(
            "Seconds between polls "
            f"(default: {Settings.DEFAULT_INTERVAL})."
        ),
    )
    parser.add_argument(
        "--price",
        default=None,
        dest="price_threshold",
        help="Alert when the price rises above this value.",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        default=False,
        help="Print events to the console instead of the dashboard.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        default=False,
        help="Headless only: poll a single time and exit.",
    )
    return parser


def _run_tui(config: WatchConfig) -> None:
    """Launch the Textual dashboard."""
    from src.ui.app import MarketWatchApp

    try:
        app = MarketWatchApp(config)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("market_watch TUI shutting down")


def _run_headless(config: WatchConfig, once: bool) -> None:
    """Poll without the dashboard until interrupted."""
    from src.cli.runner import run_headless

    try:
        exit_code = asyncio.run(run_headless(config, once=once))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
        exit_code = 0
    sys.exit(exit_code)


def main(argv: list[str] | None = None) -> None:
    """Validate configuration, then start the TUI or headless poller."""
    args = _build_parser().parse_args(argv)

    try:
        config = build_config(
            item_name=args.item_name,
            currency=args.currency,
            interval=args.interval,
            price_threshold=args.price_threshold,
        )
    except ConfigurationError as exc:
        Console(stderr=True).print(
            f"[red]Configuration error:[/red] {escape(str(exc))}"
        )
        sys.exit(2)

    log_file = setup_logging(console=args.headless)
    logger.info("market_watch starting, log file: %s", log_file)
    logger.info("Config: %s", config)

    if args.headless:
        _run_headless(config, args.once)
    else:
        _run_tui(config)


if __name__ == "__main__":
    main()
