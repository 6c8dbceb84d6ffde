"""
One-shot batch runner.

Periodic scheduling stays outside the service (cron, systemd timers, ...);
each invocation runs exactly one batch and prints the response payload.

Usage:
    price-feed --symbols BTCUSD ETH/USD
    price-feed --config-dir ./config --pretty

Exit codes:
    0: at least one tick produced
    1: unexpected failure (logged)
    2: configuration error (nothing fetched)
    3: no data for any symbol (trading should pause)
"""

import argparse
import asyncio
import json
import sys

from price_feed.config.state import ConfigState, ConfigurationError, get_config
from price_feed.dependency_container import PriceFeedDependencyContainer
from price_feed.infrastructure.observability import get_api_logger, setup_logging

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_NO_DATA = 3

logger = get_api_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="price-feed",
        description="Fetch quotes, derive ticks and persist them to price_history.",
    )
    parser.add_argument(
        "--symbols",
        nargs="*",
        default=None,
        help="Internal symbols to fetch (default: active registry symbols)",
    )
    parser.add_argument("--config-dir", default=None, help="Configuration directory")
    parser.add_argument(
        "--pretty", action="store_true", help="Indent the JSON payload"
    )
    return parser


async def run_once(settings: ConfigState, symbols: list[str] | None) -> tuple[int, dict]:
    """Run one batch and return ``(exit_code, payload)``."""
    container = PriceFeedDependencyContainer(settings)
    try:
        workflow = container.create_workflow()
    except ConfigurationError as e:
        return EXIT_CONFIG_ERROR, {"error": str(e), "shouldPauseTrading": True}

    try:
        result = await workflow.run(symbols)
    except Exception:
        logger.exception("cli_batch_failed")
        return EXIT_ERROR, {"error": "Internal server error", "shouldPauseTrading": True}
    finally:
        await container.shutdown()

    code = EXIT_NO_DATA if result.should_pause_trading else EXIT_OK
    return code, result.to_payload()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_config(args.config_dir)
    setup_logging(level=settings.logging.level, json_logs=settings.logging.json_logs)

    code, payload = asyncio.run(run_once(settings, args.symbols or None))
    logger.info("cli_batch_finished", exit_code=code)
    print(json.dumps(payload, indent=2 if args.pretty else None))
    return code


if __name__ == "__main__":
    sys.exit(main())
