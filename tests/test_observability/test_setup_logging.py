"""
Tests for setup_logging() and the layer-specific logger factories.

Every other module logs through these, so a broken configuration silently
loses all pipeline events.
"""

import json
import logging
from io import StringIO

import pytest
import structlog

from price_feed.infrastructure.observability import (
    get_ingestion_logger,
    get_pipeline_logger,
    setup_logging,
)


@pytest.fixture
def clean_logging():
    """
    Reset logging between tests.

    structlog and logging both keep global state.
    """
    original_handlers = logging.root.handlers[:]

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()

    yield

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()
    logging.root.handlers = original_handlers


@pytest.fixture
def captured(clean_logging):
    """Attach a StringIO handler to the root logger; yields the buffer."""
    buffer = StringIO()
    handler = logging.StreamHandler(buffer)
    handler.setFormatter(logging.Formatter("%(message)s"))

    def _attach(level=logging.INFO):
        logging.root.setLevel(level)
        handler.setLevel(level)
        logging.root.addHandler(handler)
        return buffer

    yield _attach
    logging.root.removeHandler(handler)


def parse_json_lines(output: str) -> list[dict]:
    entries = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return entries


class TestSetupLogging:
    def test_json_mode_emits_parseable_entries(self, captured):
        setup_logging(level="INFO", json_logs=True, include_timestamp=True)
        assert structlog.is_configured()
        buffer = captured()

        structlog.get_logger("test_json").info("json_test_event", value=123)

        entries = parse_json_lines(buffer.getvalue())
        assert entries, "No valid JSON found"
        entry = entries[0]
        assert entry["event"] == "json_test_event"
        assert entry["value"] == 123
        assert entry["app"] == "price-feed"
        assert entry["severity"] == "INFO"
        assert "timestamp" in entry

    def test_without_timestamp(self, captured):
        setup_logging(level="INFO", json_logs=True, include_timestamp=False)
        buffer = captured()

        logger = structlog.get_logger("test_no_ts")
        logger.debug("debug_should_not_appear")
        logger.info("no_timestamp_test", test_value=True)

        entries = parse_json_lines(buffer.getvalue())
        assert [e["event"] for e in entries] == ["no_timestamp_test"]
        assert "timestamp" not in entries[0]

    def test_text_mode_produces_output(self, captured):
        setup_logging(level="INFO", json_logs=False)
        buffer = captured()

        structlog.get_logger("test_text").info("text_test_event", value=456)

        assert "text_test_event" in buffer.getvalue()

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    def test_root_level_follows_setting(self, clean_logging, level):
        setup_logging(level=level, json_logs=True)
        assert logging.root.level == getattr(logging, level)

    def test_invalid_level_falls_back_to_info(self, clean_logging):
        setup_logging(level="INVALID_LEVEL", json_logs=True)
        assert logging.root.level == logging.INFO


class TestLayerLoggers:
    def test_ingestion_logger_binds_layer_and_provider(self, captured):
        setup_logging(level="INFO", json_logs=True, include_timestamp=False)
        buffer = captured()

        log = get_ingestion_logger("finnhub-client", provider="finnhub")
        log.info("quote_fetched", symbol="BINANCE:BTCUSDT", price=50000.0)

        entry = parse_json_lines(buffer.getvalue())[0]
        assert entry["layer"] == "ingestion"
        assert entry["component"] == "finnhub-client"
        assert entry["provider"] == "finnhub"
        assert entry["symbol"] == "BINANCE:BTCUSDT"

    def test_pipeline_logger_records_exceptions(self, captured):
        setup_logging(level="INFO", json_logs=True, include_timestamp=False)
        buffer = captured()

        log = get_pipeline_logger("tick-sink")
        try:
            raise RuntimeError("pool exhausted")
        except RuntimeError:
            log.exception("ticks_persist_failed", records=2)

        entry = parse_json_lines(buffer.getvalue())[0]
        assert entry["layer"] == "pipeline"
        assert entry["severity"] == "ERROR"
        assert "pool exhausted" in entry["exception"]

    def test_special_characters_do_not_raise(self, captured):
        setup_logging(level="INFO", json_logs=True)
        captured()
        logger = structlog.get_logger("special_chars")

        for key, value in [
            ("unicode", "café ñ"),
            ("special", "line\nbreak\ttab\\backslash"),
            ("quotes", "single' double\""),
        ]:
            logger.info("special_char_test", **{key: value})
