"""Workflow operators."""

from price_feed.orchestration.operators.write_operators import TickSink

__all__ = ["TickSink"]
