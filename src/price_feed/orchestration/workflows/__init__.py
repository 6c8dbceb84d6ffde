"""Workflows."""

from price_feed.orchestration.workflows.price_feed_workflow import (
    BatchResult,
    PriceFeedWorkflow,
)

__all__ = ["BatchResult", "PriceFeedWorkflow"]
