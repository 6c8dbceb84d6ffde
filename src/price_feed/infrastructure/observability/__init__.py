"""
Observability for the price feed: structured, layer-tagged logging.
"""

from .logging import (
    get_api_logger,
    get_infrastructure_logger,
    get_ingestion_logger,
    get_logger,
    get_pipeline_logger,
    get_processing_logger,
    get_storage_logger,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    # Base
    "get_logger",
    # Layer-specific
    "get_infrastructure_logger",
    "get_ingestion_logger",
    "get_pipeline_logger",
    "get_processing_logger",
    "get_storage_logger",
    "get_api_logger",
]
