"""Ingestion layer: symbol resolution and quote fetching."""
