"""Transport connectors."""
