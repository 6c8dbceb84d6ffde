"""Cross-cutting infrastructure: database access and observability."""
