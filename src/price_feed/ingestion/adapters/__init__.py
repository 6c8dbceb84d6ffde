"""Provider adapters (one plugin package per upstream provider)."""
