"""HTTP surface of the price feed."""
