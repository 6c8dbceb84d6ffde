"""Shared vocabulary used across layers."""
