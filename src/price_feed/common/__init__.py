"""Common helpers shared by every layer."""
