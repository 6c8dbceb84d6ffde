"""
Utilities Module - Shared Helper Functions
===========================================

Timestamp helpers shared by derivation and response payloads.
"""

from price_feed.common.utils.date_utils import to_iso_millis, utc_now

__all__ = [
    "to_iso_millis",
    "utc_now",
]
