"""
Feed selection: turn a scored candidate pool into an ordered feed.

Public API: select_feed, in_cold_start, classify_novelty, allocate_quotas.
- core: cold start gate and quota fill (select_feed).
- Submodules: partition (novelty classes), quotas (slot allocation).
"""

from .core import in_cold_start, select_feed
from .partition import classify_novelty, partition_by_novelty
from .quotas import allocate_quotas

__all__ = [
    "allocate_quotas",
    "classify_novelty",
    "in_cold_start",
    "partition_by_novelty",
    "select_feed",
]
