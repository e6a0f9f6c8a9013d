"""Shared utilities for timestamps and weight sanitizing."""

from .time import days_between, utc_now
from .weights import clamp_weight

__all__ = [
    "clamp_weight",
    "days_between",
    "utc_now",
]
