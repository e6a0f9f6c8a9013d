"""
Weight helpers — clamp node weights into the configured bounds.
"""

import math
from typing import Optional

from ..models.config import PersonalizationConfig, resolve_config


def clamp_weight(
    value: Optional[float],
    config: Optional[PersonalizationConfig] = None,
) -> float:
    """
    Clamp a weight into [min_weight, max_weight].

    None and NaN become the default weight; infinities land on the nearest bound.
    """
    config = resolve_config(config)
    if value is None or math.isnan(value):
        return config.default_weight
    return max(config.min_weight, min(config.max_weight, value))
