"""Engine stages: scoring, profile update, decay, feed selection, cold start."""

from .cold_start import ColdStartResult, ColdStartStrategy, PhasedColdStartStrategy
from .decay import apply_weight_decay
from .feed import allocate_quotas, classify_novelty, in_cold_start, select_feed
from .profile_update import update_profile, weight_deltas
from .scoring import get_node_weights, score_question

__all__ = [
    "ColdStartResult",
    "ColdStartStrategy",
    "PhasedColdStartStrategy",
    "allocate_quotas",
    "apply_weight_decay",
    "classify_novelty",
    "get_node_weights",
    "in_cold_start",
    "score_question",
    "select_feed",
    "update_profile",
    "weight_deltas",
]
