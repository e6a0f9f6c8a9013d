"""
Weight decay for topics, subtopics, and branches the user has drifted away from.

Runs at most once per decay interval (one day by default). Each run subtracts
days_since_refresh * decay_rate_per_day from every node not viewed in the last
idle window, floored at min_weight, then stamps last_refreshed.
"""

import logging
from datetime import datetime
from typing import Union

from ..models.config import PersonalizationConfig, DEFAULT_CONFIG
from ..models.profile import BranchNode, InterestProfile, SubtopicNode, TopicNode
from ..utils.time import days_between
from ..utils.weights import clamp_weight

logger = logging.getLogger(__name__)

Node = Union[TopicNode, SubtopicNode, BranchNode]


def _decay_node(
    node: Node,
    decay_factor: float,
    now: datetime,
    config: PersonalizationConfig,
) -> bool:
    """Decay one node in place if idle, else only clamp it; returns True when decay moved its weight."""
    if days_between(node.last_viewed, now) <= config.decay_idle_days:
        node.weight = clamp_weight(node.weight, config)
        return False
    before = node.weight
    node.weight = clamp_weight(clamp_weight(before, config) - decay_factor, config)
    return node.weight != before


def apply_weight_decay(
    profile: InterestProfile,
    now: datetime,
    config: PersonalizationConfig = DEFAULT_CONFIG,
) -> InterestProfile:
    """
    Return a decayed copy of the profile, or the profile itself when the last
    refresh was under one decay interval ago.
    """
    days_since_refresh = days_between(profile.last_refreshed, now)
    if days_since_refresh < config.decay_interval_days:
        return profile

    decay_factor = days_since_refresh * config.decay_rate_per_day
    updated = profile.model_copy(deep=True, update={"last_refreshed": now})

    decayed = 0
    for topic in updated.topics.values():
        decayed += _decay_node(topic, decay_factor, now, config)
        for subtopic in topic.subtopics.values():
            decayed += _decay_node(subtopic, decay_factor, now, config)
            for branch in subtopic.branches.values():
                decayed += _decay_node(branch, decay_factor, now, config)

    logger.info(
        "[decay] APPLIED days_since_refresh=%.2f decay_factor=%.3f nodes_decayed=%s",
        days_since_refresh,
        decay_factor,
        decayed,
    )
    return updated
