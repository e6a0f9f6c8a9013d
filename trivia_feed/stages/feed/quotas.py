"""
Exploration quotas — how many feed slots each novelty class receives.
"""

import math
from typing import Dict

from ...models.config import PersonalizationConfig, DEFAULT_CONFIG
from ...models.scoring import NoveltyClass

# Absorbs float error such as 20 * 0.15 landing a hair under 3.
_EPSILON = 1e-9

# Order in which exploration buckets follow the known items in the feed.
EXPLORATION_ORDER = (
    NoveltyClass.NEW_BRANCH,
    NoveltyClass.NEW_SUBTOPIC,
    NoveltyClass.NEW_TOPIC,
)

EXPLORATION_LABELS = {
    NoveltyClass.NEW_BRANCH: "Exploration: New branch within known subtopic",
    NoveltyClass.NEW_SUBTOPIC: "Exploration: New subtopic within known topic",
    NoveltyClass.NEW_TOPIC: "Exploration: Entirely new topic",
}


def _floor_share(count: int, fraction: float) -> int:
    return int(math.floor(count * fraction + _EPSILON))


def allocate_quotas(
    count: int,
    config: PersonalizationConfig = DEFAULT_CONFIG,
) -> Dict[NoveltyClass, int]:
    """
    Slots per novelty class for a feed of count items.

    Exploration classes get their configured share, floored; known items get the rest.
    A non-positive count allocates nothing.
    """
    if count <= 0:
        return {c: 0 for c in NoveltyClass}
    quotas = {
        NoveltyClass.NEW_TOPIC: _floor_share(count, config.quota_new_topic),
        NoveltyClass.NEW_SUBTOPIC: _floor_share(count, config.quota_new_subtopic),
        NoveltyClass.NEW_BRANCH: _floor_share(count, config.quota_new_branch),
    }
    quotas[NoveltyClass.KNOWN] = count - sum(quotas.values())
    return quotas
