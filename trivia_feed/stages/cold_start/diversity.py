"""
Topic diversity rules shared by the cold start phases.

- No more than MAX_CONSECUTIVE_TOPIC picks in a row from one topic.
- Branching phase: a topic may not repeat within the recent-topic window.
- Normal phase: once a batch holds 4 picks, a topic already at twice its fair
  share is rejected.
"""

from typing import Dict, List

from ...models.cold_start import ColdStartPhase

MAX_CONSECUTIVE_TOPIC = 2
RECENT_TOPIC_WINDOW = MAX_CONSECUTIVE_TOPIC * 2
MIN_PICKS_FOR_SHARE_CHECK = 4


def is_topic_allowed(
    topic: str,
    phase: ColdStartPhase,
    last_selected_topics: List[str],
    batch_counts: Dict[str, int],
) -> bool:
    """True if picking topic next keeps the feed diverse enough for the phase."""
    recent = last_selected_topics[:MAX_CONSECUTIVE_TOPIC]
    if len(recent) >= MAX_CONSECUTIVE_TOPIC and all(t == topic for t in recent):
        return False

    if phase == ColdStartPhase.BRANCHING:
        if topic in last_selected_topics[:RECENT_TOPIC_WINDOW]:
            return False

    if phase == ColdStartPhase.NORMAL:
        total = sum(batch_counts.values())
        if total >= MIN_PICKS_FOR_SHARE_CHECK:
            fair_share = 1 / (len(batch_counts) or 1)
            if batch_counts.get(topic, 0) / total >= fair_share * 2:
                return False

    return True


def track_topic(
    topic: str,
    last_selected_topics: List[str],
    batch_counts: Dict[str, int],
) -> None:
    """Record a pick: newest topic first, window capped, batch count bumped."""
    last_selected_topics.insert(0, topic)
    del last_selected_topics[RECENT_TOPIC_WINDOW:]
    batch_counts[topic] = batch_counts.get(topic, 0) + 1
