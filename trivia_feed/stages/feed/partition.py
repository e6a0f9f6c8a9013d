"""
Novelty partition — split scored candidates by how new their topic path is to the user.

A question is new-topic if its topic is absent from the profile, new-subtopic if
the topic is known but the subtopic is not, new-branch if topic and subtopic are
known but the branch is not, and known otherwise.
"""

from typing import Dict, List

from ...models.profile import InterestProfile
from ...models.question import Question
from ...models.scoring import NoveltyClass, ScoredQuestion


def classify_novelty(question: Question, profile: InterestProfile) -> NoveltyClass:
    """Novelty class of one question against the profile's topic tree."""
    topic, subtopic, branch = question.topic_path()
    topic_node = profile.topics.get(topic)
    if topic_node is None:
        return NoveltyClass.NEW_TOPIC
    subtopic_node = topic_node.subtopics.get(subtopic)
    if subtopic_node is None:
        return NoveltyClass.NEW_SUBTOPIC
    if branch not in subtopic_node.branches:
        return NoveltyClass.NEW_BRANCH
    return NoveltyClass.KNOWN


def partition_by_novelty(
    scored: List[ScoredQuestion],
    profile: InterestProfile,
) -> Dict[NoveltyClass, List[ScoredQuestion]]:
    """
    Bucket scored questions by novelty class, each bucket sorted by score (desc).

    Sorting is stable, so ties keep their input order.
    """
    buckets: Dict[NoveltyClass, List[ScoredQuestion]] = {c: [] for c in NoveltyClass}
    for item in scored:
        buckets[classify_novelty(item.question, profile)].append(item)
    for items in buckets.values():
        items.sort(key=lambda x: x.score, reverse=True)
    return buckets
