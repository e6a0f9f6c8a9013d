"""
Profile update — fold one interaction into the interest profile.

Records the interaction, creates missing topic/subtopic/branch nodes, refreshes
their timestamps, and shifts their weights by the delta for the interaction kind:

    correct    topic +0.05  subtopic +0.08  branch +0.10
    incorrect  topic -0.02  subtopic -0.03  branch -0.05
    skipped    topic -0.05  subtopic -0.07  branch -0.10

Returns a new profile; the input is never touched.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from ..models.config import PersonalizationConfig, DEFAULT_CONFIG
from ..models.interaction import Interaction, InteractionKind, classify_interaction
from ..models.profile import BranchNode, InterestProfile, SubtopicNode, TopicNode
from ..models.question import Question
from ..utils.time import utc_now
from ..utils.weights import clamp_weight

logger = logging.getLogger(__name__)


def weight_deltas(
    kind: InteractionKind,
    config: PersonalizationConfig = DEFAULT_CONFIG,
) -> Tuple[float, float, float]:
    """(topic, subtopic, branch) weight deltas for an interaction kind."""
    if kind == InteractionKind.CORRECT:
        return (
            config.correct_topic_delta,
            config.correct_subtopic_delta,
            config.correct_branch_delta,
        )
    if kind == InteractionKind.INCORRECT:
        return (
            config.incorrect_topic_delta,
            config.incorrect_subtopic_delta,
            config.incorrect_branch_delta,
        )
    if kind == InteractionKind.SKIPPED:
        return (
            config.skip_topic_delta,
            config.skip_subtopic_delta,
            config.skip_branch_delta,
        )
    return 0.0, 0.0, 0.0


def _ensure_nodes(
    profile: InterestProfile,
    question: Question,
    config: PersonalizationConfig,
    now: datetime,
) -> Tuple[TopicNode, SubtopicNode, BranchNode]:
    """Resolve the question's nodes in profile, creating any that are missing."""
    topic, subtopic, branch = question.topic_path()

    topic_node = profile.topics.get(topic)
    if topic_node is None:
        topic_node = TopicNode(weight=config.default_weight, last_viewed=now)
        profile.topics[topic] = topic_node

    subtopic_node = topic_node.subtopics.get(subtopic)
    if subtopic_node is None:
        subtopic_node = SubtopicNode(weight=config.default_weight, last_viewed=now)
        topic_node.subtopics[subtopic] = subtopic_node

    branch_node = subtopic_node.branches.get(branch)
    if branch_node is None:
        branch_node = BranchNode(weight=config.default_weight, last_viewed=now)
        subtopic_node.branches[branch] = branch_node

    return topic_node, subtopic_node, branch_node


def update_profile(
    profile: InterestProfile,
    question_id: str,
    interaction: Interaction,
    question: Question,
    config: PersonalizationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> InterestProfile:
    """
    Return a new profile with the interaction recorded and weights adjusted.

    Callers must serialize updates per user: two updates derived from the same
    snapshot would each drop the other's change.
    """
    now = now or utc_now()
    updated = profile.model_copy(deep=True)
    kind = classify_interaction(interaction)

    # 1) Interaction history (latest event wins; an answer clears the skip flag)
    updated.interactions[question_id] = interaction.model_copy(
        update={
            "viewed_at": now,
            "was_skipped": interaction.was_skipped and interaction.was_correct is None,
        }
    )
    if interaction.was_correct is not None:
        updated.total_questions_answered += 1

    # 2) Nodes and timestamps
    topic_node, subtopic_node, branch_node = _ensure_nodes(updated, question, config, now)
    topic_node.last_viewed = now
    subtopic_node.last_viewed = now
    branch_node.last_viewed = now

    # 3) Weights, clamped into bounds
    topic_delta, subtopic_delta, branch_delta = weight_deltas(kind, config)
    topic_node.weight = clamp_weight(clamp_weight(topic_node.weight, config) + topic_delta, config)
    subtopic_node.weight = clamp_weight(
        clamp_weight(subtopic_node.weight, config) + subtopic_delta, config
    )
    branch_node.weight = clamp_weight(clamp_weight(branch_node.weight, config) + branch_delta, config)

    logger.debug(
        "[profile_update] %s question_id=%s path=%s weights=(%.2f, %.2f, %.2f)",
        kind.value.upper(),
        question_id,
        "/".join(question.topic_path()),
        topic_node.weight,
        subtopic_node.weight,
        branch_node.weight,
    )
    return updated
