"""
Per-question scoring against the interest profile.

score = topic_affinity * w_affinity
        + (accuracy + speed + skip penalty + cooldown)   if seen before
        + novelty bonus                                  otherwise

Scores are additive and not normalized. The explanation trail is for
observability only; ranking uses the score alone.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from ..models.config import PersonalizationConfig, DEFAULT_CONFIG
from ..models.interaction import Interaction
from ..models.profile import InterestProfile
from ..models.question import Question
from ..models.scoring import ScoredQuestion
from ..utils.time import days_between, utc_now
from ..utils.weights import clamp_weight


def get_node_weights(
    question: Question,
    profile: InterestProfile,
    config: PersonalizationConfig = DEFAULT_CONFIG,
) -> Tuple[float, float, float]:
    """(topic, subtopic, branch) weights for a question; missing nodes read as the default."""
    topic, subtopic, branch = question.topic_path()
    topic_weight = subtopic_weight = branch_weight = None

    topic_node = profile.topics.get(topic)
    if topic_node is not None:
        topic_weight = topic_node.weight
        subtopic_node = topic_node.subtopics.get(subtopic)
        if subtopic_node is not None:
            subtopic_weight = subtopic_node.weight
            branch_node = subtopic_node.branches.get(branch)
            if branch_node is not None:
                branch_weight = branch_node.weight

    return (
        clamp_weight(topic_weight, config),
        clamp_weight(subtopic_weight, config),
        clamp_weight(branch_weight, config),
    )


def _history_terms(
    interaction: Interaction,
    config: PersonalizationConfig,
    now: datetime,
) -> Tuple[float, List[str]]:
    """Accuracy, speed, skip, and cooldown terms from a previous interaction."""
    score = 0.0
    explanations: List[str] = []

    if interaction.was_correct is not None:
        accuracy = config.weight_accuracy if interaction.was_correct else -config.weight_accuracy
        score += accuracy
        sign = "+" if interaction.was_correct else "-"
        explanations.append(f"Previous accuracy: {sign}{config.weight_accuracy:.2f}")

    time_score = 0.0
    if interaction.time_spent < config.fast_answer_ms:
        time_score = config.weight_time_spent
    elif interaction.time_spent > config.long_answer_ms:
        time_score = -config.weight_time_spent
    score += time_score
    explanations.append(f"Time spent: {time_score:.2f} ({interaction.time_spent}ms)")

    if interaction.was_skipped:
        score += config.weight_skip_penalty
        explanations.append(f"Skip penalty: {config.weight_skip_penalty:.2f}")

    days_since_view = max(0.0, days_between(interaction.viewed_at or now, now))
    cooldown = min(days_since_view * config.weight_cooldown, config.cooldown_cap)
    score += cooldown
    explanations.append(f"Cooldown bonus: +{cooldown:.2f} ({days_since_view:.1f} days)")

    return score, explanations


def score_question(
    question: Question,
    profile: InterestProfile,
    config: PersonalizationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> ScoredQuestion:
    """
    Score one candidate question for the user.

    Reads the profile but never mutates it; identical inputs (including now)
    give identical scores.
    """
    now = now or utc_now()
    topic, subtopic, branch = question.topic_path()

    # 1) Topic affinity: mean of the three levels
    affinity = sum(get_node_weights(question, profile, config)) / 3
    score = affinity * config.weight_topic_affinity
    explanations = [f"Topic affinity: {affinity:.2f} ({topic}/{subtopic}/{branch})"]

    # 2) Seen before: history terms; otherwise novelty bonus
    interaction = profile.interactions.get(question.id)
    if interaction is not None:
        history_score, history_explanations = _history_terms(interaction, config, now)
        score += history_score
        explanations.extend(history_explanations)
    else:
        score += config.weight_novelty
        explanations.append(f"Novelty bonus: +{config.weight_novelty:.2f} (never seen)")

    return ScoredQuestion(question=question, score=score, explanations=explanations)
