"""
Phased cold start strategy — the default ColdStartStrategy.

Walks a new user through three phases, decided per slot from the running
count of questions shown:

- exploration (questions 1-5): one question per topic, topics never shown first.
- branching (questions 6-20): two picks from the user's preferred topics
  (profile weight above 0.5, highest first), then one pick from a topic never
  shown, repeating.
- normal (beyond 20): highest topic weight first, with a guard against any
  topic taking more than twice its share of the batch.

Selection is deterministic: ties keep candidate order. Questions already shown
are never picked again, and the first 10 questions are limited to easy and
medium difficulty when the pool allows it.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple

from ...models.cold_start import ColdStartPhase, ColdStartState
from ...models.config import PersonalizationConfig, resolve_config
from ...models.profile import InterestProfile
from ...models.question import Question
from ...utils.weights import clamp_weight
from .base import ColdStartResult
from .diversity import is_topic_allowed, track_topic

logger = logging.getLogger(__name__)

EXPLORATION_QUESTIONS = 5
BRANCHING_QUESTIONS = 20
EASY_QUESTIONS = 10
EASY_DIFFICULTIES = {"easy", "medium"}
PREFERRED_TOPIC_THRESHOLD = 0.5
# Every third branching pick explores a topic the user has not seen.
BRANCHING_CYCLE = 3

PHASE_LABELS = {
    ColdStartPhase.EXPLORATION: "Initial exploration phase (questions 1-5)",
    ColdStartPhase.BRANCHING: "Branching phase (questions 6-20)",
    ColdStartPhase.NORMAL: "Normal phase (beyond question 20)",
}


def phase_for(questions_shown: int) -> ColdStartPhase:
    """Phase for the next question given how many have been shown."""
    if questions_shown < EXPLORATION_QUESTIONS:
        return ColdStartPhase.EXPLORATION
    if questions_shown < BRANCHING_QUESTIONS:
        return ColdStartPhase.BRANCHING
    return ColdStartPhase.NORMAL


def _is_easy(question: Question) -> bool:
    if not question.difficulty:
        return True
    return question.difficulty.strip().lower() in EASY_DIFFICULTIES


class PhasedColdStartStrategy:
    """Exploration → branching → normal selection for users with little history."""

    def __init__(self, config: Optional[PersonalizationConfig] = None):
        self.config = resolve_config(config)

    def select(
        self,
        candidates: List[Question],
        profile: InterestProfile,
        count: int,
        now: Optional[datetime] = None,
    ) -> ColdStartResult:
        state = (profile.cold_start_state or ColdStartState()).model_copy(deep=True)
        weights = {
            topic: clamp_weight(node.weight, self.config)
            for topic, node in profile.topics.items()
        }
        shown: Set[str] = set(state.shown_question_ids)
        topics_shown: Set[str] = set(state.topics_shown)
        batch_counts: Dict[str, int] = {}

        items: List[Question] = []
        explanations: Dict[str, List[str]] = {}

        for _ in range(max(count, 0)):
            position = state.questions_shown + len(items)
            phase = phase_for(position)
            remaining = self._remaining(candidates, shown, position)
            if not remaining:
                break

            picked = self._pick(phase, position, remaining, state, weights, topics_shown, batch_counts)
            question, is_exploration, mechanism = picked

            items.append(question)
            shown.add(question.id)
            state.shown_question_ids.append(question.id)
            if question.topic not in topics_shown:
                topics_shown.add(question.topic)
                state.topics_shown.append(question.topic)
            if is_exploration:
                state.exploration_question_ids.append(question.id)
            track_topic(question.topic, state.last_selected_topics, batch_counts)

            weight = weights.get(question.topic, self.config.default_weight)
            kind = "Exploration" if is_exploration else "Preferred"
            explanations[question.id] = [
                f"{kind} question from {question.topic} (weight: {weight:.2f})",
                PHASE_LABELS[phase],
                f"Selection mechanism: {mechanism}",
            ]

        state.questions_shown += len(items)
        state.phase = phase_for(state.questions_shown)
        logger.info(
            "[cold_start] SELECTED count=%s requested=%s questions_shown=%s phase=%s",
            len(items),
            count,
            state.questions_shown,
            state.phase.value,
        )
        return ColdStartResult(items=items, explanations=explanations, state=state)

    # ------------------------------------------------------------------
    # Candidate filtering
    # ------------------------------------------------------------------

    def _remaining(
        self,
        candidates: List[Question],
        shown: Set[str],
        position: int,
    ) -> List[Question]:
        """Unshown candidates, limited to easy/medium early on when any exist."""
        unseen = [q for q in candidates if q.id not in shown]
        if position < EASY_QUESTIONS:
            easy = [q for q in unseen if _is_easy(q)]
            if easy:
                return easy
        return unseen

    # ------------------------------------------------------------------
    # Phase pickers
    # ------------------------------------------------------------------

    def _pick(
        self,
        phase: ColdStartPhase,
        position: int,
        remaining: List[Question],
        state: ColdStartState,
        weights: Dict[str, float],
        topics_shown: Set[str],
        batch_counts: Dict[str, int],
    ) -> Tuple[Question, bool, str]:
        """(question, is_exploration, mechanism) for the next slot."""

        def allowed(topic: str) -> bool:
            return is_topic_allowed(topic, phase, state.last_selected_topics, batch_counts)

        if phase == ColdStartPhase.EXPLORATION:
            question = self._first_new_topic(remaining, topics_shown, allowed)
            if question is not None:
                return question, True, "initial exploration"

        elif phase == ColdStartPhase.BRANCHING:
            explore_slot = (position - EXPLORATION_QUESTIONS) % BRANCHING_CYCLE == BRANCHING_CYCLE - 1
            if not explore_slot:
                question = self._best_preferred(remaining, weights, allowed)
                if question is not None:
                    return question, False, "branching-preference"
            question = self._first_new_topic(remaining, topics_shown, allowed)
            if question is not None:
                return question, True, "branching-exploration"

        else:
            question = self._best_weighted(remaining, weights, allowed)
            if question is not None:
                return question, question.topic not in topics_shown, "normal-personalization"

        return self._fallback(remaining, weights, allowed, topics_shown, phase)

    def _first_new_topic(self, remaining, topics_shown, allowed) -> Optional[Question]:
        for question in remaining:
            if question.topic not in topics_shown and allowed(question.topic):
                return question
        return None

    def _best_preferred(self, remaining, weights, allowed) -> Optional[Question]:
        preferred = [
            q for q in remaining
            if weights.get(q.topic, self.config.default_weight) > PREFERRED_TOPIC_THRESHOLD
            and allowed(q.topic)
        ]
        return self._highest_weight(preferred, weights)

    def _best_weighted(self, remaining, weights, allowed) -> Optional[Question]:
        return self._highest_weight([q for q in remaining if allowed(q.topic)], weights)

    def _highest_weight(self, questions: List[Question], weights: Dict[str, float]) -> Optional[Question]:
        if not questions:
            return None
        # max() keeps the first of equal keys, so ties resolve to candidate order
        return max(questions, key=lambda q: weights.get(q.topic, self.config.default_weight))

    def _fallback(self, remaining, weights, allowed, topics_shown, phase) -> Tuple[Question, bool, str]:
        """Best weighted question that passes the diversity rules, else the best overall."""
        question = self._best_weighted(remaining, weights, allowed)
        if question is None:
            logger.debug("[cold_start] DIVERSITY_RELAXED phase=%s remaining=%s", phase.value, len(remaining))
            question = self._highest_weight(remaining, weights)
        return question, question.topic not in topics_shown, f"{phase.value}-fallback"
