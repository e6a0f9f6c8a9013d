"""
Main feed selection: cold start gate, then decay → score → partition → quota fill.

Known items fill the bulk of the feed; fixed shares go to new branches, new
subtopics, and new topics, in that order. Short buckets are backfilled from
the next known items, then from leftover exploration items.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Set, Union

from ...models.cold_start import ColdStartPhase
from ...models.config import PersonalizationConfig, DEFAULT_CONFIG
from ...models.profile import InterestProfile
from ...models.question import Question, ensure_questions
from ...models.scoring import FeedResult, NoveltyClass, ScoredQuestion
from ...utils.time import utc_now
from ..cold_start import ColdStartStrategy, PhasedColdStartStrategy
from ..decay import apply_weight_decay
from ..scoring import score_question
from .partition import partition_by_novelty
from .quotas import EXPLORATION_LABELS, EXPLORATION_ORDER, allocate_quotas

logger = logging.getLogger(__name__)


def in_cold_start(
    profile: InterestProfile,
    config: PersonalizationConfig = DEFAULT_CONFIG,
) -> bool:
    """True while the user has too little history for standard ranking."""
    return (
        profile.total_interactions < config.cold_start_min_interactions
        or profile.total_questions_answered < config.cold_start_min_answered
        or not profile.cold_start_complete
    )


def _run_cold_start(
    candidates: List[Question],
    profile: InterestProfile,
    count: int,
    config: PersonalizationConfig,
    strategy: ColdStartStrategy,
    now: datetime,
) -> FeedResult:
    """Delegate to the cold start strategy and fold its state back into the profile."""
    logger.info(
        "[feed] COLD_START_DELEGATED interactions=%s answered=%s complete=%s",
        profile.total_interactions,
        profile.total_questions_answered,
        profile.cold_start_complete,
    )
    result = strategy.select(candidates, profile, count, now)

    state = result.state
    completed = (
        profile.cold_start_complete
        or (state.phase == ColdStartPhase.NORMAL and state.questions_shown >= config.cold_start_completion_shown)
    )
    if completed and not profile.cold_start_complete:
        logger.info("[feed] COLD_START_COMPLETE questions_shown=%s", state.questions_shown)
    updated = profile.model_copy(
        deep=True,
        update={"cold_start_state": state, "cold_start_complete": completed},
    )
    return FeedResult(
        items=result.items,
        explanations=result.explanations,
        profile=updated,
        used_cold_start=True,
    )


def _take(
    bucket: List[ScoredQuestion],
    limit: int,
    label: Optional[str],
    selected: List[Question],
    explanations: Dict[str, List[str]],
    taken: Set[str],
) -> None:
    """Append up to limit unused items from bucket to the feed."""
    added = 0
    for item in bucket:
        if added >= limit:
            break
        qid = item.question.id
        if qid in taken:
            continue
        selected.append(item.question)
        explanations[qid] = item.explanations + ([label] if label else [])
        taken.add(qid)
        added += 1


def select_feed(
    candidates: List[Union[Dict, Question]],
    profile: InterestProfile,
    count: int = 20,
    config: PersonalizationConfig = DEFAULT_CONFIG,
    cold_start_strategy: Optional[ColdStartStrategy] = None,
    now: Optional[datetime] = None,
) -> FeedResult:
    """
    Build an ordered feed of up to count questions.

    Returns exactly min(count, len(candidates)) items with explanation trails
    keyed by question id. Candidate ids are assumed unique; duplicates are
    selected at most once. A non-positive count or an empty pool returns the
    profile untouched, with no decay or cold start bookkeeping.
    """
    now = now or utc_now()
    # Content service may pass dicts
    candidates = ensure_questions(candidates)

    if count <= 0 or not candidates:
        return FeedResult(items=[], explanations={}, profile=profile, used_cold_start=in_cold_start(profile, config))

    # 1) Cold start gate
    if in_cold_start(profile, config):
        strategy = cold_start_strategy or PhasedColdStartStrategy(config)
        return _run_cold_start(candidates, profile, count, config, strategy, now)

    # 2) Decay, then score every candidate against the decayed profile
    decayed = apply_weight_decay(profile, now, config)
    scored = [score_question(q, decayed, config, now) for q in candidates]

    # 3) Partition by novelty and sort each bucket by score
    buckets = partition_by_novelty(scored, decayed)
    quotas = allocate_quotas(count, config)

    selected: List[Question] = []
    explanations: Dict[str, List[str]] = {}
    taken: Set[str] = set()

    # 4) Known items first, then exploration buckets
    _take(buckets[NoveltyClass.KNOWN], quotas[NoveltyClass.KNOWN], None, selected, explanations, taken)
    for novelty in EXPLORATION_ORDER:
        _take(buckets[novelty], quotas[novelty], EXPLORATION_LABELS[novelty], selected, explanations, taken)

    # 5) Backfill: remaining known items, then leftover exploration items
    if len(selected) < count:
        _take(buckets[NoveltyClass.KNOWN], count - len(selected), None, selected, explanations, taken)
    for novelty in EXPLORATION_ORDER:
        if len(selected) >= count:
            break
        _take(buckets[novelty], count - len(selected), EXPLORATION_LABELS[novelty], selected, explanations, taken)

    logger.info(
        "[feed] STANDARD_SELECTED count=%s requested=%s pool=%s known=%s new_branch=%s new_subtopic=%s new_topic=%s",
        len(selected),
        count,
        len(candidates),
        len(buckets[NoveltyClass.KNOWN]),
        len(buckets[NoveltyClass.NEW_BRANCH]),
        len(buckets[NoveltyClass.NEW_SUBTOPIC]),
        len(buckets[NoveltyClass.NEW_TOPIC]),
    )
    return FeedResult(items=selected, explanations=explanations, profile=decayed)
