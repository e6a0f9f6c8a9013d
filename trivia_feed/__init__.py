"""
Trivia Feed Personalization Engine

Single entry point for the trivia_feed package:
- models/: PersonalizationConfig, InterestProfile, Interaction, Question, FeedResult
- stages/: scoring, profile_update, decay, feed (selection), cold_start
- services/: profile stores (JSON file, in-memory)
- settings: environment-driven runtime settings and logging setup
"""

from .models import (
    DEFAULT_CONFIG,
    ColdStartPhase,
    ColdStartState,
    FeedResult,
    Interaction,
    InteractionKind,
    InterestProfile,
    NoveltyClass,
    PersonalizationConfig,
    Question,
    ScoredQuestion,
    create_initial_profile,
    ensure_questions,
    get_topic_path,
    resolve_config,
)
from .services import (
    InMemoryProfileStore,
    JsonProfileStore,
    ProfileStore,
    create_profile_store,
    sanitize_profile,
)
from .stages import (
    ColdStartResult,
    ColdStartStrategy,
    PhasedColdStartStrategy,
    allocate_quotas,
    apply_weight_decay,
    classify_novelty,
    get_node_weights,
    in_cold_start,
    score_question,
    select_feed,
    update_profile,
)

__all__ = [
    "ColdStartPhase",
    "ColdStartResult",
    "ColdStartState",
    "ColdStartStrategy",
    "DEFAULT_CONFIG",
    "FeedResult",
    "InMemoryProfileStore",
    "Interaction",
    "InteractionKind",
    "InterestProfile",
    "JsonProfileStore",
    "NoveltyClass",
    "PersonalizationConfig",
    "PhasedColdStartStrategy",
    "ProfileStore",
    "Question",
    "ScoredQuestion",
    "allocate_quotas",
    "apply_weight_decay",
    "classify_novelty",
    "create_initial_profile",
    "create_profile_store",
    "ensure_questions",
    "get_node_weights",
    "get_topic_path",
    "in_cold_start",
    "resolve_config",
    "sanitize_profile",
    "score_question",
    "select_feed",
    "update_profile",
]
