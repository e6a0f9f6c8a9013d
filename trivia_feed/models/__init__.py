"""Data models for the personalization engine."""

from .cold_start import ColdStartPhase, ColdStartState
from .config import DEFAULT_CONFIG, PersonalizationConfig, resolve_config
from .interaction import Interaction, InteractionKind, classify_interaction
from .profile import (
    BranchNode,
    InterestProfile,
    SubtopicNode,
    TopicNode,
    create_initial_profile,
)
from .question import GENERAL, Question, ensure_questions, get_topic_path
from .scoring import FeedResult, NoveltyClass, ScoredQuestion

__all__ = [
    "BranchNode",
    "ColdStartPhase",
    "ColdStartState",
    "DEFAULT_CONFIG",
    "FeedResult",
    "GENERAL",
    "Interaction",
    "InteractionKind",
    "InterestProfile",
    "NoveltyClass",
    "PersonalizationConfig",
    "Question",
    "ScoredQuestion",
    "SubtopicNode",
    "TopicNode",
    "classify_interaction",
    "create_initial_profile",
    "ensure_questions",
    "get_topic_path",
    "resolve_config",
]
