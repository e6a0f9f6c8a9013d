"""
Interest profile model — the weighted topic → subtopic → branch tree plus interaction history.

Nodes are created lazily by the profile updater; a missing node reads as the
default weight. Profiles are treated as immutable snapshots: engine functions
return new profiles instead of mutating their input.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field

from .cold_start import ColdStartState
from .interaction import Interaction


class BranchNode(BaseModel):
    """Most specific level of the hierarchy."""

    weight: float
    last_viewed: Optional[datetime] = None


class SubtopicNode(BaseModel):
    weight: float
    last_viewed: Optional[datetime] = None
    branches: Dict[str, BranchNode] = Field(default_factory=dict)


class TopicNode(BaseModel):
    weight: float
    last_viewed: Optional[datetime] = None
    subtopics: Dict[str, SubtopicNode] = Field(default_factory=dict)


class InterestProfile(BaseModel):
    """
    A user's interest model.

    topics: topic name → TopicNode (with nested subtopics and branches).
    interactions: question id → most recent Interaction.
    last_refreshed: when weight decay was last applied.
    total_questions_answered: answers with known correctness (skips excluded).
    cold_start_state: opaque to the ranker; owned by the cold start strategy.
    """

    topics: Dict[str, TopicNode] = Field(default_factory=dict)
    interactions: Dict[str, Interaction] = Field(default_factory=dict)
    last_refreshed: datetime
    cold_start_complete: bool = False
    total_questions_answered: int = Field(default=0, ge=0)
    cold_start_state: Optional[ColdStartState] = None

    @property
    def total_interactions(self) -> int:
        return len(self.interactions)


def create_initial_profile(now: datetime) -> InterestProfile:
    """An empty profile for a brand new user."""
    return InterestProfile(last_refreshed=now)
