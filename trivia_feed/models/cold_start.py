"""
Cold start state — serializable progress of the cold start strategy.

Stored on the profile so the next ranking pass resumes where the last one stopped.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ColdStartPhase(str, Enum):
    """Exploration (questions 1-5), branching (6-20), normal (beyond 20)."""

    EXPLORATION = "exploration"
    BRANCHING = "branching"
    NORMAL = "normal"


class ColdStartState(BaseModel):
    phase: ColdStartPhase = ColdStartPhase.EXPLORATION
    questions_shown: int = Field(default=0, ge=0)
    shown_question_ids: List[str] = Field(default_factory=list)
    topics_shown: List[str] = Field(default_factory=list)
    # Most recent first.
    last_selected_topics: List[str] = Field(default_factory=list)
    exploration_question_ids: List[str] = Field(default_factory=list)
