"""
Scoring model — ScoredQuestion and FeedResult returned by the ranking stages.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

from .profile import InterestProfile
from .question import Question


class NoveltyClass(str, Enum):
    """Where a question sits relative to the topics already in the profile."""

    NEW_TOPIC = "new_topic"
    NEW_SUBTOPIC = "new_subtopic"
    NEW_BRANCH = "new_branch"
    KNOWN = "known"


class ScoredQuestion(BaseModel):
    """A question with its score and the explanation trail behind it."""

    question: Question
    score: float
    explanations: List[str] = Field(default_factory=list)


class FeedResult(BaseModel):
    """
    Output of one ranking pass.

    items: ordered questions for the feed.
    explanations: question id → explanation trail.
    profile: the profile after decay / cold start bookkeeping; callers persist it.
    used_cold_start: True when the cold start strategy produced the feed.
    """

    items: List[Question]
    explanations: Dict[str, List[str]]
    profile: InterestProfile
    used_cold_start: bool = False
