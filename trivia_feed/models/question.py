"""
Question model — typed representation of a trivia question for the ranking pipeline.

Used by the scorer, profile updater, feed selector, and cold start strategy instead of raw dicts.
Built from content-service dicts via Question.model_validate(d).
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# Subtopic/branch used when a question carries no tag for that level.
GENERAL = "General"


class Question(BaseModel):
    """
    Candidate question payload.

    Only id and topic matter to ranking; everything else is carried through untouched.
    tags[0] stands in for the subtopic and tags[1] for the branch.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    topic: str
    tags: Optional[List[str]] = Field(default_factory=list)
    difficulty: Optional[str] = None
    question: Optional[str] = ""

    @property
    def subtopic(self) -> str:
        return _tag_at(self.tags, 0)

    @property
    def branch(self) -> str:
        return _tag_at(self.tags, 1)

    def topic_path(self) -> Tuple[str, str, str]:
        """(topic, subtopic, branch) with "General" for missing tags."""
        return self.topic, self.subtopic, self.branch


def _tag_at(tags: Optional[List[str]], index: int) -> str:
    if not tags or len(tags) <= index:
        return GENERAL
    tag = (tags[index] or "").strip()
    return tag or GENERAL


def get_topic_path(question: "Question") -> Tuple[str, str, str]:
    """(topic, subtopic, branch) for a question."""
    return question.topic_path()


def ensure_questions(questions: List[Union[Dict[str, Any], "Question"]]) -> List["Question"]:
    """Convert list of dicts or Questions to list of Question models for use in the pipeline."""
    return [
        Question.model_validate(q) if isinstance(q, dict) else q
        for q in questions
    ]
