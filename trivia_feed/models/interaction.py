"""
Interaction model — one user event (answer, skip, or view) on a question.

Interactions are keyed by question id inside the profile; the latest event
for an id replaces the earlier one.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class InteractionKind(str, Enum):
    """Which weight-update rule an interaction triggers."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    SKIPPED = "skipped"
    VIEWED = "viewed"


class Interaction(BaseModel):
    """
    A single interaction with a question.

    time_spent: milliseconds on the question.
    was_correct: True/False once answered, None when correctness is unknown.
    viewed_at: stamped by the profile updater; optional on input.
    """

    time_spent: int = Field(default=0, ge=0)
    was_correct: Optional[bool] = None
    was_skipped: bool = False
    viewed_at: Optional[datetime] = None

    @property
    def kind(self) -> InteractionKind:
        return classify_interaction(self)


def classify_interaction(interaction: "Interaction") -> InteractionKind:
    """Answers take precedence over the skip flag."""
    if interaction.was_correct is True:
        return InteractionKind.CORRECT
    if interaction.was_correct is False:
        return InteractionKind.INCORRECT
    if interaction.was_skipped:
        return InteractionKind.SKIPPED
    return InteractionKind.VIEWED
