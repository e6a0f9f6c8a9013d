"""
Cold start contract — the alternate selection path for users with little history.

The feed selector hands the whole ranking pass to a ColdStartStrategy until the
user clears the cold start gate. Strategies return their updated state; the
selector stores it on the profile and marks cold start complete once the state
reaches the terminal phase with enough questions shown.
"""

from datetime import datetime
from typing import Dict, List, Optional, Protocol

from pydantic import BaseModel

from ...models.cold_start import ColdStartState
from ...models.profile import InterestProfile
from ...models.question import Question


class ColdStartResult(BaseModel):
    """Items, explanation trails, and the strategy's new state."""

    items: List[Question]
    explanations: Dict[str, List[str]]
    state: ColdStartState


class ColdStartStrategy(Protocol):
    """Protocol for cold start selection. Implement to replace the phased default."""

    def select(
        self,
        candidates: List[Question],
        profile: InterestProfile,
        count: int,
        now: Optional[datetime] = None,
    ) -> ColdStartResult:
        """Pick up to count questions for a user still in cold start."""
        ...
