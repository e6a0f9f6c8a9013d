"""
Test helpers: fixed clock and question/profile builders.

All tests pin "now" to a fixed instant so scores, decay, and cooldown
bonuses are reproducible.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from trivia_feed.models import BranchNode, Question, SubtopicNode, TopicNode

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def make_question(
    qid: str,
    topic: str,
    subtopic: Optional[str] = None,
    branch: Optional[str] = None,
    difficulty: Optional[str] = "easy",
) -> Question:
    tags = [t for t in (subtopic, branch) if t is not None]
    return Question(id=qid, topic=topic, tags=tags, difficulty=difficulty)


def make_questions(prefix: str, n: int, topic: str, subtopic: str, branch: str) -> List[Question]:
    return [make_question(f"{prefix}{i}", topic, subtopic, branch) for i in range(n)]


def science_tree(
    topic_weight: float = 0.6,
    subtopic_weight: float = 0.7,
    branch_weight: float = 0.5,
    last_viewed: datetime = NOW,
) -> dict:
    """Science → Physics → Mechanics with the given weights."""
    return {
        "Science": TopicNode(
            weight=topic_weight,
            last_viewed=last_viewed,
            subtopics={
                "Physics": SubtopicNode(
                    weight=subtopic_weight,
                    last_viewed=last_viewed,
                    branches={
                        "Mechanics": BranchNode(weight=branch_weight, last_viewed=last_viewed),
                    },
                ),
            },
        ),
    }
