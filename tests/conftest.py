"""Shared fixtures for the trivia_feed test suite."""

from datetime import datetime

import pytest

from trivia_feed.models import Interaction, InterestProfile

from .helpers import NOW, days_ago, science_tree


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def science_profile() -> InterestProfile:
    """Profile that knows Science/Physics/Mechanics and nothing else."""
    return InterestProfile(topics=science_tree(), last_refreshed=NOW)


@pytest.fixture
def graduated_profile() -> InterestProfile:
    """
    Profile past the cold start gate: 20 answered interactions on questions
    outside any test pool, cold start complete, refreshed just now.
    """
    interactions = {
        f"past-{i}": Interaction(time_spent=5000, was_correct=True, viewed_at=days_ago(2))
        for i in range(20)
    }
    return InterestProfile(
        topics=science_tree(),
        interactions=interactions,
        last_refreshed=NOW,
        cold_start_complete=True,
        total_questions_answered=20,
    )
