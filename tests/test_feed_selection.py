"""
Feed Selection Tests

Tests the standard ranking pass for users past cold start:

- quotas: 5% new topic, 10% new subtopic, 15% new branch, remainder known
- order: known items by score, then new branch, new subtopic, new topic
- backfill when a bucket runs short, so the feed holds min(count, pool) items
- cold start gate hands the pass to the cold start strategy

Run:
----
    pytest tests/test_feed_selection.py -v
"""

from typing import List

import pytest

from trivia_feed.models import (
    ColdStartPhase,
    ColdStartState,
    Interaction,
    InterestProfile,
    NoveltyClass,
    PersonalizationConfig,
)
from trivia_feed.stages.cold_start import ColdStartResult
from trivia_feed.stages.feed import allocate_quotas, classify_novelty, in_cold_start, select_feed

from .helpers import NOW, days_ago, make_question, make_questions, science_tree


def _pool(known=20, new_branch=5, new_subtopic=5, new_topic=5):
    return (
        make_questions("k", known, "Science", "Physics", "Mechanics")
        + make_questions("b", new_branch, "Science", "Physics", "Optics")
        + make_questions("s", new_subtopic, "Science", "Chemistry", "Organic")
        + make_questions("t", new_topic, "History", "Ancient", "Rome")
    )


def _ids(result) -> List[str]:
    return [q.id for q in result.items]


class StubStrategy:
    """Cold start strategy that returns the first count candidates with a fixed end state."""

    def __init__(self, phase: ColdStartPhase, questions_shown: int):
        self.phase = phase
        self.questions_shown = questions_shown
        self.calls = 0

    def select(self, candidates, profile, count, now=None):
        self.calls += 1
        items = candidates[:count]
        return ColdStartResult(
            items=items,
            explanations={q.id: ["stub"] for q in items},
            state=ColdStartState(phase=self.phase, questions_shown=self.questions_shown),
        )


class TestQuotaAllocation:

    def test_twenty_items(self):
        quotas = allocate_quotas(20)
        assert quotas[NoveltyClass.NEW_TOPIC] == 1
        assert quotas[NoveltyClass.NEW_SUBTOPIC] == 2
        assert quotas[NoveltyClass.NEW_BRANCH] == 3
        assert quotas[NoveltyClass.KNOWN] == 14

    def test_small_feed_floors_to_zero(self):
        quotas = allocate_quotas(5)
        assert quotas[NoveltyClass.NEW_TOPIC] == 0
        assert quotas[NoveltyClass.NEW_SUBTOPIC] == 0
        assert quotas[NoveltyClass.NEW_BRANCH] == 0
        assert quotas[NoveltyClass.KNOWN] == 5

    def test_non_positive_count(self):
        assert sum(allocate_quotas(0).values()) == 0
        assert sum(allocate_quotas(-3).values()) == 0


class TestNoveltyClasses:

    @pytest.mark.parametrize(
        "path,expected",
        [
            (("Science", "Physics", "Mechanics"), NoveltyClass.KNOWN),
            (("Science", "Physics", "Optics"), NoveltyClass.NEW_BRANCH),
            (("Science", "Chemistry", "Organic"), NoveltyClass.NEW_SUBTOPIC),
            (("History", "Ancient", "Rome"), NoveltyClass.NEW_TOPIC),
        ],
    )
    def test_classify(self, science_profile, path, expected):
        question = make_question("q", *path)
        assert classify_novelty(question, science_profile) == expected


class TestStandardSelection:

    def test_quota_layout(self, graduated_profile):
        result = select_feed(_pool(), graduated_profile, count=20, now=NOW)
        ids = _ids(result)

        assert not result.used_cold_start
        assert len(ids) == 20
        assert all(i.startswith("k") for i in ids[:14])
        assert all(i.startswith("b") for i in ids[14:17])
        assert all(i.startswith("s") for i in ids[17:19])
        assert ids[19].startswith("t")

    def test_exploration_labels(self, graduated_profile):
        result = select_feed(_pool(), graduated_profile, count=20, now=NOW)
        ids = _ids(result)

        assert result.explanations[ids[14]][-1] == "Exploration: New branch within known subtopic"
        assert result.explanations[ids[17]][-1] == "Exploration: New subtopic within known topic"
        assert result.explanations[ids[19]][-1] == "Exploration: Entirely new topic"
        assert not any(e.startswith("Exploration") for e in result.explanations[ids[0]])

    def test_known_items_ordered_by_score(self, graduated_profile):
        profile = graduated_profile.model_copy(deep=True)
        # k2: correct and fast three days ago (0.88); k1: skipped today (-0.02)
        profile.interactions["k2"] = Interaction(time_spent=2000, was_correct=True, viewed_at=days_ago(3))
        profile.interactions["k1"] = Interaction(time_spent=5000, was_skipped=True, viewed_at=NOW)
        pool = make_questions("k", 3, "Science", "Physics", "Mechanics")

        result = select_feed(pool, profile, count=3, now=NOW)

        assert _ids(result) == ["k2", "k0", "k1"]

    def test_ties_keep_candidate_order(self, graduated_profile):
        pool = make_questions("k", 5, "Science", "Physics", "Mechanics")
        result = select_feed(pool, graduated_profile, count=5, now=NOW)

        assert _ids(result) == ["k0", "k1", "k2", "k3", "k4"]

    def test_every_item_has_explanations(self, graduated_profile):
        result = select_feed(_pool(), graduated_profile, count=20, now=NOW)

        assert set(result.explanations) == set(_ids(result))
        assert all(result.explanations[i][0].startswith("Topic affinity") for i in _ids(result))


class TestBackfill:

    def test_short_exploration_backfilled_from_known(self, graduated_profile):
        pool = _pool(known=25, new_branch=0, new_subtopic=0, new_topic=0)
        result = select_feed(pool, graduated_profile, count=20, now=NOW)

        assert len(result.items) == 20
        assert all(i.startswith("k") for i in _ids(result))

    def test_short_known_backfilled_from_exploration(self, graduated_profile):
        pool = _pool(known=2, new_branch=5, new_subtopic=0, new_topic=0)
        result = select_feed(pool, graduated_profile, count=10, now=NOW)

        assert len(result.items) == 7
        assert _ids(result)[:2] == ["k0", "k1"]
        assert set(_ids(result)) == {q.id for q in pool}

    def test_count_larger_than_pool(self, graduated_profile):
        pool = _pool(known=3, new_branch=1, new_subtopic=1, new_topic=1)
        result = select_feed(pool, graduated_profile, count=50, now=NOW)

        assert len(result.items) == 6
        assert len(set(_ids(result))) == 6

    def test_zero_count(self, graduated_profile):
        result = select_feed(_pool(), graduated_profile, count=0, now=NOW)

        assert result.items == []
        assert result.explanations == {}

    def test_empty_pool(self, graduated_profile):
        result = select_feed([], graduated_profile, count=20, now=NOW)

        assert result.items == []
        assert result.profile == graduated_profile

    def test_duplicate_ids_selected_once(self, graduated_profile):
        pool = make_questions("k", 3, "Science", "Physics", "Mechanics") * 2
        result = select_feed(pool, graduated_profile, count=6, now=NOW)

        assert sorted(_ids(result)) == ["k0", "k1", "k2"]


class TestDecayDuringSelection:

    def test_stale_profile_decayed_and_returned(self, graduated_profile):
        stale = graduated_profile.model_copy(
            deep=True,
            update={
                "topics": science_tree(last_viewed=days_ago(5)),
                "last_refreshed": days_ago(3),
            },
        )

        result = select_feed(_pool(), stale, count=20, now=NOW)

        assert result.profile.last_refreshed == NOW
        assert result.profile.topics["Science"].weight == pytest.approx(0.45)
        # input untouched
        assert stale.topics["Science"].weight == 0.6

    def test_fresh_profile_returned_unchanged(self, graduated_profile):
        result = select_feed(_pool(), graduated_profile, count=20, now=NOW)
        assert result.profile is graduated_profile


class TestColdStartGate:

    def test_gate_conditions(self, graduated_profile):
        assert not in_cold_start(graduated_profile)

        incomplete = graduated_profile.model_copy(update={"cold_start_complete": False})
        assert in_cold_start(incomplete)

        few_answers = graduated_profile.model_copy(update={"total_questions_answered": 19})
        assert in_cold_start(few_answers)

        few_interactions = graduated_profile.model_copy(
            update={"interactions": dict(list(graduated_profile.interactions.items())[:19])}
        )
        assert in_cold_start(few_interactions)

    def test_gate_thresholds_configurable(self, graduated_profile):
        config = PersonalizationConfig(cold_start_min_interactions=30)
        assert in_cold_start(graduated_profile, config)

    def test_new_user_uses_strategy(self, now):
        strategy = StubStrategy(ColdStartPhase.EXPLORATION, 5)
        profile = InterestProfile(last_refreshed=now)

        result = select_feed(_pool(), profile, count=5, cold_start_strategy=strategy, now=now)

        assert strategy.calls == 1
        assert result.used_cold_start
        assert _ids(result) == ["k0", "k1", "k2", "k3", "k4"]
        assert result.profile.cold_start_state.questions_shown == 5
        assert not result.profile.cold_start_complete
        assert profile.cold_start_state is None

    def test_strategy_completion_marks_profile(self, now):
        strategy = StubStrategy(ColdStartPhase.NORMAL, 20)
        profile = InterestProfile(last_refreshed=now)

        result = select_feed(_pool(), profile, count=5, cold_start_strategy=strategy, now=now)

        assert result.profile.cold_start_complete is True

    def test_normal_phase_below_threshold_not_complete(self, now):
        strategy = StubStrategy(ColdStartPhase.NORMAL, 19)
        profile = InterestProfile(last_refreshed=now)

        result = select_feed(_pool(), profile, count=5, cold_start_strategy=strategy, now=now)

        assert result.profile.cold_start_complete is False

    @pytest.mark.parametrize("count,pool", [(0, _pool()), (5, [])])
    def test_empty_request_skips_strategy(self, now, count, pool):
        strategy = StubStrategy(ColdStartPhase.NORMAL, 20)
        profile = InterestProfile(last_refreshed=now)

        result = select_feed(pool, profile, count=count, cold_start_strategy=strategy, now=now)

        assert strategy.calls == 0
        assert result.items == []
        assert result.used_cold_start
        assert result.profile is profile
        assert result.profile.cold_start_state is None

    def test_completed_flag_alone_does_not_skip_gate(self, now):
        """A complete flag without enough history still routes to cold start."""
        strategy = StubStrategy(ColdStartPhase.NORMAL, 25)
        profile = InterestProfile(last_refreshed=now, cold_start_complete=True)

        result = select_feed(_pool(), profile, count=3, cold_start_strategy=strategy, now=now)

        assert result.used_cold_start
        assert result.profile.cold_start_complete is True


class TestCandidateInput:

    def test_dict_candidates(self, graduated_profile):
        pool = [
            {"id": "d1", "topic": "Science", "tags": ["Physics", "Mechanics"], "question": "What is F?", "answer": "ma"},
            {"id": "d2", "topic": "History", "tags": ["Ancient"]},
        ]

        result = select_feed(pool, graduated_profile, count=2, now=NOW)

        assert _ids(result) == ["d1", "d2"]
        assert result.items[0].model_extra["answer"] == "ma"
