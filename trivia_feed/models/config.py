"""
Engine configuration — scoring, profile update, decay, and exploration parameters.

PersonalizationConfig defaults are defined here. Callers may pass a dict
(e.g. from a config.json next to the deployment); from_dict() merges it with these defaults.
Every engine function takes the config explicitly; nothing reads global state.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, model_validator


class PersonalizationConfig(BaseModel):
    """Configuration for the personalization engine."""

    # -------------------------------------------------------------------------
    # Weighted Nodes
    # -------------------------------------------------------------------------

    # Weight used for any topic/subtopic/branch the user has never touched.
    default_weight: float = 0.5
    # Soft bounds every node weight is clamped into after update or decay.
    min_weight: float = 0.1
    max_weight: float = 1.0

    # -------------------------------------------------------------------------
    # Scoring
    # score = affinity * weight_topic_affinity + (history terms | novelty bonus)
    # -------------------------------------------------------------------------

    # Multiplier for mean(topic, subtopic, branch) weight.
    weight_topic_affinity: float = 0.30
    # Added when the previous answer was correct, subtracted when incorrect.
    weight_accuracy: float = 0.25
    # Added for fast answers, subtracted for slow ones.
    weight_time_spent: float = 0.15
    # Added when the previous interaction was a skip (negative).
    weight_skip_penalty: float = -0.20
    # Flat bonus for questions the user has never seen.
    weight_novelty: float = 0.15
    # Per-day bonus for questions not seen recently, capped at cooldown_cap.
    weight_cooldown: float = 0.10
    cooldown_cap: float = 0.50

    # Answers faster than this (ms) count as fast; slower than long_answer_ms as slow.
    fast_answer_ms: int = 3000
    long_answer_ms: int = 15000

    # -------------------------------------------------------------------------
    # Profile Update Deltas (topic, subtopic, branch)
    # -------------------------------------------------------------------------

    correct_topic_delta: float = 0.05
    correct_subtopic_delta: float = 0.08
    correct_branch_delta: float = 0.10

    # Smaller than skip: a wrong answer still shows engagement.
    incorrect_topic_delta: float = -0.02
    incorrect_subtopic_delta: float = -0.03
    incorrect_branch_delta: float = -0.05

    skip_topic_delta: float = -0.05
    skip_subtopic_delta: float = -0.07
    skip_branch_delta: float = -0.10

    # -------------------------------------------------------------------------
    # Decay
    # decay_factor = days_since_refresh * decay_rate_per_day
    # -------------------------------------------------------------------------

    decay_rate_per_day: float = 0.05
    # Decay runs at most once per this many days.
    decay_interval_days: float = 1.0
    # Nodes viewed within this many days are left alone.
    decay_idle_days: float = 1.0

    # -------------------------------------------------------------------------
    # Exploration Quotas (fractions of the requested count, floored)
    # known items receive the remainder
    # -------------------------------------------------------------------------

    quota_new_topic: float = 0.05
    quota_new_subtopic: float = 0.10
    quota_new_branch: float = 0.15

    # -------------------------------------------------------------------------
    # Cold Start Gate
    # -------------------------------------------------------------------------

    # Standard ranking only once the user has this many interactions and answers.
    cold_start_min_interactions: int = 20
    cold_start_min_answered: int = 20
    # Questions the cold start strategy must have shown before it can complete.
    cold_start_completion_shown: int = 20

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.min_weight > self.max_weight:
            raise ValueError(
                f"min_weight ({self.min_weight}) must not exceed max_weight ({self.max_weight})"
            )
        if not self.min_weight <= self.default_weight <= self.max_weight:
            raise ValueError(
                f"default_weight must lie in [{self.min_weight}, {self.max_weight}], got {self.default_weight}"
            )
        quotas = (self.quota_new_topic, self.quota_new_subtopic, self.quota_new_branch)
        if any(q < 0 for q in quotas):
            raise ValueError(f"Exploration quotas must be non-negative, got {quotas}")
        if sum(quotas) > 1.0:
            raise ValueError(f"Exploration quotas must sum to at most 1.0, got {sum(quotas)}")
        if self.fast_answer_ms < 0 or self.long_answer_ms < self.fast_answer_ms:
            raise ValueError(
                f"Answer time thresholds invalid: fast={self.fast_answer_ms} long={self.long_answer_ms}"
            )
        if self.decay_rate_per_day < 0:
            raise ValueError(f"decay_rate_per_day must be non-negative, got {self.decay_rate_per_day}")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "PersonalizationConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "weights" in config_dict:
            w = config_dict["weights"]
            for key in ("default", "min", "max"):
                if key in w:
                    flat[f"{key}_weight"] = w[key]
        if "scoring" in config_dict:
            sc = config_dict["scoring"]
            for key in (
                "topic_affinity", "accuracy", "time_spent",
                "skip_penalty", "novelty", "cooldown",
            ):
                if key in sc:
                    flat[f"weight_{key}"] = sc[key]
            for key in ("cooldown_cap", "fast_answer_ms", "long_answer_ms"):
                if key in sc:
                    flat[key] = sc[key]
        if "updates" in config_dict:
            for kind, deltas in config_dict["updates"].items():
                for level in ("topic", "subtopic", "branch"):
                    if level in deltas:
                        flat[f"{kind}_{level}_delta"] = deltas[level]
        if "decay" in config_dict:
            dc = config_dict["decay"]
            if "rate_per_day" in dc:
                flat["decay_rate_per_day"] = dc["rate_per_day"]
            if "interval_days" in dc:
                flat["decay_interval_days"] = dc["interval_days"]
            if "idle_days" in dc:
                flat["decay_idle_days"] = dc["idle_days"]
        if "exploration" in config_dict:
            ex = config_dict["exploration"]
            for key in ("new_topic", "new_subtopic", "new_branch"):
                if key in ex:
                    flat[f"quota_{key}"] = ex[key]
        if "cold_start" in config_dict:
            cs = config_dict["cold_start"]
            for key in ("min_interactions", "min_answered", "completion_shown"):
                if key in cs:
                    flat[f"cold_start_{key}"] = cs[key]
        allowed = set(cls.model_fields)
        # Flat keys at the top level are accepted as well
        flat.update({k: v for k, v in config_dict.items() if k in allowed})
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)

    @classmethod
    def from_file(cls, path: Union[Path, str]) -> "PersonalizationConfig":
        """Load config from a JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))


DEFAULT_CONFIG = PersonalizationConfig()


def resolve_config(config: Optional["PersonalizationConfig"]) -> "PersonalizationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
