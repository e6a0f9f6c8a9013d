"""
Profile store: load and save interest profiles keyed by user id.

Persistence to a JSON file or memory. Profiles are sanitized on load so that
hand-edited or corrupted weights never reach the engine. Callers must keep at
most one write in flight per user; the store does no conflict resolution.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from pydantic import ValidationError

from ..models.config import PersonalizationConfig, resolve_config
from ..models.interaction import Interaction
from ..models.profile import InterestProfile
from ..settings import Settings, get_settings
from ..utils.weights import clamp_weight

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Protocol for profile persistence. Implement for JSON file, memory, or a remote backend."""

    def load(self, user_id: str) -> Optional[InterestProfile]:
        """Return the user's profile if stored, else None."""
        ...

    def save(self, user_id: str, profile: InterestProfile) -> None:
        """Persist the profile, replacing any previous one."""
        ...

    def delete(self, user_id: str) -> bool:
        """Remove the user's profile. Returns True if one existed."""
        ...


def _sanitize_node(node: Dict[str, Any], path: str, config: PersonalizationConfig) -> int:
    """Clamp one raw node weight in place; returns 1 if it was repaired."""
    raw = node.get("weight")
    try:
        value = float(raw) if raw is not None else None
    except (TypeError, ValueError):
        value = None
    fixed = clamp_weight(value, config)
    if raw is None or value is None or fixed != value:
        logger.warning("[profile_store] WEIGHT_REPAIRED path=%s raw=%r fixed=%.2f", path, raw, fixed)
        node["weight"] = fixed
        return 1
    node["weight"] = value
    return 0


def sanitize_profile(
    data: Dict[str, Any],
    config: Optional[PersonalizationConfig] = None,
) -> InterestProfile:
    """
    Build a valid InterestProfile from raw stored data.

    Clamps NaN, missing, or out-of-range node weights and drops interactions that
    fail validation. Raises ValidationError only when the profile envelope itself
    (e.g. last_refreshed) is unusable.
    """
    config = resolve_config(config)
    data = copy.deepcopy(data)
    repaired = 0

    topics = data.get("topics") or {}
    for topic_name, topic in topics.items():
        repaired += _sanitize_node(topic, topic_name, config)
        for sub_name, subtopic in (topic.get("subtopics") or {}).items():
            repaired += _sanitize_node(subtopic, f"{topic_name}/{sub_name}", config)
            for branch_name, branch in (subtopic.get("branches") or {}).items():
                repaired += _sanitize_node(branch, f"{topic_name}/{sub_name}/{branch_name}", config)

    interactions = {}
    for qid, raw in (data.get("interactions") or {}).items():
        try:
            interactions[qid] = Interaction.model_validate(raw)
        except ValidationError:
            logger.warning("[profile_store] INTERACTION_DROPPED question_id=%s", qid)
            repaired += 1
    data["interactions"] = interactions

    if repaired:
        logger.info("[profile_store] PROFILE_SANITIZED repairs=%s", repaired)
    return InterestProfile.model_validate(data)


class InMemoryProfileStore:
    """
    Profile store held in a dict (no persistence).
    Used for tests and single-process sessions.
    """

    def __init__(self, config: Optional[PersonalizationConfig] = None):
        self._config = resolve_config(config)
        self._profiles: Dict[str, Dict[str, Any]] = {}

    def load(self, user_id: str) -> Optional[InterestProfile]:
        raw = self._profiles.get(user_id)
        return sanitize_profile(raw, self._config) if raw is not None else None

    def save(self, user_id: str, profile: InterestProfile) -> None:
        self._profiles[user_id] = profile.model_dump(mode="json")

    def delete(self, user_id: str) -> bool:
        return self._profiles.pop(user_id, None) is not None


class JsonProfileStore:
    """Profile store backed by a JSON file (e.g. data/profiles.json)."""

    def __init__(
        self,
        path: Union[Path, str],
        config: Optional[PersonalizationConfig] = None,
    ):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._config = resolve_config(config)
        self._profiles: Dict[str, Dict[str, Any]] = {}
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.error("[profile_store] LOAD_FAILED path=%s error=%s", self._path, e)
            self._profiles = {}
            return
        profiles = data.get("profiles", {}) if isinstance(data, dict) else {}
        if isinstance(profiles, dict):
            self._profiles = profiles

    def _save(self) -> None:
        out = {"profiles": self._profiles}
        with open(self._path, "w") as f:
            json.dump(out, f, indent=2)

    def load(self, user_id: str) -> Optional[InterestProfile]:
        raw = self._profiles.get(user_id)
        if raw is None:
            return None
        try:
            return sanitize_profile(raw, self._config)
        except ValidationError as e:
            logger.error("[profile_store] PROFILE_INVALID user_id=%s error=%s", user_id, e)
            return None

    def save(self, user_id: str, profile: InterestProfile) -> None:
        self._profiles[user_id] = profile.model_dump(mode="json")
        self._save()

    def delete(self, user_id: str) -> bool:
        if self._profiles.pop(user_id, None) is None:
            return False
        self._save()
        return True


def create_profile_store(settings: Optional[Settings] = None) -> JsonProfileStore:
    """JSON profile store at the configured path, sanitizing with the configured engine config."""
    settings = settings or get_settings()
    logger.info("[profile_store] OPEN path=%s config_path=%s", settings.profiles_path, settings.config_path)
    return JsonProfileStore(settings.profiles_path, settings.load_personalization_config())
