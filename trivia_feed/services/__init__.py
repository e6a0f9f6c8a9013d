"""Services around the engine: profile persistence."""

from .profile_store import (
    InMemoryProfileStore,
    JsonProfileStore,
    ProfileStore,
    create_profile_store,
    sanitize_profile,
)

__all__ = [
    "InMemoryProfileStore",
    "JsonProfileStore",
    "ProfileStore",
    "create_profile_store",
    "sanitize_profile",
]
