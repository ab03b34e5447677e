"""Profile registry - lookup table of built-in standards."""

from __future__ import annotations

from nepguard.core.errors import ProfileError
from nepguard.profiles.models import Profile


class ProfileRegistry:
    """Registry of standard profiles.

    Filled once at import time by definitions.py and read-only afterwards,
    so it is safe to share across concurrent checks.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, Profile] = {}

    def register(self, profile: Profile) -> None:
        """Register a profile. Ids are unique."""
        if profile.profile_id in self._profiles:
            raise ProfileError.duplicate(profile.profile_id)
        self._profiles[profile.profile_id] = profile

    def get(self, profile_id: str) -> Profile | None:
        """Get profile by id."""
        return self._profiles.get(profile_id)

    def require(self, profile_id: str) -> Profile:
        """Get profile by id, raising ProfileError when unknown."""
        profile = self._profiles.get(profile_id)
        if profile is None:
            raise ProfileError.not_found(profile_id, self.ids())
        return profile

    def all(self) -> list[Profile]:
        """Get all registered profiles in registration order."""
        return list(self._profiles.values())

    def ids(self) -> list[str]:
        return list(self._profiles)

    def select(self, profile_ids: list[str] | None) -> list[Profile]:
        """Resolve a list of ids; empty or None selects every profile."""
        if not profile_ids:
            return self.all()
        return [self.require(pid) for pid in profile_ids]


# Global registry
registry = ProfileRegistry()
