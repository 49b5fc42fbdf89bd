"""User profile service."""

import dataclasses
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutritalk.domain.profiles import METRIC_FIELDS, UserProfile
from nutritalk.errors import ProfileNotFoundError
from nutritalk.services.targets import compute_daily_targets

_IMMUTABLE_FIELDS = frozenset({"user_id", "targets"})


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user."""

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or replace a user's profile."""


def with_targets(profile: UserProfile) -> UserProfile:
    """Return profile with targets computed from its body metrics."""
    targets = compute_daily_targets(
        weight_kg=profile.weight_kg,
        height_cm=profile.height_cm,
        age=profile.age,
        gender=profile.gender,
        activity_level=profile.activity_level,
        goal=profile.goal,
        macro_ratio=profile.macro_ratio,
    )
    return dataclasses.replace(profile, targets=targets)


@dataclass
class ProfileService:
    """Reads and updates profiles, keeping targets in sync with metrics."""

    repository: ProfileRepository

    def create_default_profile(self, user_id: UUID, name: str, email: str) -> UserProfile:
        """Store a profile with default metrics for a new account."""
        profile = with_targets(UserProfile(user_id=user_id, name=name, email=email))
        self.repository.save_profile(profile)
        return profile

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return a user's profile."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError()
        return profile

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Apply changes and recompute targets when metrics moved."""
        current = self.get_profile(user_id)
        known = {f.name for f in dataclasses.fields(UserProfile)} - _IMMUTABLE_FIELDS
        applied = {
            key: value
            for key, value in changes.items()
            if key in known and value is not None
        }
        updated = dataclasses.replace(current, **applied)
        metrics_changed = any(
            getattr(current, key) != getattr(updated, key) for key in METRIC_FIELDS
        )
        if metrics_changed or updated.targets is None:
            updated = with_targets(updated)
        self.repository.save_profile(updated)
        return updated
