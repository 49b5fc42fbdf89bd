"""Weight history service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutritalk.domain.logs import WeightEntry


class WeightRepository(Protocol):
    """Persistence interface for weight history."""

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        """Return all weight entries for a user."""

    def replace_weights(self, user_id: UUID, entries: list[WeightEntry]) -> None:
        """Replace a user's weight history."""


@dataclass
class WeightService:
    """Keeps one weight per date, ordered by date."""

    repository: WeightRepository

    def get_history(self, user_id: UUID) -> list[WeightEntry]:
        """Return the user's weight history sorted by date."""
        return sorted(self.repository.list_weights(user_id), key=lambda e: e.day)

    def save_history(self, user_id: UUID, entries: list[WeightEntry]) -> list[WeightEntry]:
        """Replace the history; later entries win for duplicate dates."""
        by_day = {entry.day: entry for entry in entries}
        history = sorted(by_day.values(), key=lambda e: e.day)
        self.repository.replace_weights(user_id, history)
        return history

    def record(self, user_id: UUID, day: date, weight_kg: float) -> list[WeightEntry]:
        """Add or overwrite the weight for a single date."""
        current = self.repository.list_weights(user_id)
        return self.save_history(
            user_id, [*current, WeightEntry(day=day, weight_kg=weight_kg)]
        )
