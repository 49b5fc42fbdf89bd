"""Daily log service."""

import dataclasses
import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from nutritalk.domain.foods import FoodSuggestion
from nutritalk.domain.logs import DailyLog, FoodEntry
from nutritalk.services.profiles import ProfileRepository
from nutritalk.services.weights import WeightService


class DailyLogRepository(Protocol):
    """Persistence interface for daily logs."""

    def get_log(self, user_id: UUID, day: date) -> DailyLog | None:
        """Return the log for a user and date."""

    def save_log(self, user_id: UUID, log: DailyLog) -> None:
        """Insert or replace the log for its date."""

    def list_logs(self, user_id: UUID) -> list[DailyLog]:
        """Return all logs for a user."""


def empty_log(
    day: date, target_calories: int = 0, weight_kg: float | None = None
) -> DailyLog:
    """Return a log with no entries."""
    return DailyLog(day=day, target_calories=target_calories, weight_kg=weight_kg)


def recompute_totals(log: DailyLog) -> DailyLog:
    """Return log with running totals equal to the sum of its entries."""
    entries = log.entries
    return dataclasses.replace(
        log,
        entries=list(entries),
        total_calories=sum(e.calories for e in entries),
        total_protein_g=sum(e.protein_g for e in entries),
        total_carbs_g=sum(e.carbs_g for e in entries),
        total_fat_g=sum(e.fat_g for e in entries),
        total_fiber_g=sum(e.fiber_g for e in entries),
        total_vitamin_c_mg=sum(e.vitamin_c_mg for e in entries),
    )


def add_entry(log: DailyLog, entry: FoodEntry) -> DailyLog:
    """Return log with entry appended."""
    return recompute_totals(dataclasses.replace(log, entries=[*log.entries, entry]))


def remove_entry(log: DailyLog, entry_id: str) -> DailyLog:
    """Return log without the entry; unknown ids leave it unchanged."""
    if not any(entry.id == entry_id for entry in log.entries):
        return log
    remaining = [entry for entry in log.entries if entry.id != entry_id]
    return recompute_totals(dataclasses.replace(log, entries=remaining))


def add_water(log: DailyLog, amount_ml: float) -> DailyLog:
    """Return log with water adjusted, never below zero."""
    return dataclasses.replace(log, water_ml=max(0.0, log.water_ml + amount_ml))


def entry_from_suggestion(
    suggestion: FoodSuggestion,
    entry_id: str | None = None,
    timestamp: datetime | None = None,
) -> FoodEntry:
    """Turn an accepted assistant suggestion into a log entry."""
    return FoodEntry(
        id=entry_id or uuid.uuid4().hex,
        name=suggestion.name,
        quantity=suggestion.quantity,
        unit=suggestion.unit,
        calories=suggestion.calories,
        protein_g=suggestion.protein_g,
        carbs_g=suggestion.carbs_g,
        fat_g=suggestion.fat_g,
        fiber_g=suggestion.fiber_g or 0.0,
        vitamin_c_mg=suggestion.vitamin_c_mg or 0.0,
        category=suggestion.category,
        meal=suggestion.meal,
        timestamp=timestamp or datetime.now(tz=UTC),
    )


@dataclass
class DailyLogService:
    """Read-modify-write operations on a user's daily logs."""

    repository: DailyLogRepository
    profile_repository: ProfileRepository
    weight_service: WeightService

    def get_log(self, user_id: UUID, day: date) -> DailyLog:
        """Return the stored log, or an empty one carrying the calorie target."""
        stored = self.repository.get_log(user_id, day)
        if stored is not None:
            return stored
        profile = self.profile_repository.get_profile(user_id)
        if profile is None:
            return empty_log(day)
        target = profile.targets.calories if profile.targets else 0
        return empty_log(day, target_calories=target, weight_kg=profile.weight_kg)

    def save_log(self, user_id: UUID, log: DailyLog) -> DailyLog:
        """Persist a whole log; totals are rebuilt from its entries."""
        normalized = recompute_totals(log)
        self.repository.save_log(user_id, normalized)
        return normalized

    def add_entry(self, user_id: UUID, day: date, entry: FoodEntry) -> DailyLog:
        """Append an entry to the log for day."""
        return self.save_log(user_id, add_entry(self.get_log(user_id, day), entry))

    def add_entries(
        self, user_id: UUID, day: date, entries: list[FoodEntry]
    ) -> DailyLog:
        """Append several entries at once."""
        log = self.get_log(user_id, day)
        log = dataclasses.replace(log, entries=[*log.entries, *entries])
        return self.save_log(user_id, log)

    def remove_entry(self, user_id: UUID, day: date, entry_id: str) -> DailyLog:
        """Remove an entry from the log for day."""
        return self.save_log(
            user_id, remove_entry(self.get_log(user_id, day), entry_id)
        )

    def add_water(self, user_id: UUID, day: date, amount_ml: float) -> DailyLog:
        """Add (or remove, when negative) water for day."""
        return self.save_log(user_id, add_water(self.get_log(user_id, day), amount_ml))

    def set_steps(self, user_id: UUID, day: date, steps: int) -> DailyLog:
        """Set the step count for day."""
        log = dataclasses.replace(self.get_log(user_id, day), steps=max(0, steps))
        return self.save_log(user_id, log)

    def set_weight(self, user_id: UUID, day: date, weight_kg: float) -> DailyLog:
        """Set the weight for day and record it in the weight history."""
        log = dataclasses.replace(self.get_log(user_id, day), weight_kg=weight_kg)
        saved = self.save_log(user_id, log)
        self.weight_service.record(user_id, day, weight_kg)
        return saved

    def list_logs(self, user_id: UUID) -> list[DailyLog]:
        """Return all logs sorted by date."""
        return sorted(self.repository.list_logs(user_id), key=lambda log: log.day)
