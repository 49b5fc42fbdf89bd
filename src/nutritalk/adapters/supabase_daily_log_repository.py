"""Supabase repository for daily logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutritalk.domain.logs import DailyLog, FoodEntry
from nutritalk.services.logs import DailyLogRepository

_LOG_COLUMNS = (
    "log_date, entries, total_calories, total_protein_g, total_carbs_g, "
    "total_fat_g, total_fiber_g, total_vitamin_c_mg, water_ml, steps, "
    "target_calories, weight_kg"
)


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for daily logs; entries are stored as JSON."""

    client: Client

    def get_log(self, user_id: UUID, day: date) -> DailyLog | None:
        """Return the log for a user and date."""
        response = (
            self.client.table("daily_logs")
            .select(_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("log_date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])

    def save_log(self, user_id: UUID, log: DailyLog) -> None:
        """Upsert the log row keyed by user and date."""
        self.client.table("daily_logs").upsert(
            {
                "user_id": str(user_id),
                "log_date": log.day.isoformat(),
                "entries": [_serialize_entry(entry) for entry in log.entries],
                "total_calories": log.total_calories,
                "total_protein_g": log.total_protein_g,
                "total_carbs_g": log.total_carbs_g,
                "total_fat_g": log.total_fat_g,
                "total_fiber_g": log.total_fiber_g,
                "total_vitamin_c_mg": log.total_vitamin_c_mg,
                "water_ml": log.water_ml,
                "steps": log.steps,
                "target_calories": log.target_calories,
                "weight_kg": log.weight_kg,
            },
            on_conflict="user_id,log_date",
        ).execute()

    def list_logs(self, user_id: UUID) -> list[DailyLog]:
        """Return all logs for a user ordered by date."""
        response = (
            self.client.table("daily_logs")
            .select(_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .order("log_date", desc=False)
            .execute()
        )
        return [_parse_log(row) for row in response.data or []]


def _serialize_entry(entry: FoodEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "name": entry.name,
        "quantity": entry.quantity,
        "unit": entry.unit,
        "calories": entry.calories,
        "protein_g": entry.protein_g,
        "carbs_g": entry.carbs_g,
        "fat_g": entry.fat_g,
        "fiber_g": entry.fiber_g,
        "vitamin_c_mg": entry.vitamin_c_mg,
        "category": entry.category,
        "meal": entry.meal,
        "timestamp": entry.timestamp.isoformat(),
    }


def _parse_entry(raw: dict[str, object]) -> FoodEntry:
    return FoodEntry(
        id=str(raw["id"]),
        name=str(raw.get("name", "")),
        quantity=float(raw.get("quantity", 0.0)),
        unit=str(raw.get("unit", "g")),
        calories=float(raw.get("calories", 0.0)),
        protein_g=float(raw.get("protein_g", 0.0)),
        carbs_g=float(raw.get("carbs_g", 0.0)),
        fat_g=float(raw.get("fat_g", 0.0)),
        fiber_g=float(raw.get("fiber_g", 0.0)),
        vitamin_c_mg=float(raw.get("vitamin_c_mg", 0.0)),
        category=str(raw.get("category", "")),
        meal=str(raw.get("meal", "")),
        timestamp=datetime.fromisoformat(str(raw["timestamp"])),
    )


def _parse_log(row: dict[str, object]) -> DailyLog:
    weight = row.get("weight_kg")
    return DailyLog(
        day=date.fromisoformat(str(row["log_date"])),
        entries=[_parse_entry(raw) for raw in row.get("entries") or []],
        total_calories=float(row.get("total_calories", 0.0)),
        total_protein_g=float(row.get("total_protein_g", 0.0)),
        total_carbs_g=float(row.get("total_carbs_g", 0.0)),
        total_fat_g=float(row.get("total_fat_g", 0.0)),
        total_fiber_g=float(row.get("total_fiber_g", 0.0)),
        total_vitamin_c_mg=float(row.get("total_vitamin_c_mg", 0.0)),
        water_ml=float(row.get("water_ml", 0.0)),
        steps=int(row.get("steps", 0)),
        target_calories=int(row.get("target_calories", 0)),
        weight_kg=float(weight) if weight is not None else None,
    )
