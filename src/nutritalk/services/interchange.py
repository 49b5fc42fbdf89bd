"""CSV import and export in the MyFitnessPal column layout."""

import csv
import io
import uuid
from datetime import UTC, datetime

from nutritalk.domain.foods import BREAKFAST, DINNER, LUNCH, MEAL_SLOTS, SNACK
from nutritalk.domain.logs import DailyLog, FoodEntry

EXPORT_COLUMNS = (
    "Date",
    "Meal",
    "Food",
    "Quantity",
    "Unit",
    "Calories",
    "Protein",
    "Carbs",
    "Fat",
)

# Meal names used by English MyFitnessPal exports.
_MFP_MEALS = {
    "breakfast": BREAKFAST,
    "lunch": LUNCH,
    "dinner": DINNER,
    "snack": SNACK,
    "snacks": SNACK,
}


def export_daily_log(log: DailyLog) -> str:
    """Render a daily log as CSV text, one row per entry."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for entry in log.entries:
        writer.writerow(
            {
                "Date": log.day.isoformat(),
                "Meal": entry.meal,
                "Food": entry.name,
                "Quantity": _format_number(entry.quantity),
                "Unit": entry.unit,
                "Calories": _format_number(entry.calories),
                "Protein": _format_number(entry.protein_g),
                "Carbs": _format_number(entry.carbs_g),
                "Fat": _format_number(entry.fat_g),
            }
        )
    return buffer.getvalue()


def parse_myfitnesspal_csv(content: str) -> list[FoodEntry]:
    """Parse a MyFitnessPal export into log entries; rows without Food are skipped."""
    reader = csv.DictReader(io.StringIO(content.lstrip("\ufeff")))
    entries: list[FoodEntry] = []
    for row in reader:
        name = (row.get("Food") or "").strip()
        if not name:
            continue
        entries.append(
            FoodEntry(
                id=uuid.uuid4().hex,
                name=name,
                quantity=_parse_number(row.get("Quantity"), default=1.0),
                unit=(row.get("Unit") or "").strip(),
                calories=_parse_number(row.get("Calories")),
                protein_g=_parse_number(row.get("Protein")),
                carbs_g=_parse_number(row.get("Carbs")),
                fat_g=_parse_number(row.get("Fat")),
                category=(row.get("Category") or "").strip(),
                meal=_meal_slot(row.get("Meal")),
                timestamp=datetime.now(tz=UTC),
            )
        )
    return entries


def _meal_slot(raw: str | None) -> str:
    meal = (raw or "").strip()
    if meal in MEAL_SLOTS:
        return meal
    return _MFP_MEALS.get(meal.lower(), LUNCH)


def _parse_number(raw: str | None, default: float = 0.0) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip().replace(",", "."))
    except ValueError:
        return default


def _format_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")
