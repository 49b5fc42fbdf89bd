"""Domain models for daily logs."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class FoodEntry:
    """A food logged in a daily log."""

    id: str
    name: str
    quantity: float
    unit: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    category: str
    meal: str
    timestamp: datetime
    fiber_g: float = 0.0
    vitamin_c_mg: float = 0.0


@dataclass(frozen=True)
class DailyLog:
    """Food, water, steps and weight for one user on one date."""

    day: date
    entries: list[FoodEntry] = field(default_factory=list)
    total_calories: float = 0.0
    total_protein_g: float = 0.0
    total_carbs_g: float = 0.0
    total_fat_g: float = 0.0
    total_fiber_g: float = 0.0
    total_vitamin_c_mg: float = 0.0
    water_ml: float = 0.0
    steps: int = 0
    target_calories: int = 0
    weight_kg: float | None = None


@dataclass(frozen=True)
class WeightEntry:
    """Body weight recorded on a date."""

    day: date
    weight_kg: float
