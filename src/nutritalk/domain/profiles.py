"""Domain models for user profiles and targets."""

from dataclasses import dataclass, field
from uuid import UUID

from nutritalk.domain.logs import DailyLog, WeightEntry

MALE = "homme"
FEMALE = "femme"

DEFAULT_ACTIVITY_LEVEL = "modérée"
DEFAULT_GOAL = "maintien"

METRIC_FIELDS = frozenset(
    {"weight_kg", "height_cm", "age", "gender", "activity_level", "goal", "macro_ratio"}
)


@dataclass(frozen=True)
class MacroRatio:
    """Share of daily calories per macronutrient, in percent."""

    protein: float = 25
    carbs: float = 50
    fat: float = 25


@dataclass(frozen=True)
class DailyTargets:
    """Daily calorie and macro targets."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int


@dataclass(frozen=True)
class UserProfile:
    """Body metrics, goals and computed targets for a user."""

    user_id: UUID
    name: str
    email: str
    weight_kg: float = 70
    height_cm: float = 175
    age: int = 30
    gender: str = MALE
    activity_level: str = DEFAULT_ACTIVITY_LEVEL
    goal: str = DEFAULT_GOAL
    macro_ratio: MacroRatio = field(default_factory=MacroRatio)
    step_goal: int = 10000
    daily_water_ml: int = 2000
    targets: DailyTargets | None = None


@dataclass(frozen=True)
class SyncSnapshot:
    """Everything a client needs to rebuild local state."""

    profile: UserProfile
    logs: list[DailyLog]
    weights: list[WeightEntry]
