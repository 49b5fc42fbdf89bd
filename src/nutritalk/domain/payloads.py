"""Pydantic models for REST payloads.

Field names are camelCase on the wire and snake_case in Python.
"""

import uuid
from datetime import UTC, date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutritalk.domain.foods import LUNCH, FoodSuggestion, ProductRecord, Recipe
from nutritalk.domain.logs import DailyLog, FoodEntry, WeightEntry
from nutritalk.domain.parsing import ParsedFood
from nutritalk.domain.profiles import MacroRatio, SyncSnapshot, UserProfile

MealSlot = Literal["petit-déjeuner", "déjeuner", "dîner", "collation"]
Gender = Literal["homme", "femme"]


class CamelModel(BaseModel):
    """Base model serialising to camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterPayload(CamelModel):
    """Signup request."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    name: str = "Utilisateur"


class CredentialsPayload(CamelModel):
    """Login request."""

    email: str
    password: str


class SessionPayload(CamelModel):
    """Issued bearer token."""

    token: str
    user_id: UUID


class FoodEntryPayload(CamelModel):
    """Food entry in a daily log."""

    id: str | None = None
    name: str
    quantity: float = 100
    unit: str = "g"
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    vitamin_c: float = 0
    category: str = ""
    meal: MealSlot = LUNCH
    timestamp: datetime | None = None

    def to_domain(self) -> FoodEntry:
        """Convert to a domain entry, filling id and timestamp."""
        return FoodEntry(
            id=self.id or uuid.uuid4().hex,
            name=self.name,
            quantity=self.quantity,
            unit=self.unit,
            calories=self.calories,
            protein_g=self.protein,
            carbs_g=self.carbs,
            fat_g=self.fat,
            fiber_g=self.fiber,
            vitamin_c_mg=self.vitamin_c,
            category=self.category,
            meal=self.meal,
            timestamp=self.timestamp or datetime.now(tz=UTC),
        )

    @classmethod
    def from_domain(cls, entry: FoodEntry) -> "FoodEntryPayload":
        """Build a payload from a domain entry."""
        return cls(
            id=entry.id,
            name=entry.name,
            quantity=entry.quantity,
            unit=entry.unit,
            calories=entry.calories,
            protein=entry.protein_g,
            carbs=entry.carbs_g,
            fat=entry.fat_g,
            fiber=entry.fiber_g,
            vitamin_c=entry.vitamin_c_mg,
            category=entry.category,
            meal=entry.meal,
            timestamp=entry.timestamp,
        )


class DailyLogPayload(CamelModel):
    """Daily log; totals are recomputed server-side on save."""

    day: date = Field(alias="date")
    entries: list[FoodEntryPayload] = Field(default_factory=list)
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0
    total_fiber: float = 0
    total_vitamin_c: float = 0
    water: float = 0
    steps: int = 0
    target_calories: int = 0
    weight: float | None = None

    def to_domain(self) -> DailyLog:
        """Convert to a domain log (totals are left for the service)."""
        return DailyLog(
            day=self.day,
            entries=[entry.to_domain() for entry in self.entries],
            water_ml=self.water,
            steps=self.steps,
            target_calories=self.target_calories,
            weight_kg=self.weight,
        )

    @classmethod
    def from_domain(cls, log: DailyLog) -> "DailyLogPayload":
        """Build a payload from a domain log."""
        return cls(
            day=log.day,
            entries=[FoodEntryPayload.from_domain(entry) for entry in log.entries],
            total_calories=log.total_calories,
            total_protein=log.total_protein_g,
            total_carbs=log.total_carbs_g,
            total_fat=log.total_fat_g,
            total_fiber=log.total_fiber_g,
            total_vitamin_c=log.total_vitamin_c_mg,
            water=log.water_ml,
            steps=log.steps,
            target_calories=log.target_calories,
            weight=log.weight_kg,
        )


class WaterPayload(CamelModel):
    """Water to add (negative to remove), in ml."""

    amount: float


class StepsPayload(CamelModel):
    """Step count for a day."""

    steps: int = Field(ge=0)


class WeightUpdatePayload(CamelModel):
    """Weight for a day."""

    weight: float = Field(gt=0)


class WeightPayload(CamelModel):
    """Weight history point."""

    day: date = Field(alias="date")
    weight: float = Field(gt=0)

    def to_domain(self) -> WeightEntry:
        """Convert to a domain weight entry."""
        return WeightEntry(day=self.day, weight_kg=self.weight)

    @classmethod
    def from_domain(cls, entry: WeightEntry) -> "WeightPayload":
        """Build a payload from a domain weight entry."""
        return cls(day=entry.day, weight=entry.weight_kg)


class MacroRatioPayload(CamelModel):
    """Macro split in percent."""

    protein: float = Field(default=25, ge=0, le=100)
    carbs: float = Field(default=50, ge=0, le=100)
    fat: float = Field(default=25, ge=0, le=100)


class ProfilePayload(CamelModel):
    """Profile with computed daily targets."""

    user_id: UUID
    name: str
    email: str
    weight: float
    height: float
    age: int
    gender: Gender
    activity_level: str
    goal: str
    macro_ratio: MacroRatioPayload
    step_goal: int
    daily_water: int
    daily_calories: int | None = None
    daily_protein: int | None = None
    daily_carbs: int | None = None
    daily_fat: int | None = None

    @classmethod
    def from_domain(cls, profile: UserProfile) -> "ProfilePayload":
        """Build a payload from a domain profile."""
        targets = profile.targets
        return cls(
            user_id=profile.user_id,
            name=profile.name,
            email=profile.email,
            weight=profile.weight_kg,
            height=profile.height_cm,
            age=profile.age,
            gender=profile.gender,
            activity_level=profile.activity_level,
            goal=profile.goal,
            macro_ratio=MacroRatioPayload(
                protein=profile.macro_ratio.protein,
                carbs=profile.macro_ratio.carbs,
                fat=profile.macro_ratio.fat,
            ),
            step_goal=profile.step_goal,
            daily_water=profile.daily_water_ml,
            daily_calories=targets.calories if targets else None,
            daily_protein=targets.protein_g if targets else None,
            daily_carbs=targets.carbs_g if targets else None,
            daily_fat=targets.fat_g if targets else None,
        )


class ProfileUpdatePayload(CamelModel):
    """Partial profile update; unknown fields are ignored."""

    name: str | None = None
    email: str | None = None
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, gt=0)
    gender: Gender | None = None
    activity_level: str | None = None
    goal: str | None = None
    macro_ratio: MacroRatioPayload | None = None
    step_goal: int | None = Field(default=None, ge=0)
    daily_water: int | None = Field(default=None, ge=0)

    def to_changes(self) -> dict[str, object]:
        """Return changes keyed by domain field name."""
        changes: dict[str, object] = {
            "name": self.name,
            "email": self.email,
            "weight_kg": self.weight,
            "height_cm": self.height,
            "age": self.age,
            "gender": self.gender,
            "activity_level": self.activity_level,
            "goal": self.goal,
            "step_goal": self.step_goal,
            "daily_water_ml": self.daily_water,
        }
        if self.macro_ratio is not None:
            changes["macro_ratio"] = MacroRatio(
                protein=self.macro_ratio.protein,
                carbs=self.macro_ratio.carbs,
                fat=self.macro_ratio.fat,
            )
        return {key: value for key, value in changes.items() if value is not None}


class SyncPayload(CamelModel):
    """Full account snapshot."""

    profile: ProfilePayload
    logs: list[DailyLogPayload]
    weights: list[WeightPayload]

    @classmethod
    def from_domain(cls, snapshot: SyncSnapshot) -> "SyncPayload":
        """Build a payload from a sync snapshot."""
        return cls(
            profile=ProfilePayload.from_domain(snapshot.profile),
            logs=[DailyLogPayload.from_domain(log) for log in snapshot.logs],
            weights=[WeightPayload.from_domain(w) for w in snapshot.weights],
        )


class AnalyzeRequest(CamelModel):
    """Free-text meal description."""

    text: str = Field(min_length=1)


class SuggestionPayload(CamelModel):
    """Food suggestion pending user confirmation."""

    name: str
    quantity: float
    unit: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    vitamin_a: float | None = None
    vitamin_c: float | None = None
    calcium: float | None = None
    iron: float | None = None
    category: str
    meal: MealSlot
    confidence: float

    @classmethod
    def from_domain(cls, suggestion: FoodSuggestion) -> "SuggestionPayload":
        """Build a payload from a domain suggestion."""
        return cls(
            name=suggestion.name,
            quantity=suggestion.quantity,
            unit=suggestion.unit,
            calories=suggestion.calories,
            protein=suggestion.protein_g,
            carbs=suggestion.carbs_g,
            fat=suggestion.fat_g,
            fiber=suggestion.fiber_g,
            vitamin_a=suggestion.vitamin_a_mg,
            vitamin_c=suggestion.vitamin_c_mg,
            calcium=suggestion.calcium_mg,
            iron=suggestion.iron_mg,
            category=suggestion.category,
            meal=suggestion.meal,
            confidence=suggestion.confidence,
        )


class RecipePayload(CamelModel):
    """Recipe extracted from a message."""

    id: str
    name: str
    ingredients: list[str]
    instructions: str
    prep_time: str | None = None
    fridge_life: str | None = None
    freezer_life: str | None = None

    @classmethod
    def from_domain(cls, recipe: Recipe) -> "RecipePayload":
        """Build a payload from a domain recipe."""
        return cls(
            id=recipe.id,
            name=recipe.name,
            ingredients=recipe.ingredients,
            instructions=recipe.instructions,
            prep_time=recipe.prep_time,
            fridge_life=recipe.fridge_life,
            freezer_life=recipe.freezer_life,
        )


class AnalyzeResponse(CamelModel):
    """Assistant reply with suggestions."""

    reply: str
    suggestions: list[SuggestionPayload]
    recipe: RecipePayload | None = None


class ParseResponse(CamelModel):
    """Foods extracted by the LLM parser."""

    enabled: bool
    foods: list[ParsedFood]


class ProductPayload(CamelModel):
    """External product, values per 100g/ml."""

    code: str
    name: str | None
    serving_size: str | None
    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None
    fiber: float | None = None

    @classmethod
    def from_domain(cls, product: ProductRecord) -> "ProductPayload":
        """Build a payload from a product record."""
        return cls(
            code=product.code,
            name=product.name,
            serving_size=product.serving_size,
            calories=product.calories,
            protein=product.protein_g,
            carbs=product.carbs_g,
            fat=product.fat_g,
            fiber=product.fiber_g,
        )
