"""Domain models for food references and assistant suggestions."""

from dataclasses import dataclass

BREAKFAST = "petit-déjeuner"
LUNCH = "déjeuner"
DINNER = "dîner"
SNACK = "collation"

MEAL_SLOTS = (BREAKFAST, LUNCH, DINNER, SNACK)


@dataclass(frozen=True)
class FoodReference:
    """Static per-100g nutrient record used as a matching template."""

    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    category: str
    keywords: tuple[str, ...]
    fiber_g: float | None = None
    vitamin_c_mg: float | None = None
    unit: str = "g"


@dataclass(frozen=True)
class FoodSuggestion:
    """A proposed log entry produced by text analysis."""

    name: str
    quantity: float
    unit: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    category: str
    meal: str
    confidence: float
    fiber_g: float | None = None
    vitamin_a_mg: float | None = None
    vitamin_c_mg: float | None = None
    calcium_mg: float | None = None
    iron_mg: float | None = None


@dataclass(frozen=True)
class ProductRecord:
    """Product returned by the external food database, values per 100g/ml."""

    code: str
    name: str | None
    serving_size: str | None
    calories: float | None
    protein_g: float | None
    carbs_g: float | None
    fat_g: float | None
    fiber_g: float | None = None
    vitamin_a_mg: float | None = None
    vitamin_c_mg: float | None = None
    calcium_mg: float | None = None
    iron_mg: float | None = None


@dataclass(frozen=True)
class Recipe:
    """Recipe extracted from a chat message."""

    id: str
    name: str
    ingredients: list[str]
    instructions: str
    prep_time: str | None = None
    fridge_life: str | None = None
    freezer_life: str | None = None

