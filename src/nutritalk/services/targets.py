"""Calorie and macro target calculations."""

import math

from nutritalk.domain.profiles import MALE, DailyTargets, MacroRatio

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sédentaire": 1.2,
    "légère": 1.375,
    "modérée": 1.55,
    "élevée": 1.725,
    "très élevée": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

GOAL_MULTIPLIERS: dict[str, float] = {
    "perte10": 0.90,
    "perte5": 0.95,
    "maintien": 1.00,
    "prise5": 1.05,
    "prise10": 1.10,
}

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: str) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor formula."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender == MALE else base - 161


def calculate_tdee(  # noqa: PLR0913
    *,
    weight_kg: float,
    height_cm: float,
    age: int,
    gender: str,
    activity_level: str,
    goal: str,
) -> int:
    """Return the daily calorie target adjusted for activity and goal."""
    bmr = calculate_bmr(weight_kg, height_cm, age, gender)
    activity = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    goal_multiplier = GOAL_MULTIPLIERS.get(goal, 1.0)
    return round_half_up(bmr * activity * goal_multiplier)


def calculate_macro_targets(
    calories: int, ratio: MacroRatio | None = None
) -> tuple[int, int, int]:
    """Split calories into protein, carbs and fat grams.

    Each macro is rounded on its own, so the grams do not always add back up
    to the calorie total.
    """
    resolved = ratio or MacroRatio()
    protein_calories = calories * resolved.protein / 100
    carbs_calories = calories * resolved.carbs / 100
    fat_calories = calories * resolved.fat / 100
    return (
        round_half_up(protein_calories / KCAL_PER_G_PROTEIN),
        round_half_up(carbs_calories / KCAL_PER_G_CARBS),
        round_half_up(fat_calories / KCAL_PER_G_FAT),
    )


def compute_daily_targets(  # noqa: PLR0913
    *,
    weight_kg: float,
    height_cm: float,
    age: int,
    gender: str,
    activity_level: str,
    goal: str,
    macro_ratio: MacroRatio | None = None,
) -> DailyTargets:
    """Compute calories and macro grams from body metrics."""
    calories = calculate_tdee(
        weight_kg=weight_kg,
        height_cm=height_cm,
        age=age,
        gender=gender,
        activity_level=activity_level,
        goal=goal,
    )
    protein_g, carbs_g, fat_g = calculate_macro_targets(calories, macro_ratio)
    return DailyTargets(
        calories=calories, protein_g=protein_g, carbs_g=carbs_g, fat_g=fat_g
    )
