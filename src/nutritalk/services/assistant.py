"""Free-text nutrition assistant.

Turns a sentence such as "ce matin 2 oeufs et 150g de pain" into food
suggestions. The pipeline is:

1. classify the meal slot from time-of-day words;
2. match the built-in food table by keyword, scaling each hit by the quantity
   found near its keyword;
3. when nothing matched, pick the table entry whose name is closest to the
   text;
4. when that fails too, search Open Food Facts and map the first products.

Every step degrades to "no suggestions" rather than raising.
"""

import asyncio
import random
import re
from dataclasses import dataclass, field
from difflib import SequenceMatcher

from nutritalk.domain.food_table import FOOD_REFERENCES
from nutritalk.domain.foods import (
    BREAKFAST,
    DINNER,
    LUNCH,
    SNACK,
    FoodReference,
    FoodSuggestion,
    ProductRecord,
)
from nutritalk.services.nutrition import NutritionService

DEFAULT_QUANTITY = 100
KEYWORD_CONFIDENCE = 0.8
KEYWORD_CONFIDENCE_JITTER = 0.2
FUZZY_CONFIDENCE = 0.5
EXTERNAL_CONFIDENCE = 0.6
EXTERNAL_LIMIT = 3
EXTERNAL_CATEGORY = "Importé"
SIMILARITY_FLOOR = 0.85

_MIN_TOKEN_LENGTH = 4
_TOKEN_RE = re.compile(r"[^\W\d_]+")

_MEAL_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (BREAKFAST, ("petit-déjeuner", "matin", "breakfast", "morning")),
    (DINNER, ("dîner", "soir", "dinner", "evening")),
    (SNACK, ("collation", "goûter", "snack")),
)


def classify_meal(text: str) -> str:
    """Return the meal slot referred to by the text, lunch by default."""
    lowered = text.lower()
    for meal, markers in _MEAL_MARKERS:
        if any(marker in lowered for marker in markers):
            return meal
    return LUNCH


def extract_quantity(text: str, keyword: str) -> int:
    """Return the number associated with keyword in text, or 100."""
    escaped = re.escape(keyword)
    patterns = (
        rf"(\d+)\s*g.*?{escaped}",
        rf"{escaped}.*?(\d+)\s*g",
        rf"(\d+)\s*{escaped}",
        rf"{escaped}.*?(\d+)",
    )
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match and int(match.group(1)) > 0:
            return int(match.group(1))
    return DEFAULT_QUANTITY


def match_keywords(
    text: str,
    meal: str,
    references: tuple[FoodReference, ...] = FOOD_REFERENCES,
    rng: random.Random | None = None,
) -> list[FoodSuggestion]:
    """Emit one suggestion per table entry whose keywords appear in text.

    A keyword occurrence that sits inside a longer keyword of another entry
    ("œuf" in "bœuf") is ignored.
    """
    source = rng or random.Random()
    lowered = text.lower()
    occurrences = [
        (index, keyword, start, start + len(keyword))
        for index, reference in enumerate(references)
        for keyword in reference.keywords
        for start in _find_all(lowered, keyword)
    ]
    visible = [
        occurrence
        for occurrence in occurrences
        if not _is_shadowed(occurrence, occurrences)
    ]

    suggestions: list[FoodSuggestion] = []
    for index, reference in enumerate(references):
        found = {keyword for owner, keyword, _, _ in visible if owner == index}
        if not found:
            continue
        keyword = next(kw for kw in reference.keywords if kw in found)
        quantity = extract_quantity(lowered, keyword)
        confidence = KEYWORD_CONFIDENCE + source.random() * KEYWORD_CONFIDENCE_JITTER
        suggestions.append(
            suggestion_from_reference(reference, quantity, meal, confidence)
        )
    return suggestions


def similarity_score(text: str, name: str) -> float:
    """Best token-to-token similarity between text and a food name."""
    text_tokens = _tokens(text)
    name_tokens = _tokens(name)
    if not text_tokens or not name_tokens:
        return 0.0
    return max(
        SequenceMatcher(None, text_token, name_token).ratio()
        for text_token in text_tokens
        for name_token in name_tokens
    )


def find_closest_food(
    text: str,
    references: tuple[FoodReference, ...] = FOOD_REFERENCES,
    floor: float = SIMILARITY_FLOOR,
) -> FoodReference | None:
    """Return the reference whose name is closest to text, if close enough."""
    best: FoodReference | None = None
    best_score = 0.0
    for reference in references:
        score = similarity_score(text, reference.name)
        if score > best_score:
            best, best_score = reference, score
    if best is None or best_score < floor:
        return None
    return best


def suggestion_from_reference(
    reference: FoodReference, quantity: float, meal: str, confidence: float
) -> FoodSuggestion:
    """Scale a per-100g reference to quantity."""
    multiplier = quantity / 100
    return FoodSuggestion(
        name=reference.name,
        quantity=quantity,
        unit=reference.unit,
        calories=reference.calories * multiplier,
        protein_g=reference.protein_g * multiplier,
        carbs_g=reference.carbs_g * multiplier,
        fat_g=reference.fat_g * multiplier,
        fiber_g=_scale(reference.fiber_g, multiplier),
        vitamin_c_mg=_scale(reference.vitamin_c_mg, multiplier),
        category=reference.category,
        meal=meal,
        confidence=confidence,
    )


def suggestion_from_product(product: ProductRecord, meal: str) -> FoodSuggestion:
    """Map an external product to a 100g/100ml suggestion."""
    serving = (product.serving_size or "").lower()
    return FoodSuggestion(
        name=product.name or "Produit",
        quantity=DEFAULT_QUANTITY,
        unit="ml" if "ml" in serving else "g",
        calories=product.calories or 0.0,
        protein_g=product.protein_g or 0.0,
        carbs_g=product.carbs_g or 0.0,
        fat_g=product.fat_g or 0.0,
        fiber_g=product.fiber_g or 0.0,
        vitamin_a_mg=product.vitamin_a_mg or 0.0,
        vitamin_c_mg=product.vitamin_c_mg or 0.0,
        calcium_mg=product.calcium_mg or 0.0,
        iron_mg=product.iron_mg or 0.0,
        category=EXTERNAL_CATEGORY,
        meal=meal,
        confidence=EXTERNAL_CONFIDENCE,
    )


@dataclass
class NutritionAssistant:
    """Runs the text analysis pipeline."""

    nutrition_service: NutritionService
    references: tuple[FoodReference, ...] = FOOD_REFERENCES
    rng: random.Random = field(default_factory=random.Random)
    analysis_delay_seconds: float = 1.0
    similarity_floor: float = SIMILARITY_FLOOR

    async def analyze(self, text: str) -> list[FoodSuggestion]:
        """Return suggestions for a free-text meal description."""
        if self.analysis_delay_seconds > 0:
            await asyncio.sleep(self.analysis_delay_seconds)
        lowered = text.lower()
        meal = classify_meal(lowered)

        suggestions = match_keywords(lowered, meal, self.references, self.rng)
        if suggestions:
            return suggestions

        closest = find_closest_food(text, self.references, self.similarity_floor)
        if closest is not None:
            return [
                suggestion_from_reference(
                    closest, DEFAULT_QUANTITY, meal, FUZZY_CONFIDENCE
                )
            ]

        return await self._lookup_external(text, meal)

    async def _lookup_external(self, text: str, meal: str) -> list[FoodSuggestion]:
        query = text.strip()
        if not query:
            return []
        products = await self.nutrition_service.search_with_fallback(query)
        return [
            suggestion_from_product(product, meal)
            for product in products[:EXTERNAL_LIMIT]
        ]


def _find_all(text: str, keyword: str) -> list[int]:
    starts = []
    start = text.find(keyword)
    while start != -1:
        starts.append(start)
        start = text.find(keyword, start + 1)
    return starts


def _is_shadowed(
    occurrence: tuple[int, str, int, int],
    occurrences: list[tuple[int, str, int, int]],
) -> bool:
    owner, _, start, end = occurrence
    return any(
        other_owner != owner
        and other_start <= start
        and end <= other_end
        and other_end - other_start > end - start
        for other_owner, _, other_start, other_end in occurrences
    )


def _tokens(text: str) -> list[str]:
    return [
        token
        for token in _TOKEN_RE.findall(text.lower())
        if len(token) >= _MIN_TOKEN_LENGTH
    ]


def _scale(value: float | None, multiplier: float) -> float | None:
    return value * multiplier if value is not None else None
