"""Recipe extraction from chat messages."""

import re
import uuid

from nutritalk.domain.foods import Recipe

_NAME_RE = re.compile(r"recette de ([^:.]+)", re.IGNORECASE)
_INGREDIENTS_RE = re.compile(r"ingr[ée]dients?\s*:([^.]*)", re.IGNORECASE)
_INGREDIENT_SPLIT_RE = re.compile(r",| et ")
_INSTRUCTIONS_RE = re.compile(r"instructions?\s*:([^.]*)", re.IGNORECASE)
_PREP_TIME_RE = re.compile(r"(\d+\s*(?:minutes|min|heures|h))", re.IGNORECASE)
_FRIDGE_RE = re.compile(r"frigo[^\d]*(\d+\s*j)", re.IGNORECASE)
_FREEZER_RE = re.compile(r"cong\w*[^\d]*(\d+\s*j)", re.IGNORECASE)


def parse_recipe(text: str) -> Recipe | None:
    """Return a Recipe when the message lists ingredients."""
    if "ingr" not in text.lower():
        return None
    name_match = _NAME_RE.search(text)
    ingredients_match = _INGREDIENTS_RE.search(text)
    instructions_match = _INSTRUCTIONS_RE.search(text)
    ingredients = []
    if ingredients_match:
        ingredients = [
            part.strip()
            for part in _INGREDIENT_SPLIT_RE.split(ingredients_match.group(1))
            if part.strip()
        ]
    return Recipe(
        id=uuid.uuid4().hex,
        name=name_match.group(1).strip() if name_match else "Recette",
        ingredients=ingredients,
        instructions=instructions_match.group(1).strip() if instructions_match else "",
        prep_time=_first_group(_PREP_TIME_RE, text),
        fridge_life=_first_group(_FRIDGE_RE, text),
        freezer_life=_first_group(_FREEZER_RE, text),
    )


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None
