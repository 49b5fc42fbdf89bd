"""Nutrition assistant and food lookup endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from nutritalk.api.dependencies import get_container
from nutritalk.containers import AppContainer
from nutritalk.domain.foods import FoodSuggestion
from nutritalk.domain.payloads import (
    AnalyzeRequest,
    AnalyzeResponse,
    ParseResponse,
    ProductPayload,
    RecipePayload,
    SuggestionPayload,
)
from nutritalk.services.recipes import parse_recipe

router = APIRouter(tags=["assistant"])

NO_MATCH_REPLY = (
    "Je n'ai pas pu identifier d'aliments spécifiques dans votre description. "
    "Pourriez-vous être plus précis ? Par exemple : 'J'ai mangé 150g de riz "
    "avec 100g de poulet grillé et des légumes'."
)


@router.post("/assistant/analyze")
async def analyze(
    payload: AnalyzeRequest, container: AppContainer = Depends(get_container)
) -> AnalyzeResponse:
    """Analyze a meal description and propose food entries."""
    suggestions = await container.assistant.analyze(payload.text)
    recipe = parse_recipe(payload.text)
    return AnalyzeResponse(
        reply=_format_reply(suggestions),
        suggestions=[SuggestionPayload.from_domain(s) for s in suggestions],
        recipe=RecipePayload.from_domain(recipe) if recipe else None,
    )


@router.post("/assistant/parse")
async def parse(
    payload: AnalyzeRequest, container: AppContainer = Depends(get_container)
) -> ParseResponse:
    """Extract food entities with the LLM parser, when configured."""
    foods = await container.parsing_service.parse(payload.text)
    return ParseResponse(enabled=container.parsing_service.enabled, foods=foods or [])


@router.get("/foods/search")
async def search_foods(
    q: str = Query(min_length=1),
    container: AppContainer = Depends(get_container),
) -> list[ProductPayload]:
    """Search Open Food Facts."""
    products = await container.nutrition_service.search_with_fallback(q)
    return [ProductPayload.from_domain(product) for product in products]


@router.get("/foods/barcode/{code}")
async def product_by_barcode(
    code: str, container: AppContainer = Depends(get_container)
) -> ProductPayload:
    """Look up a product by barcode."""
    product = await container.nutrition_service.get_product(code)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )
    return ProductPayload.from_domain(product)


def _format_reply(suggestions: list[FoodSuggestion]) -> str:
    if not suggestions:
        return NO_MATCH_REPLY
    lines = [
        f"J'ai analysé votre repas et identifié {len(suggestions)} aliment(s). "
        "Voici ce que j'ai trouvé :"
    ]
    for index, suggestion in enumerate(suggestions, start=1):
        lines.append(
            f"\n{index}. **{suggestion.name}** "
            f"({suggestion.quantity:g}{suggestion.unit})\n"
            f"- {suggestion.calories:.0f} kcal\n"
            f"- Protéines: {suggestion.protein_g:.1f}g\n"
            f"- Glucides: {suggestion.carbs_g:.1f}g\n"
            f"- Lipides: {suggestion.fat_g:.1f}g"
        )
    lines.append(
        "\nVoulez-vous ajouter ces aliments à votre journal ? Vous pouvez "
        "cliquer sur \"Ajouter\" pour chaque aliment ou modifier les quantités "
        "si nécessaire."
    )
    return "\n".join(lines)
