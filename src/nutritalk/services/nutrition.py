"""Nutrition lookups against Open Food Facts."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from nutritalk.adapters.off_client import OpenFoodFactsClient
from nutritalk.domain.foods import ProductRecord
from nutritalk.services.cache import Cache

_SYNONYMS: dict[str, list[str]] = {
    "farine": ["flour"],
    "flour": ["farine"],
    "beurre": ["butter"],
    "butter": ["beurre"],
    "riz": ["rice"],
    "rice": ["riz"],
}

# Open Food Facts reports vitamins and minerals in grams per 100g.
_MG_PER_G = 1000

# Transport failures and undecodable response bodies.
_LOOKUP_ERRORS = (httpx.HTTPError, ValueError)

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """Service for Open Food Facts lookups with caching."""

    off_client: OpenFoodFactsClient
    cache: Cache
    search_ttl_seconds: int = 3600
    product_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str) -> list[ProductRecord]:
        """Search products by free text."""
        cache_key = f"off:search:{query.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.off_client.search_products(query),
            action="search",
        )
        if not isinstance(payload, dict):
            _logger.warning(
                "Open Food Facts search returned %s", type(payload).__name__
            )
            return []
        raw_products = payload.get("products")
        if not isinstance(raw_products, list):
            raw_products = []
        products = [
            parse_product(raw) for raw in raw_products if isinstance(raw, dict)
        ]
        self.cache.set(cache_key, products, ttl_seconds=self.search_ttl_seconds)
        _logger.debug(
            "Open Food Facts search: query=%s results=%s", query, len(products)
        )
        return products

    async def search_with_fallback(self, query: str) -> list[ProductRecord]:
        """Search the full query, then each term and its synonyms."""
        candidates = [query]
        for term in query.split():
            candidates.append(term)
            candidates.extend(_SYNONYMS.get(term.lower(), []))
        for candidate in candidates:
            try:
                results = await self.search(candidate)
            except _LOOKUP_ERRORS as exc:
                _logger.warning(
                    "Open Food Facts search skipped: query=%s error=%s", candidate, exc
                )
                continue
            if results:
                return results
        return []

    async def get_product(self, barcode: str) -> ProductRecord | None:
        """Return a product by barcode, or None when it is unknown or unavailable."""
        cache_key = f"off:product:{barcode}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, ProductRecord):
            return cached

        try:
            payload = await self._call_with_retry(
                lambda: self.off_client.get_product(barcode),
                action=f"get_product:{barcode}",
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code != httpx.codes.NOT_FOUND:
                _logger.warning(
                    "Open Food Facts product %s unavailable: %s", barcode, exc
                )
            return None
        except _LOOKUP_ERRORS as exc:
            _logger.warning(
                "Open Food Facts product %s unavailable: %s", barcode, exc
            )
            return None
        raw = payload.get("product") if isinstance(payload, dict) else None
        if not isinstance(raw, dict):
            return None
        product = parse_product(raw)
        self.cache.set(cache_key, product, ttl_seconds=self.product_ttl_seconds)
        return product

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except httpx.HTTPStatusError as exc:
                if exc.response.is_client_error:
                    raise
                attempt += 1
                _log_failure(action, attempt, self.retry_attempts, exc)
                if attempt > self.retry_attempts:
                    raise
            except httpx.HTTPError as exc:
                attempt += 1
                _log_failure(action, attempt, self.retry_attempts, exc)
                if attempt > self.retry_attempts:
                    raise
            await asyncio.sleep(self.retry_delay_seconds)


def _log_failure(action: str, attempt: int, retries: int, exc: Exception) -> None:
    _logger.warning(
        "Open Food Facts %s failed (attempt %s/%s, status=%s): %s",
        action,
        attempt,
        retries + 1,
        _status_code_from_exception(exc),
        exc,
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def parse_product(raw: dict[str, object]) -> ProductRecord:
    """Map a raw Open Food Facts product into a ProductRecord."""
    nutriments = raw.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    return ProductRecord(
        code=str(raw.get("code") or ""),
        name=_to_str(raw.get("product_name")),
        serving_size=_to_str(raw.get("serving_size")),
        calories=_to_float(nutriments.get("energy-kcal_100g")),
        protein_g=_to_float(nutriments.get("proteins_100g")),
        carbs_g=_to_float(nutriments.get("carbohydrates_100g")),
        fat_g=_to_float(nutriments.get("fat_100g")),
        fiber_g=_to_float(nutriments.get("fiber_100g")),
        vitamin_a_mg=_to_mg(nutriments.get("vitamin-a_100g")),
        vitamin_c_mg=_to_mg(nutriments.get("vitamin-c_100g")),
        calcium_mg=_to_mg(nutriments.get("calcium_100g")),
        iron_mg=_to_mg(nutriments.get("iron_100g")),
    )


def _to_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_float(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.replace(",", "."))
        except ValueError:
            return None
    return None


def _to_mg(value: object) -> float | None:
    grams = _to_float(value)
    return grams * _MG_PER_G if grams is not None else None
