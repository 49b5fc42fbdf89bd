"""LLM-backed food entity extraction."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutritalk.domain.parsing import ParsedFood, ParsedFoodExtract

PARSE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "number", "minimum": 0.0},
                    "unit": {"type": "string"},
                    "brand": {"anyOf": [{"type": "string"}, {"type": "null"}]},
                    "flavour": {"anyOf": [{"type": "string"}, {"type": "null"}]},
                },
                "required": ["name", "quantity", "unit", "brand", "flavour"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foods"],
    "additionalProperties": False,
}

PARSE_PROMPT = (
    "Extract every food mentioned in the user's message with its quantity "
    "and unit. Include the brand and flavour when they are stated."
)

_logger = logging.getLogger(__name__)


class FoodParserClient(Protocol):
    """Interface for LLM structured extraction."""

    async def extract(
        self,
        *,
        model: str,
        text: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured extraction data."""


@dataclass
class FoodParsingService:
    """Extracts food entities from text when an LLM client is configured."""

    client: FoodParserClient | None
    model: str

    @property
    def enabled(self) -> bool:
        """Return True when an LLM client is available."""
        return self.client is not None

    async def parse(self, text: str) -> list[ParsedFood] | None:
        """Return parsed foods, or None when parsing is unavailable or fails."""
        if self.client is None or not text.strip():
            return None
        try:
            raw = await self.client.extract(
                model=self.model,
                text=text,
                schema=PARSE_SCHEMA,
                prompt=PARSE_PROMPT,
            )
            return ParsedFoodExtract.model_validate(raw).foods
        except ValidationError:
            _logger.warning("LLM returned foods in an unexpected shape")
            return None
        except Exception:
            _logger.exception("LLM food parsing failed")
            return None
