"""Models for LLM food extraction results."""

from pydantic import BaseModel, Field


class ParsedFood(BaseModel):
    """Single food entity extracted from a sentence."""

    name: str
    quantity: float = Field(ge=0.0)
    unit: str
    brand: str | None = None
    flavour: str | None = None


class ParsedFoodExtract(BaseModel):
    """Structured output for food extraction."""

    foods: list[ParsedFood]
