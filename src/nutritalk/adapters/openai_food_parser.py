"""OpenAI Responses API client for food extraction."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from nutritalk.services.parsing import FoodParserClient


@dataclass
class OpenAIFoodParserClient(FoodParserClient):
    """Food parser backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIFoodParserClient":
        """Create an OpenAI parser client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def extract(
        self,
        *,
        model: str,
        text: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call the Responses API with structured outputs."""
        response = await self.client.responses.create(
            model=model,
            instructions=prompt,
            input=text,
            text={
                "format": {
                    "type": "json_schema",
                    "name": "food_extract",
                    "strict": True,
                    "schema": schema,
                }
            },
            temperature=0,
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()
