"""Tests for the LLM food parser service."""

import asyncio

from nutritalk.services.parsing import PARSE_SCHEMA, FoodParsingService
from tests.conftest import FakeFoodParserClient


def test_parse_returns_foods() -> None:
    client = FakeFoodParserClient()
    service = FoodParsingService(client=client, model="gpt-4o-mini")

    foods = asyncio.run(service.parse("un yaourt Danone à la vanille"))

    assert foods is not None
    assert foods[0].name == "yaourt"
    assert foods[0].brand == "Danone"
    assert client.calls == ["un yaourt Danone à la vanille"]


def test_parse_disabled_without_client() -> None:
    service = FoodParsingService(client=None, model="gpt-4o-mini")

    assert service.enabled is False
    assert asyncio.run(service.parse("du riz")) is None


def test_parse_invalid_payload_returns_none() -> None:
    client = FakeFoodParserClient(payload={"foods": [{"name": "riz"}]})
    service = FoodParsingService(client=client, model="gpt-4o-mini")

    assert asyncio.run(service.parse("du riz")) is None


def test_parse_client_failure_returns_none() -> None:
    client = FakeFoodParserClient(error=RuntimeError("boom"))
    service = FoodParsingService(client=client, model="gpt-4o-mini")

    assert asyncio.run(service.parse("du riz")) is None


def test_schema_requires_every_field() -> None:
    item = PARSE_SCHEMA["properties"]["foods"]["items"]

    assert set(item["required"]) == set(item["properties"])
