"""Shared test fixtures."""

import random
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import httpx
import pytest

from nutritalk.adapters.off_client import OpenFoodFactsClient
from nutritalk.config import Settings
from nutritalk.containers import AppContainer
from nutritalk.domain.logs import DailyLog, WeightEntry
from nutritalk.domain.models import AccountRecord
from nutritalk.domain.profiles import UserProfile
from nutritalk.services.accounts import AccountRepository, AccountService, TokenIssuer
from nutritalk.services.assistant import NutritionAssistant
from nutritalk.services.cache import InMemoryCache
from nutritalk.services.logs import DailyLogRepository, DailyLogService
from nutritalk.services.nutrition import NutritionService
from nutritalk.services.parsing import FoodParserClient, FoodParsingService
from nutritalk.services.profiles import ProfileRepository, ProfileService
from nutritalk.services.sync import SyncService
from nutritalk.services.weights import WeightRepository, WeightService


@dataclass
class InMemoryAccountRepository(AccountRepository):
    """In-memory account repository for tests."""

    accounts: dict[str, AccountRecord] = field(default_factory=dict)

    def get_by_email(self, email: str) -> AccountRecord | None:
        return self.accounts.get(email)

    def create_account(self, email: str, name: str, password_hash: str) -> AccountRecord:
        account = AccountRecord(
            id=uuid4(), email=email, name=name, password_hash=password_hash
        )
        self.accounts[email] = account
        return account


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)
    saves: int = 0

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, profile: UserProfile) -> None:
        self.saves += 1
        self.profiles[profile.user_id] = profile


@dataclass
class InMemoryDailyLogRepository(DailyLogRepository):
    """In-memory daily log repository for tests."""

    logs: dict[tuple[UUID, date], DailyLog] = field(default_factory=dict)

    def get_log(self, user_id: UUID, day: date) -> DailyLog | None:
        return self.logs.get((user_id, day))

    def save_log(self, user_id: UUID, log: DailyLog) -> None:
        self.logs[(user_id, log.day)] = log

    def list_logs(self, user_id: UUID) -> list[DailyLog]:
        return [log for (owner, _), log in self.logs.items() if owner == user_id]


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository for tests."""

    weights: dict[UUID, list[WeightEntry]] = field(default_factory=dict)

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        return list(self.weights.get(user_id, []))

    def replace_weights(self, user_id: UUID, entries: list[WeightEntry]) -> None:
        self.weights[user_id] = list(entries)


def off_product(
    code: str = "3017620422003",
    name: str | None = "Pâte à tartiner",
    serving_size: str | None = "15 g",
    calories: float = 539,
) -> dict[str, object]:
    """Build a raw Open Food Facts product."""
    return {
        "code": code,
        "product_name": name,
        "serving_size": serving_size,
        "nutriments": {
            "energy-kcal_100g": calories,
            "proteins_100g": 6.3,
            "carbohydrates_100g": 57.5,
            "fat_100g": 30.9,
            "fiber_100g": 3.4,
            "calcium_100g": 0.12,
            "vitamin-c_100g": 0.002,
        },
    }


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client with in-memory responses."""

    search_results: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    default_results: list[dict[str, object]] = field(default_factory=list)
    products: dict[str, dict[str, object]] = field(default_factory=dict)
    error: Exception | None = None
    search_calls: list[str] = field(default_factory=list)
    product_calls: list[str] = field(default_factory=list)

    async def search_products(self, query: str) -> dict[str, object]:
        self.search_calls.append(query)
        if self.error is not None:
            raise self.error
        products = self.search_results.get(query, self.default_results)
        return {"count": len(products), "products": products}

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.product_calls.append(barcode)
        if self.error is not None:
            raise self.error
        if barcode not in self.products:
            return {"status": 0, "status_verbose": "product not found"}
        return {"status": 1, "product": self.products[barcode]}


def http_status_error(status_code: int) -> httpx.HTTPStatusError:
    """Build an httpx status error for a fake response."""
    request = httpx.Request("GET", "https://world.openfoodfacts.org/test")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


@dataclass
class FakeFoodParserClient(FoodParserClient):
    """Fake LLM parser returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "name": "yaourt",
                    "quantity": 125,
                    "unit": "g",
                    "brand": "Danone",
                    "flavour": "vanille",
                }
            ]
        }
    )
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def extract(
        self,
        *,
        model: str,
        text: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.payload


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float = 0.5) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        jwt_secret="test-secret",
        analysis_delay_seconds=0,
    )


@pytest.fixture
def off_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def nutrition_service(off_client: FakeOpenFoodFactsClient) -> NutritionService:
    return NutritionService(
        off_client=off_client, cache=InMemoryCache(), retry_delay_seconds=0
    )


@pytest.fixture
def profile_service() -> ProfileService:
    return ProfileService(InMemoryProfileRepository())


@pytest.fixture
def weight_service() -> WeightService:
    return WeightService(InMemoryWeightRepository())


@pytest.fixture
def log_service(
    profile_service: ProfileService, weight_service: WeightService
) -> DailyLogService:
    return DailyLogService(
        repository=InMemoryDailyLogRepository(),
        profile_repository=profile_service.repository,
        weight_service=weight_service,
    )


@pytest.fixture
def account_service(profile_service: ProfileService) -> AccountService:
    return AccountService(
        repository=InMemoryAccountRepository(),
        profile_service=profile_service,
        tokens=TokenIssuer(secret="test-secret"),
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    account_service: AccountService,
    profile_service: ProfileService,
    log_service: DailyLogService,
    weight_service: WeightService,
    nutrition_service: NutritionService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        account_service=account_service,
        profile_service=profile_service,
        log_service=log_service,
        weight_service=weight_service,
        sync_service=SyncService(profile_service, log_service, weight_service),
        nutrition_service=nutrition_service,
        assistant=NutritionAssistant(
            nutrition_service=nutrition_service,
            rng=FixedRandom(),
            analysis_delay_seconds=0,
        ),
        parsing_service=FoodParsingService(
            client=FakeFoodParserClient(), model=settings.openai_model
        ),
        close_resources=close_resources,
    )
