"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutritalk.adapters.off_client import HttpxOpenFoodFactsClient
from nutritalk.adapters.openai_food_parser import OpenAIFoodParserClient
from nutritalk.adapters.supabase_account_repository import SupabaseAccountRepository
from nutritalk.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from nutritalk.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutritalk.adapters.supabase_weight_repository import SupabaseWeightRepository
from nutritalk.config import Settings
from nutritalk.services.accounts import AccountService, TokenIssuer
from nutritalk.services.assistant import NutritionAssistant
from nutritalk.services.cache import InMemoryCache
from nutritalk.services.logs import DailyLogService
from nutritalk.services.nutrition import NutritionService
from nutritalk.services.parsing import FoodParsingService
from nutritalk.services.profiles import ProfileService
from nutritalk.services.sync import SyncService
from nutritalk.services.weights import WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    account_service: AccountService
    profile_service: ProfileService
    log_service: DailyLogService
    weight_service: WeightService
    sync_service: SyncService
    nutrition_service: NutritionService
    assistant: NutritionAssistant
    parsing_service: FoodParsingService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    profile_service = ProfileService(profile_repository)
    weight_service = WeightService(SupabaseWeightRepository(supabase_client))
    log_service = DailyLogService(
        repository=SupabaseDailyLogRepository(supabase_client),
        profile_repository=profile_repository,
        weight_service=weight_service,
    )
    account_service = AccountService(
        repository=SupabaseAccountRepository(supabase_client),
        profile_service=profile_service,
        tokens=TokenIssuer(
            secret=resolved_settings.jwt_secret,
            ttl_days=resolved_settings.token_ttl_days,
        ),
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
    )
    nutrition_service = NutritionService(off_client=off_client, cache=InMemoryCache())
    parser_client = (
        OpenAIFoodParserClient.create(resolved_settings.openai_api_key)
        if resolved_settings.openai_api_key
        else None
    )

    async def close_resources() -> None:
        await off_client.close()
        if parser_client is not None:
            await parser_client.close()

    return AppContainer(
        settings=resolved_settings,
        account_service=account_service,
        profile_service=profile_service,
        log_service=log_service,
        weight_service=weight_service,
        sync_service=SyncService(profile_service, log_service, weight_service),
        nutrition_service=nutrition_service,
        assistant=NutritionAssistant(
            nutrition_service=nutrition_service,
            analysis_delay_seconds=resolved_settings.analysis_delay_seconds,
        ),
        parsing_service=FoodParsingService(
            client=parser_client, model=resolved_settings.openai_model
        ),
        close_resources=close_resources,
    )
