"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4

from nutritalk.adapters.supabase_account_repository import SupabaseAccountRepository
from nutritalk.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from nutritalk.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutritalk.adapters.supabase_weight_repository import SupabaseWeightRepository
from nutritalk.domain.foods import DINNER
from nutritalk.domain.logs import DailyLog, FoodEntry, WeightEntry
from nutritalk.domain.profiles import DailyTargets, UserProfile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_on_conflict: str | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, values: list[object]) -> "FakeTable":
        self.last_filters.append((column, values))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_account_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = str(uuid4())
    row = {
        "id": user_id,
        "email": "alice@example.com",
        "name": "Alice",
        "password_hash": "pbkdf2_sha256$1$a$b",
    }
    users_table.queue("insert", [row])
    users_table.queue("select", [row])

    repository = SupabaseAccountRepository(client)
    created = repository.create_account("alice@example.com", "Alice", "hash")
    fetched = repository.get_by_email("alice@example.com")

    assert str(created.id) == user_id
    assert fetched is not None
    assert fetched.password_hash == "pbkdf2_sha256$1$a$b"
    assert users_table.last_filters == [("email", "alice@example.com")]


def test_supabase_account_repository_missing_email() -> None:
    repository = SupabaseAccountRepository(FakeSupabaseClient())

    assert repository.get_by_email("nobody@example.com") is None


def test_supabase_profile_repository_upserts_and_parses() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("profiles")
    user_id = uuid4()
    profile = UserProfile(
        user_id=user_id,
        name="Alice",
        email="alice@example.com",
        targets=DailyTargets(calories=2556, protein_g=160, carbs_g=320, fat_g=71),
    )

    repository = SupabaseProfileRepository(client)
    repository.save_profile(profile)
    assert profiles_table.last_on_conflict == "user_id"
    assert isinstance(profiles_table.last_payload, dict)
    profiles_table.queue("select", [profiles_table.last_payload])

    fetched = repository.get_profile(user_id)

    assert fetched == profile


def test_supabase_profile_without_targets() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    client.table("profiles").queue(
        "select", [{"user_id": str(user_id), "name": "Bob", "email": "b@b.fr"}]
    )

    fetched = SupabaseProfileRepository(client).get_profile(user_id)

    assert fetched is not None
    assert fetched.targets is None
    assert fetched.weight_kg == 70


def test_supabase_daily_log_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("daily_logs")
    user_id = uuid4()
    entry = FoodEntry(
        id="e1",
        name="Saumon",
        quantity=120,
        unit="g",
        calories=249.6,
        protein_g=26.4,
        carbs_g=0,
        fat_g=15.6,
        category="Protéines",
        meal=DINNER,
        timestamp=datetime(2024, 3, 14, 19, 30, tzinfo=UTC),
    )
    log = DailyLog(
        day=date(2024, 3, 14),
        entries=[entry],
        total_calories=249.6,
        total_protein_g=26.4,
        total_fat_g=15.6,
        water_ml=750,
        steps=8000,
        target_calories=2556,
        weight_kg=69.5,
    )

    repository = SupabaseDailyLogRepository(client)
    repository.save_log(user_id, log)
    assert logs_table.last_on_conflict == "user_id,log_date"
    logs_table.queue("select", [logs_table.last_payload])

    fetched = repository.get_log(user_id, date(2024, 3, 14))

    assert fetched == log
    assert ("log_date", "2024-03-14") in logs_table.last_filters


def test_supabase_daily_log_list_and_missing() -> None:
    client = FakeSupabaseClient()
    client.table("daily_logs").queue(
        "select", [{"log_date": "2024-03-13"}, {"log_date": "2024-03-14"}]
    )

    repository = SupabaseDailyLogRepository(client)
    logs = repository.list_logs(uuid4())

    assert [log.day for log in logs] == [date(2024, 3, 13), date(2024, 3, 14)]
    assert logs[0].entries == []
    assert repository.get_log(uuid4(), date(2024, 3, 15)) is None


def test_supabase_weight_repository_replaces_history() -> None:
    client = FakeSupabaseClient()
    weights_table = client.table("weights")
    weights_table.queue("select", [{"log_date": "2024-03-14", "weight_kg": 69.5}])
    weights_table.queue(
        "select",
        [
            {"log_date": "2024-03-13"},
            {"log_date": "2024-03-14"},
            {"log_date": "2024-03-15"},
        ],
    )
    user_id = uuid4()

    repository = SupabaseWeightRepository(client)
    history = repository.list_weights(user_id)
    repository.replace_weights(
        user_id,
        [
            WeightEntry(day=date(2024, 3, 14), weight_kg=69.5),
            WeightEntry(day=date(2024, 3, 15), weight_kg=69.0),
        ],
    )

    assert history == [WeightEntry(day=date(2024, 3, 14), weight_kg=69.5)]
    assert weights_table.actions == ["select", "upsert", "select", "delete"]
    assert weights_table.last_on_conflict == "user_id,log_date"
    assert isinstance(weights_table.last_payload, list)
    assert weights_table.last_payload[1]["log_date"] == "2024-03-15"
    assert weights_table.last_filters[-1] == ("log_date", ["2024-03-13"])


def test_supabase_weight_repository_keeps_rows_when_nothing_dropped() -> None:
    client = FakeSupabaseClient()
    weights_table = client.table("weights")
    weights_table.queue("select", [{"log_date": "2024-03-14"}])

    SupabaseWeightRepository(client).replace_weights(
        uuid4(), [WeightEntry(day=date(2024, 3, 14), weight_kg=70.0)]
    )

    assert weights_table.actions == ["upsert", "select"]


def test_supabase_weight_repository_empty_history_deletes_existing_rows() -> None:
    client = FakeSupabaseClient()
    weights_table = client.table("weights")
    weights_table.queue("select", [{"log_date": "2024-03-14"}])

    SupabaseWeightRepository(client).replace_weights(uuid4(), [])

    assert weights_table.actions == ["select", "delete"]
    assert weights_table.last_filters[-1] == ("log_date", ["2024-03-14"])
