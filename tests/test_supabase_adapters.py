"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest

from healmeal.adapters.supabase_auth_client import SupabaseAuthClient
from healmeal.adapters.supabase_meal_log_repository import SupabaseMealLogRepository
from healmeal.adapters.supabase_meal_repository import SupabaseMealRepository
from healmeal.adapters.supabase_order_repository import SupabaseOrderRepository
from healmeal.adapters.supabase_profile_repository import SupabaseProfileRepository
from healmeal.domain.cart import CartItem
from healmeal.domain.meal_logs import MealLogEntry
from healmeal.domain.meals import MealSource, MealType
from healmeal.domain.orders import OrderStatus
from healmeal.domain.profiles import UserProfile
from healmeal.services.profiles import ProfileAttribute


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
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_select: str | None = None
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, columns: str = "*") -> "FakeTable":
        self._action = "select"
        self.last_select = columns
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
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
class FakeAuth:
    user: object | None = None
    calls: list[tuple[str, dict[str, object] | None]] = field(default_factory=list)

    def sign_up(self, credentials: dict[str, object]) -> SimpleNamespace:
        self.calls.append(("sign_up", credentials))
        return SimpleNamespace(user=self.user)

    def sign_in_with_password(self, credentials: dict[str, object]) -> SimpleNamespace:
        self.calls.append(("sign_in", credentials))
        return SimpleNamespace(user=self.user)

    def sign_out(self) -> None:
        self.calls.append(("sign_out", None))


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    auth: FakeAuth = field(default_factory=FakeAuth)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_order_repository_create_and_list() -> None:
    client = FakeSupabaseClient()
    orders_table = client.table("orders")
    order_id = str(uuid4())
    user_id = uuid4()
    orders_table.queue("insert", [{"id": order_id}])
    orders_table.queue(
        "select",
        [
            {
                "id": order_id,
                "user_id": str(user_id),
                "total_price": 36.96,
                "order_date": "2026-03-14T12:00:00+00:00",
                "status": "confirmed",
                "delivery_address": "1 Main St",
                "payment_method": "card",
                "order_items": [{"meal_id": "db-1", "quantity": 2, "price": 4.5}],
            }
        ],
    )
    repository = SupabaseOrderRepository(client)

    created = repository.create_order(
        user_id=user_id,
        order_date=datetime(2026, 3, 14, 12, tzinfo=UTC),
        total_price=36.96,
        status=OrderStatus.CONFIRMED,
        delivery_address="1 Main St",
        payment_method="card",
    )
    records = repository.list_orders(user_id)

    assert created == UUID(order_id)
    assert orders_table.last_select == "*, order_items(*)"
    assert records[0].status == OrderStatus.CONFIRMED
    assert records[0].items == (
        CartItem(
            meal_id="db-1", quantity=2, price=4.5, meal_source=MealSource.PERSISTED
        ),
    )


def test_supabase_order_repository_requires_inserted_row() -> None:
    repository = SupabaseOrderRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.create_order(
            user_id=uuid4(),
            order_date=datetime.now(tz=UTC),
            total_price=1.0,
            status=OrderStatus.CONFIRMED,
            delivery_address="x",
            payment_method="card",
        )


def test_supabase_order_repository_items_and_status() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseOrderRepository(client)
    order_id = uuid4()

    repository.create_order_items(order_id, [CartItem("db-1", 2, 4.5)])
    repository.create_order_items(order_id, [])
    repository.update_status(order_id, OrderStatus.CANCELLED)

    assert client.table("order_items").last_payload == [
        {"order_id": str(order_id), "meal_id": "db-1", "quantity": 2, "price": 4.5}
    ]
    assert client.table("order_items").actions == ["insert"]
    assert client.table("orders").last_payload == {"status": "cancelled"}
    assert client.table("orders").last_filters == [("id", str(order_id))]


def test_supabase_order_repository_delete_order() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseOrderRepository(client)
    order_id = uuid4()

    repository.delete_order(order_id)

    assert client.table("order_items").actions == ["delete"]
    assert client.table("order_items").last_filters == [("order_id", str(order_id))]
    assert client.table("orders").actions == ["delete"]
    assert client.table("orders").last_filters == [("id", str(order_id))]


def test_supabase_meal_log_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("meal_logs")
    items_table = client.table("meal_log_items")
    user_id = uuid4()
    log_id = str(uuid4())
    entry_id = str(uuid4())
    logs_table.queue("insert", [{"id": log_id}])
    items_table.queue("insert", [{"id": entry_id}])
    logs_table.queue(
        "select",
        [
            {
                "id": log_id,
                "log_date": "2026-03-14",
                "user_id": str(user_id),
                "meal_log_items": [
                    {
                        "id": entry_id,
                        "meal_id": "db-1",
                        "meal_type": "lunch",
                        "time_consumed": "2026-03-14T12:30:00+00:00",
                        "notes": None,
                    }
                ],
            }
        ],
    )
    repository = SupabaseMealLogRepository(client)

    created_log = repository.create_log(user_id, date(2026, 3, 14))
    created_entry = repository.create_entry(
        created_log,
        MealLogEntry(
            meal_id="db-1",
            meal_type=MealType.LUNCH,
            time_consumed=datetime(2026, 3, 14, 12, 30, tzinfo=UTC),
        ),
    )
    logs = repository.list_logs(user_id)

    assert created_log == log_id
    assert created_entry == UUID(entry_id)
    assert items_table.last_payload["log_id"] == log_id
    assert items_table.last_payload["meal_type"] == "lunch"
    assert logs[0].date == date(2026, 3, 14)
    assert logs[0].meals[0].entry_id == UUID(entry_id)
    assert logs[0].meals[0].meal_type == MealType.LUNCH


def test_supabase_meal_log_repository_deletes() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseMealLogRepository(client)
    entry_id = uuid4()

    repository.delete_entry(entry_id)
    repository.delete_log("log-1")

    assert client.table("meal_log_items").last_filters == [("id", str(entry_id))]
    assert client.table("meal_logs").last_filters == [("id", "log-1")]


def test_supabase_profile_repository() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    client.table("profiles").queue(
        "select",
        [
            {
                "id": str(user_id),
                "name": "Ada",
                "age": 36,
                "height": 170,
                "weight": 65,
                "gender": "female",
            }
        ],
    )
    client.table("user_allergies").queue("select", [{"allergy_name": "Peanuts"}])
    repository = SupabaseProfileRepository(client)

    profile = repository.get_profile(user_id)
    allergies = repository.list_attribute(user_id, ProfileAttribute.ALLERGIES)
    repository.upsert_profile(UserProfile(id=user_id, height_cm=170, weight_kg=65))

    assert profile is not None
    assert profile.height_cm == 170
    assert allergies == ["Peanuts"]
    assert client.table("profiles").last_payload["bmi"] == 22.5
    assert client.table("profiles").last_payload["id"] == str(user_id)
    assert repository.get_profile(uuid4()) is None


def test_supabase_profile_repository_replaces_attribute_rows() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    repository = SupabaseProfileRepository(client)

    repository.replace_attribute(
        user_id, ProfileAttribute.CONDITIONS, ["diabetes", "ibs"]
    )
    repository.replace_attribute(user_id, ProfileAttribute.DIETARY_PREFERENCES, [])

    conditions = client.table("user_health_conditions")
    assert conditions.actions == ["delete", "insert"]
    assert conditions.last_payload == [
        {"user_id": str(user_id), "condition_name": "diabetes"},
        {"user_id": str(user_id), "condition_name": "ibs"},
    ]
    assert client.table("user_dietary_preferences").actions == ["delete"]


def test_supabase_meal_repository_skips_bad_rows() -> None:
    client = FakeSupabaseClient()
    meal_id = str(uuid4())
    client.table("meals").queue(
        "select",
        [
            {
                "id": meal_id,
                "name": "Lentil Soup",
                "calories": 320,
                "protein": 18,
                "carbs": 44,
                "fats": 7,
                "meal_type": "lunch",
                "price": 10.5,
            },
            {"id": "bad", "name": "Broken", "meal_type": "brunch"},
        ],
    )

    meals = SupabaseMealRepository(client).list_meals()

    assert [meal.id for meal in meals] == [meal_id]
    assert meals[0].source == MealSource.PERSISTED
    assert meals[0].fats_g == 7


def test_supabase_auth_client() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    client.auth.user = SimpleNamespace(
        id=str(user_id), email="ada@example.com", user_metadata={"name": "Ada"}
    )
    auth_client = SupabaseAuthClient(client)

    signed_up = auth_client.sign_up("ada@example.com", "secret", "Ada")
    signed_in = auth_client.sign_in("ada@example.com", "secret")
    auth_client.sign_out()

    assert signed_up.id == user_id
    assert signed_in.name == "Ada"
    assert client.auth.calls[0][1]["options"] == {"data": {"name": "Ada"}}
    assert [call[0] for call in client.auth.calls] == [
        "sign_up",
        "sign_in",
        "sign_out",
    ]


def test_supabase_auth_client_without_user() -> None:
    auth_client = SupabaseAuthClient(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        auth_client.sign_in("ada@example.com", "wrong")
