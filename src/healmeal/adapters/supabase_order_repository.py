"""Supabase repository for orders."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from healmeal.domain.cart import CartItem
from healmeal.domain.meals import MealSource
from healmeal.domain.orders import OrderRecord, OrderStatus
from healmeal.services.orders import OrderRepository


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for orders and order items."""

    client: Client

    def create_order(  # noqa: PLR0913
        self,
        user_id: UUID,
        order_date: datetime,
        total_price: float,
        status: OrderStatus,
        delivery_address: str,
        payment_method: str,
    ) -> UUID:
        """Create an order row and return its id."""
        response = (
            self.client.table("orders")
            .insert(
                {
                    "user_id": str(user_id),
                    "order_date": order_date.isoformat(),
                    "total_price": total_price,
                    "status": str(status),
                    "delivery_address": delivery_address,
                    "payment_method": payment_method,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create order")
        return UUID(str(response.data[0]["id"]))

    def create_order_items(self, order_id: UUID, items: Sequence[CartItem]) -> None:
        """Create order item rows."""
        payload = [
            {
                "order_id": str(order_id),
                "meal_id": item.meal_id,
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in items
        ]
        if payload:
            self.client.table("order_items").insert(payload).execute()

    def list_orders(self, user_id: UUID) -> list[OrderRecord]:
        """Return a user's orders with their items, most recent first."""
        response = (
            self.client.table("orders")
            .select("*, order_items(*)")
            .eq("user_id", str(user_id))
            .order("order_date", desc=True)
            .execute()
        )
        return [_parse_order(row) for row in response.data or []]

    def update_status(self, order_id: UUID, status: OrderStatus) -> None:
        """Persist a status change."""
        self.client.table("orders").update({"status": str(status)}).eq(
            "id", str(order_id)
        ).execute()

    def delete_order(self, order_id: UUID) -> None:
        """Delete an order row and its items."""
        self.client.table("order_items").delete().eq(
            "order_id", str(order_id)
        ).execute()
        self.client.table("orders").delete().eq("id", str(order_id)).execute()


def _parse_order(row: dict[str, object]) -> OrderRecord:
    items = row.get("order_items") or []
    return OrderRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        items=tuple(
            CartItem(
                meal_id=str(item["meal_id"]),
                quantity=int(item.get("quantity", 1)),
                price=float(item.get("price", 0.0)),
                meal_source=MealSource.PERSISTED,
            )
            for item in items
        ),
        total_price=float(row.get("total_price", 0.0)),
        order_date=datetime.fromisoformat(str(row["order_date"])),
        status=OrderStatus(str(row.get("status", OrderStatus.PENDING))),
        delivery_address=row.get("delivery_address"),
        payment_method=row.get("payment_method"),
    )
