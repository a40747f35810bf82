"""JSON-file-backed implementation of OrderRepository.

Orders store resolved amounts only, all in integer cents.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from calor.domain.model.cart import CartLineItem
from calor.domain.model.order import Order
from calor.domain.model.value_objects import Quantity
from calor.domain.repository.order_repository import OrderRepository
from calor.infrastructure.persistence.json_records import JsonRecordFile

# Order amount fields persisted as-is; everything else is mapped by hand.
_AMOUNT_FIELDS = (
    "subtotal_cents",
    "shipping_cents",
    "promo_discount_cents",
    "gift_card_discount_cents",
    "points_used",
    "points_discount_cents",
    "total_cents",
    "points_earned",
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    def next_id(self) -> int:
        return max((raw["id"] for raw in self._file.load()), default=0) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        raw = self._file.find("id", order_id)
        return _to_domain(raw) if raw is not None else None

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()
        self._file.upsert("id", _to_raw(order))


def _to_raw(order: Order) -> dict:
    raw = {
        "id": order.id,
        "customer_id": order.customer_id,
        "created_at": order.created_at.isoformat(),
        "items": [
            {
                "product_id": item.product_id,
                "variant_id": item.variant_id,
                "unit_price_cents": item.unit_price_cents,
                "quantity": item.quantity.value,
            }
            for item in order.items
        ],
        "promo_code": order.promo_code,
        "gift_card_code": order.gift_card_code,
    }
    raw.update({name: getattr(order, name) for name in _AMOUNT_FIELDS})
    return raw


def _to_domain(raw: dict) -> Order:
    return Order(
        id=raw["id"],
        customer_id=raw["customer_id"],
        items=[
            CartLineItem(
                product_id=item["product_id"],
                variant_id=item.get("variant_id"),
                unit_price_cents=item["unit_price_cents"],
                quantity=Quantity(item["quantity"]),
            )
            for item in raw["items"]
        ],
        promo_code=raw.get("promo_code"),
        gift_card_code=raw.get("gift_card_code"),
        created_at=datetime.fromisoformat(raw["created_at"]),
        **{name: raw.get(name, 0) for name in _AMOUNT_FIELDS},
    )
