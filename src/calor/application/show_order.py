"""Application service: Show Order use case (query)."""

from __future__ import annotations

from calor.application.dto import OrderDTO, OrderLineItemDTO
from calor.domain.exceptions import EntityNotFoundError
from calor.domain.model.order import Order
from calor.domain.model.value_objects import format_cents
from calor.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                variant_id=item.variant_id,
                quantity=item.quantity.value,
                unit_price=format_cents(item.unit_price_cents),
                line_total=format_cents(item.line_total_cents),
            )
            for item in order.items
        ],
        subtotal=format_cents(order.subtotal_cents),
        shipping=format_cents(order.shipping_cents),
        promo_code=order.promo_code,
        promo_discount=format_cents(order.promo_discount_cents),
        gift_card_code=order.gift_card_code,
        gift_card_discount=format_cents(order.gift_card_discount_cents),
        points_used=order.points_used,
        points_discount=format_cents(order.points_discount_cents),
        total=format_cents(order.total_cents),
        points_earned=order.points_earned,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
