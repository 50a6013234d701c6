"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Tuple

from ..models.schemas import Order

ORDER_SPACING_MINUTES = 5
_QUANTITIES = (1, 2, 3, 1, 4, 2, 1, 5, 3, 4, 1, 2, 3, 1, 5, 4, 2, 3, 1, 2)


def build_static_orders(now: datetime) -> Tuple[Order, ...]:
    """Seed the demo order list relative to ``now``; newest order first."""
    orders: List[Order] = []
    for index, quantity in enumerate(_QUANTITIES, start=1):
        orders.append(
            Order(
                id=index,
                product_id=100 + index,
                quantity=quantity,
                order_date=now - timedelta(minutes=ORDER_SPACING_MINUTES * index),
            )
        )
    return tuple(orders)


class OrderCatalog:
    def __init__(self, orders: Tuple[Order, ...]) -> None:
        self._orders = orders

    @classmethod
    def seeded(cls, now: datetime) -> "OrderCatalog":
        return cls(build_static_orders(now))

    def list_orders(self) -> List[Order]:
        return list(self._orders)

    def __len__(self) -> int:
        return len(self._orders)
