"""
Stage 5 generator (optional): order line items and delivery tracking pings.

Tables generated:
- order_items (1-4 dishes per order from the restaurant's cuisine menu)
- delivery_tracking (status pings from the order's driver, in time order)

Only runs when ``config.include_details`` is set. Pings are placed at
random points in the bounding box; no route is simulated.
"""

from datetime import timedelta

from .base import BaseGenerator
from .entities import random_point
from ..constants import (
    ITEM_QUANTITY_RANGE,
    ITEM_UNIT_PRICE_RANGE,
    ITEMS_PER_ORDER_RANGE,
    MENU_ITEMS,
    SPECIAL_INSTRUCTIONS,
    SPECIAL_INSTRUCTIONS_PROBABILITY,
    TRACKING_STATUSES,
    UNDELIVERED_TRACKING_WINDOW_HOURS,
)
from ..models import DeliveryTracking, Order, OrderItem

# How far along TRACKING_STATUSES each order status has progressed
PINGS_BY_ORDER_STATUS = {
    "placed": 0,
    "accepted": 1,
    "preparing": 2,
    "picked_up": 3,
    "delivered": 5,
    "cancelled": 0,
}


class OrderDetailGenerator(BaseGenerator):
    """Generate order_items and delivery_tracking for existing orders."""

    STAGE = "order_details"
    REQUIRES = ("orders", "restaurants")
    TABLES = ("order_items", "delivery_tracking")

    def generate(self) -> None:
        """Generate both detail tables."""
        self.check_requirements()
        print("  Stage 5: order items and delivery tracking...")

        cuisine_by_restaurant = {
            r.id: r.cuisine_type for r in self.ctx.table("restaurants")
        }
        items: list[OrderItem] = []
        pings: list[DeliveryTracking] = []
        for order in self.ctx.table("orders"):
            self._items_for(order, cuisine_by_restaurant[order.restaurant_id], items)
            self._pings_for(order, pings)

        self.data["order_items"] = items
        self.data["delivery_tracking"] = pings
        print(f"    Generated: {len(items)} order items, {len(pings)} tracking pings")

    def _items_for(self, order: Order, cuisine: str, items: list[OrderItem]) -> None:
        menu = MENU_ITEMS[cuisine]
        for _ in range(self.sampler.randint(*ITEMS_PER_ORDER_RANGE)):
            quantity = self.sampler.randint(*ITEM_QUANTITY_RANGE)
            unit_price = self.sampler.uniform(*ITEM_UNIT_PRICE_RANGE)
            instructions = None
            if self.sampler.chance(SPECIAL_INSTRUCTIONS_PROBABILITY):
                instructions = self.sampler.choice(SPECIAL_INSTRUCTIONS)
            items.append(
                OrderItem(
                    id=len(items),
                    order_id=order.id,
                    item_name=self.sampler.choice(menu),
                    quantity=quantity,
                    unit_price=unit_price,
                    total_price=round(quantity * unit_price, 2),
                    special_instructions=instructions,
                )
            )

    def _pings_for(self, order: Order, pings: list[DeliveryTracking]) -> None:
        count = PINGS_BY_ORDER_STATUS[order.status]
        if count == 0:
            return

        start = order.order_datetime
        if order.delivery_datetime is not None:
            end = order.delivery_datetime
        else:
            end = start + timedelta(hours=UNDELIVERED_TRACKING_WINDOW_HOURS)
        times = sorted(self.sampler.datetime_between(start, end) for _ in range(count))
        if order.delivery_datetime is not None:
            # Final "delivered" ping coincides with the delivery timestamp
            times[-1] = order.delivery_datetime

        for status, timestamp in zip(TRACKING_STATUSES[:count], times):
            lat, lng = random_point(self.sampler, self.config.bounding_box)
            pings.append(
                DeliveryTracking(
                    id=len(pings),
                    order_id=order.id,
                    driver_id=order.driver_id,
                    status=status,
                    latitude=lat,
                    longitude=lng,
                    timestamp=timestamp,
                )
            )
