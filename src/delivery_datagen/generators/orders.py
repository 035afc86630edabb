"""
Stage 2 generator: orders.

Tables generated:
- orders (one customer, restaurant and driver each, status lifecycle,
  amounts and derived earnings)

Customer, restaurant and driver are drawn independently and uniformly:
no geographic or temporal relationship is modelled between them.
"""

from datetime import datetime, time

from .base import BaseGenerator
from ..constants import (
    DELIVERED_STATUS,
    DELIVERY_FEE_RANGE,
    DELIVERY_HORIZON_HOURS,
    DRIVER_EARNINGS_SHARE,
    ORDER_RATING_RANGE,
    ORDER_STATUSES,
    ORDER_TOTAL_RANGE,
    PAYMENT_METHODS,
    PLATFORM_FEE_SHARE,
    RESTAURANT_EARNINGS_SHARE,
)
from ..models import Order


def share_of(amount: float, share: float) -> float:
    """Fixed proportion of an amount, rounded to cents."""
    return round(amount * share, 2)


def derive_earnings(total_amount: float, delivery_fee: float) -> dict[str, float]:
    """
    Platform fee, restaurant and driver earnings for an order.

    The three values are not meant to add up to total_amount + delivery_fee.
    """
    return {
        "platform_fee": share_of(total_amount, PLATFORM_FEE_SHARE),
        "restaurant_earnings": share_of(total_amount, RESTAURANT_EARNINGS_SHARE),
        "driver_earnings": share_of(delivery_fee, DRIVER_EARNINGS_SHARE),
    }


class OrderGenerator(BaseGenerator):
    """Generate orders referencing stage 1 entities."""

    STAGE = "orders"
    REQUIRES = ("restaurants", "customers", "drivers")
    TABLES = ("orders",)

    def generate(self) -> None:
        """Generate the orders table."""
        self.check_requirements()
        print("  Stage 2: orders...")

        customers = self.ctx.table("customers")
        restaurants = self.ctx.table("restaurants")
        drivers = self.ctx.table("drivers")
        window_start = datetime.combine(self.config.start_date, time.min)
        window_end = datetime.combine(self.config.end_date, time(23, 59, 59))

        orders = []
        for order_id in range(self.config.orders):
            orders.append(
                self._order(
                    order_id,
                    customer_id=self.sampler.choice(customers).id,
                    restaurant_id=self.sampler.choice(restaurants).id,
                    driver_id=self.sampler.choice(drivers).id,
                    ordered_at=self.sampler.datetime_between(window_start, window_end),
                )
            )
        self.data["orders"] = orders

        delivered = sum(1 for o in orders if o.is_delivered)
        print(f"    Generated: {len(orders)} orders ({delivered} delivered)")

    def _order(
        self,
        order_id: int,
        customer_id: int,
        restaurant_id: int,
        driver_id: int,
        ordered_at: datetime,
    ) -> Order:
        status = self.sampler.choice(ORDER_STATUSES)
        total_amount = self.sampler.uniform(*ORDER_TOTAL_RANGE)
        delivery_fee = self.sampler.uniform(*DELIVERY_FEE_RANGE)

        delivered_at = None
        ratings = (None, None, None)
        if status == DELIVERED_STATUS:
            delivered_at = self.sampler.soon_after(ordered_at, DELIVERY_HORIZON_HOURS)
            ratings = tuple(self.sampler.randint(*ORDER_RATING_RANGE) for _ in range(3))

        return Order(
            id=order_id,
            customer_id=customer_id,
            restaurant_id=restaurant_id,
            driver_id=driver_id,
            order_datetime=ordered_at,
            delivery_datetime=delivered_at,
            status=status,
            total_amount=total_amount,
            delivery_fee=delivery_fee,
            payment_method=self.sampler.choice(PAYMENT_METHODS),
            rating_restaurant=ratings[0],
            rating_driver=ratings[1],
            rating_overall=ratings[2],
            **derive_earnings(total_amount, delivery_fee),
        )
