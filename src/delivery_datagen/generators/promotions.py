"""
Stage 3-4 generators: promotions and order-promotion links.

Tables generated:
- promotions (percentage or fixed-amount campaigns with a validity window)
- order_promotions (~20% of orders, one promotion each)
"""

from datetime import timedelta

from .base import BaseGenerator
from ..constants import (
    DISCOUNT_FIXED_AMOUNT,
    DISCOUNT_PERCENTAGE,
    DISCOUNT_TYPES,
    DISCOUNT_VALUE_RANGES,
    MAX_USAGE_RANGE,
    MIN_ORDER_VALUE_RANGE,
    PROMOTION_CODE_ALPHABET,
    PROMOTION_CODE_LENGTH,
    PROMOTION_MAX_DAYS,
    USAGE_COUNT_RANGE,
)
from ..models import OrderPromotion, Promotion


def compute_discount(discount_type: str, discount_value: float, total_amount: float) -> float:
    """
    Discount a promotion grants on an order.

    Percentages apply to the order total; fixed amounts are capped at the
    total so a discount never exceeds what the customer pays.
    """
    if discount_type == DISCOUNT_PERCENTAGE:
        return round(total_amount * (discount_value / 100), 2)
    if discount_type == DISCOUNT_FIXED_AMOUNT:
        return round(min(float(discount_value), total_amount), 2)
    raise ValueError(f"Unknown discount type: {discount_type!r}")


class PromotionGenerator(BaseGenerator):
    """Generate independent promotional campaigns."""

    STAGE = "promotions"
    TABLES = ("promotions",)

    def generate(self) -> None:
        """Generate the promotions table."""
        print("  Stage 3: promotions...")
        self.data["promotions"] = [
            self._promotion(i) for i in range(self.config.promotions)
        ]
        kinds = {t: 0 for t in DISCOUNT_TYPES}
        for promo in self.data["promotions"]:
            kinds[promo.discount_type] += 1
        print(
            f"    Generated: {len(self.data['promotions'])} promotions "
            f"({kinds[DISCOUNT_PERCENTAGE]} percentage, "
            f"{kinds[DISCOUNT_FIXED_AMOUNT]} fixed amount)"
        )

    def _promotion(self, promotion_id: int) -> Promotion:
        start = self.sampler.date_between(self.config.start_date, self.config.end_date)
        discount_type = self.sampler.choice(DISCOUNT_TYPES)
        return Promotion(
            id=promotion_id,
            code=self.sampler.unique_code(PROMOTION_CODE_LENGTH, PROMOTION_CODE_ALPHABET),
            discount_type=discount_type,
            discount_value=self.sampler.randint(*DISCOUNT_VALUE_RANGES[discount_type]),
            start_date=start,
            end_date=self.sampler.date_between(start, start + timedelta(days=PROMOTION_MAX_DAYS)),
            usage_count=self.sampler.randint(*USAGE_COUNT_RANGE),
            max_usage=self.sampler.randint(*MAX_USAGE_RANGE),
            min_order_value=self.sampler.randint(*MIN_ORDER_VALUE_RANGE),
        )


class OrderPromotionGenerator(BaseGenerator):
    """
    Link a random subset of orders to promotions.

    Each order is selected independently with probability
    ``config.promotion_rate``; a selected order gets exactly one promotion.
    """

    STAGE = "order_promotions"
    REQUIRES = ("orders", "promotions")
    TABLES = ("order_promotions",)

    def generate(self) -> None:
        """Generate the order_promotions table."""
        self.check_requirements()
        print("  Stage 4: order-promotion links...")

        promotions = self.ctx.table("promotions")
        links = []
        for order in self.ctx.table("orders"):
            if not self.sampler.chance(self.config.promotion_rate):
                continue
            promotion = self.sampler.choice(promotions)
            links.append(
                OrderPromotion(
                    order_id=order.id,
                    promotion_id=promotion.id,
                    discount_amount=compute_discount(
                        promotion.discount_type,
                        promotion.discount_value,
                        order.total_amount,
                    ),
                )
            )
        self.data["order_promotions"] = links

        share = len(links) / max(len(self.ctx.table("orders")), 1)
        print(f"    Generated: {len(links)} links ({share:.1%} of orders)")
