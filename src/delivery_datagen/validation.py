"""
Validation checks for generated food-delivery data.

Contains all checks run after generation:
- Row counts and contiguous zero-based ids
- Coordinates inside the bounding box
- Customer date ordering and segment derivation
- Delivered-status consistency (delivery timestamp and ratings)
- Derived earnings
- Referential integrity
- Discount cap
- Unique emails and promotion codes
- Promotion validity windows

These validators are designed to work with the GeneratorContext pattern.
"""

from collections import Counter
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from .constants import (
    DRIVER_EARNINGS_SHARE,
    ORDER_RATING_RANGE,
    PLATFORM_FEE_SHARE,
    PROMOTION_MAX_DAYS,
    RESTAURANT_EARNINGS_SHARE,
)
from .generators.entities import customer_segment
from .generators.orders import share_of

if TYPE_CHECKING:
    from .generators import GeneratorContext

# (table, latitude attribute, longitude attribute)
COORDINATE_FIELDS = [
    ("restaurants", "latitude", "longitude"),
    ("customers", "latitude", "longitude"),
    ("drivers", "current_latitude", "current_longitude"),
    ("delivery_tracking", "latitude", "longitude"),
]

# (child table, FK attribute, parent table)
FOREIGN_KEYS = [
    ("orders", "customer_id", "customers"),
    ("orders", "restaurant_id", "restaurants"),
    ("orders", "driver_id", "drivers"),
    ("order_promotions", "order_id", "orders"),
    ("order_promotions", "promotion_id", "promotions"),
    ("order_items", "order_id", "orders"),
    ("delivery_tracking", "order_id", "orders"),
    ("delivery_tracking", "driver_id", "drivers"),
]

MAX_EXAMPLES = 3


def _examples(items: list[Any]) -> str:
    shown = ", ".join(str(i) for i in items[:MAX_EXAMPLES])
    return f"{shown}, ..." if len(items) > MAX_EXAMPLES else shown


class DataValidator:
    """
    Validator for generated food-delivery data.

    Works with GeneratorContext to validate invariants over the in-memory
    dataset before (or instead of) writing it out.
    """

    def __init__(self, ctx: "GeneratorContext") -> None:
        """
        Initialize validator with context.

        Args:
            ctx: GeneratorContext containing generated data and config
        """
        self.ctx = ctx

    @property
    def data(self) -> dict[str, list[Any]]:
        """Convenience accessor for data storage."""
        return self.ctx.data

    def validate_row_counts(self) -> tuple[bool, str]:
        """Each core entity table has exactly its configured count."""
        wrong = [
            f"{table}={len(self.ctx.table(table))} (want {target})"
            for table, target in self.ctx.config.target_counts.items()
            if len(self.ctx.table(table)) != target
        ]
        if wrong:
            return False, "Row count mismatch: " + ", ".join(wrong)
        total = sum(len(rows) for rows in self.data.values())
        return True, f"{total:,} rows across {len(self.data)} tables"

    def validate_contiguous_ids(self) -> tuple[bool, str]:
        """Ids within each table are exactly 0..N-1 in generation order."""
        broken = []
        for table, rows in self.data.items():
            if table == "order_promotions":
                continue
            ids = [r.id for r in rows]
            if ids != list(range(len(rows))):
                broken.append(table)
        if broken:
            return False, f"Non-contiguous ids in: {', '.join(broken)}"
        return True, "All ids contiguous from 0"

    def validate_coordinates(self) -> tuple[bool, str]:
        """All coordinates lie inside the configured bounding box."""
        box = self.ctx.config.bounding_box
        outside = []
        for table, lat_attr, lng_attr in COORDINATE_FIELDS:
            for r in self.ctx.table(table):
                if not box.contains(getattr(r, lat_attr), getattr(r, lng_attr)):
                    outside.append(f"{table}#{r.id}")
        if outside:
            return False, f"{len(outside)} points outside bounding box: {_examples(outside)}"
        return True, "All coordinates inside bounding box"

    def validate_customer_dates(self) -> tuple[bool, str]:
        """last_order_date never precedes registration_date."""
        bad = [
            c.id for c in self.ctx.table("customers")
            if c.last_order_date < c.registration_date
        ]
        if bad:
            return False, f"{len(bad)} customers ordered before registering: {_examples(bad)}"
        return True, "All last orders on or after registration"

    def validate_segments(self) -> tuple[bool, str]:
        """customer_segment matches the total_orders thresholds."""
        bad = [
            c.id for c in self.ctx.table("customers")
            if c.customer_segment != customer_segment(c.total_orders)
        ]
        if bad:
            return False, f"{len(bad)} customers with wrong segment: {_examples(bad)}"
        counts = Counter(c.customer_segment for c in self.ctx.table("customers"))
        return True, ", ".join(f"{k}={v}" for k, v in sorted(counts.items()))

    def validate_delivery_consistency(self) -> tuple[bool, str]:
        """Delivery timestamp and ratings present iff delivered."""
        low, high = ORDER_RATING_RANGE
        bad = []
        for o in self.ctx.table("orders"):
            ratings = (o.rating_restaurant, o.rating_driver, o.rating_overall)
            if o.is_delivered:
                ok = (
                    o.delivery_datetime is not None
                    and o.delivery_datetime > o.order_datetime
                    and all(r is not None and low <= r <= high for r in ratings)
                )
            else:
                ok = o.delivery_datetime is None and all(r is None for r in ratings)
            if not ok:
                bad.append(o.id)
        if bad:
            return False, f"{len(bad)} orders with inconsistent delivery fields: {_examples(bad)}"
        statuses = Counter(o.status for o in self.ctx.table("orders"))
        return True, f"{len(statuses)} statuses in use, {statuses.get('delivered', 0)} delivered"

    def validate_earnings(self) -> tuple[bool, str]:
        """Platform fee and earnings are the fixed shares of amount/fee."""
        bad = [
            o.id for o in self.ctx.table("orders")
            if o.platform_fee != share_of(o.total_amount, PLATFORM_FEE_SHARE)
            or o.restaurant_earnings != share_of(o.total_amount, RESTAURANT_EARNINGS_SHARE)
            or o.driver_earnings != share_of(o.delivery_fee, DRIVER_EARNINGS_SHARE)
        ]
        if bad:
            return False, f"{len(bad)} orders with wrong derived fees: {_examples(bad)}"
        return True, "All derived fees match their shares"

    def validate_referential_integrity(self) -> tuple[bool, str]:
        """Every FK points at an id generated by an earlier stage."""
        dangling = []
        for child, attr, parent in FOREIGN_KEYS:
            if child not in self.data:
                continue
            parent_ids = {r.id for r in self.ctx.table(parent)}
            missing = [getattr(r, attr) for r in self.ctx.table(child)
                       if getattr(r, attr) not in parent_ids]
            if missing:
                dangling.append(f"{child}.{attr} ({len(missing)})")
        if dangling:
            return False, f"Dangling foreign keys: {', '.join(dangling)}"
        return True, "All foreign keys resolve"

    def validate_discounts(self) -> tuple[bool, str]:
        """No discount exceeds its order's total; one promotion per order."""
        totals = {o.id: o.total_amount for o in self.ctx.table("orders")}
        links = self.ctx.table("order_promotions")
        over = [
            op.order_id for op in links
            if op.discount_amount < 0 or op.discount_amount > totals.get(op.order_id, 0.0)
        ]
        if over:
            return False, f"{len(over)} discounts exceed order total: {_examples(over)}"
        dupes = [k for k, v in Counter(op.order_id for op in links).items() if v > 1]
        if dupes:
            return False, f"Orders with several promotions: {_examples(dupes)}"
        share = len(links) / len(totals) if totals else 0.0
        return True, f"{len(links)} discounted orders ({share:.1%})"

    def validate_uniqueness(self) -> tuple[bool, str]:
        """Emails are unique per table and promotion codes are unique."""
        problems = []
        for table, attr in (("customers", "email"), ("drivers", "email"), ("promotions", "code")):
            counts = Counter(getattr(r, attr) for r in self.ctx.table(table))
            dupes = [k for k, v in counts.items() if v > 1]
            if dupes:
                problems.append(f"{table}.{attr}: {_examples(dupes)}")
        if problems:
            return False, "Duplicates in " + "; ".join(problems)
        return True, "Emails and codes unique"

    def validate_promotion_windows(self) -> tuple[bool, str]:
        """end_date falls within 30 days on or after start_date."""
        limit = timedelta(days=PROMOTION_MAX_DAYS)
        bad = [
            p.id for p in self.ctx.table("promotions")
            if not p.start_date <= p.end_date <= p.start_date + limit
        ]
        if bad:
            return False, f"{len(bad)} promotions with invalid window: {_examples(bad)}"
        return True, "All promotion windows within 30 days"

    def run_all(self) -> dict[str, tuple[bool, str]]:
        """Run every check, keyed by display name."""
        return {
            "Row counts": self.validate_row_counts(),
            "Contiguous ids": self.validate_contiguous_ids(),
            "Coordinates": self.validate_coordinates(),
            "Customer dates": self.validate_customer_dates(),
            "Segments": self.validate_segments(),
            "Delivery fields": self.validate_delivery_consistency(),
            "Derived fees": self.validate_earnings(),
            "Referential integrity": self.validate_referential_integrity(),
            "Discount cap": self.validate_discounts(),
            "Uniqueness": self.validate_uniqueness(),
            "Promotion windows": self.validate_promotion_windows(),
        }
