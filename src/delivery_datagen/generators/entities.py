"""
Stage 1 generators: independent base entities.

Tables generated:
- restaurants (cuisine, location, hours, commission)
- customers (location, registration/last order dates, segment)
- drivers (vehicle, rating, current position, last status update)

Each record is sampled on its own; no correlation between siblings.
"""

from datetime import date

from .base import BaseGenerator
from ..config import BoundingBox
from ..constants import (
    ACTIVE_PROBABILITY,
    CLOSE_HOUR_RANGE,
    CLOSED_DAY_PROBABILITY,
    COMMISSION_RATE_RANGE,
    CUISINES,
    CUSTOMER_ORDER_COUNT_RANGE,
    DRIVER_RATING_RANGE,
    OPEN_HOUR_RANGE,
    RESTAURANT_RATING_RANGE,
    RESTAURANT_SUFFIXES,
    SEGMENT_THRESHOLDS,
    STATUS_UPDATE_LOOKBACK_DAYS,
    VEHICLE_TYPES,
    WEEKDAYS,
)
from ..models import Customer, DayHours, Driver, OperatingHours, Restaurant
from ..sampling import Sampler

COORDINATE_DIGITS = 6


def random_point(sampler: Sampler, box: BoundingBox) -> tuple[float, float]:
    """Uniform (lat, lng) inside the box, 6 decimal places."""
    lat = sampler.uniform(box.min_lat, box.max_lat, ndigits=COORDINATE_DIGITS)
    lng = sampler.uniform(box.min_lng, box.max_lng, ndigits=COORDINATE_DIGITS)
    return lat, lng


def is_active(sampler: Sampler) -> bool:
    return sampler.weighted_choice(
        [True, False], [ACTIVE_PROBABILITY, 1.0 - ACTIVE_PROBABILITY]
    )


def customer_segment(total_orders: int) -> str:
    """Segment label for a lifetime order count (40+ vip, 20+ regular, else new)."""
    for minimum, label in SEGMENT_THRESHOLDS:
        if total_orders >= minimum:
            return label
    return SEGMENT_THRESHOLDS[-1][1]


def random_operating_hours(sampler: Sampler) -> OperatingHours:
    """Per weekday: closed with 10% probability, else a morning-to-evening window."""
    days = []
    for day in WEEKDAYS:
        if sampler.chance(CLOSED_DAY_PROBABILITY):
            days.append(DayHours.closed(day))
        else:
            days.append(
                DayHours(
                    day=day,
                    open_hour=sampler.randint(*OPEN_HOUR_RANGE),
                    close_hour=sampler.randint(*CLOSE_HOUR_RANGE),
                )
            )
    return OperatingHours(days=tuple(days))


class EntityGenerator(BaseGenerator):
    """
    Generate restaurants, customers and drivers.

    These tables have no foreign keys and are generated first.
    """

    STAGE = "entities"
    TABLES = ("restaurants", "customers", "drivers")

    def generate(self) -> None:
        """Generate all stage 1 tables."""
        print("  Stage 1: restaurants, customers, drivers...")
        self.data["restaurants"] = [
            self._restaurant(i) for i in range(self.config.restaurants)
        ]
        self.data["customers"] = [
            self._customer(i) for i in range(self.config.customers)
        ]
        self.data["drivers"] = [self._driver(i) for i in range(self.config.drivers)]
        print(
            f"    Generated: {len(self.data['restaurants'])} restaurants, "
            f"{len(self.data['customers'])} customers, "
            f"{len(self.data['drivers'])} drivers"
        )

    def _random_date(self, start: date | None = None) -> date:
        return self.sampler.date_between(start or self.config.start_date, self.config.end_date)

    def _restaurant(self, restaurant_id: int) -> Restaurant:
        lat, lng = random_point(self.sampler, self.config.bounding_box)
        return Restaurant(
            id=restaurant_id,
            name=f"{self.fake.company()} {self.sampler.choice(RESTAURANT_SUFFIXES)}",
            cuisine_type=self.sampler.choice(CUISINES),
            address=self.fake.street_address(),
            latitude=lat,
            longitude=lng,
            rating=self.sampler.uniform(*RESTAURANT_RATING_RANGE),
            onboarding_date=self._random_date(),
            operating_hours=random_operating_hours(self.sampler),
            commission_rate=self.sampler.uniform(*COMMISSION_RATE_RANGE),
            is_active=is_active(self.sampler),
        )

    def _customer(self, customer_id: int) -> Customer:
        lat, lng = random_point(self.sampler, self.config.bounding_box)
        registered = self._random_date()
        total_orders = self.sampler.randint(*CUSTOMER_ORDER_COUNT_RANGE)
        return Customer(
            id=customer_id,
            name=self.fake.name(),
            email=self.sampler.unique_email(),
            phone=self.fake.phone_number(),
            address=self.fake.street_address(),
            latitude=lat,
            longitude=lng,
            registration_date=registered,
            last_order_date=self._random_date(start=registered),
            total_orders=total_orders,
            customer_segment=customer_segment(total_orders),
        )

    def _driver(self, driver_id: int) -> Driver:
        lat, lng = random_point(self.sampler, self.config.bounding_box)
        return Driver(
            id=driver_id,
            name=self.fake.name(),
            email=self.sampler.unique_email(),
            phone=self.fake.phone_number(),
            vehicle_type=self.sampler.choice(VEHICLE_TYPES),
            joining_date=self._random_date(),
            rating=self.sampler.uniform(*DRIVER_RATING_RANGE),
            is_active=is_active(self.sampler),
            current_latitude=lat,
            current_longitude=lng,
            last_status_update=self.sampler.recent_before(
                self.ctx.reference_time, STATUS_UPDATE_LOOKBACK_DAYS
            ),
        )
