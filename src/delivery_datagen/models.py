"""
Record types for generated food-delivery entities.

Records are frozen dataclasses: created once by a generator, never mutated,
and flattened to column dicts by ``as_row()`` for serialization.
"""

import json
from dataclasses import asdict, dataclass
from datetime import date, datetime

from .constants import DELIVERED_STATUS, WEEKDAYS


@dataclass(frozen=True)
class DayHours:
    """Opening window for one weekday; ``open_hour is None`` means closed."""

    day: str
    open_hour: int | None = None
    close_hour: int | None = None

    @classmethod
    def closed(cls, day: str) -> "DayHours":
        return cls(day=day)

    @property
    def is_closed(self) -> bool:
        return self.open_hour is None

    def label(self) -> str:
        """Text form stored in the hours mapping: ``CLOSED`` or ``08:00-22:00``."""
        if self.is_closed:
            return "CLOSED"
        return f"{self.open_hour:02d}:00-{self.close_hour:02d}:00"


@dataclass(frozen=True)
class OperatingHours:
    """Seven DayHours entries, Monday first."""

    days: tuple[DayHours, ...]

    def __post_init__(self) -> None:
        if [d.day for d in self.days] != WEEKDAYS:
            raise ValueError("Operating hours need exactly one entry per weekday, Monday first")

    def to_json(self) -> str:
        """Serialize as a JSON object keyed by weekday."""
        return json.dumps({d.day: d.label() for d in self.days})

    @property
    def open_days(self) -> int:
        return sum(1 for d in self.days if not d.is_closed)


@dataclass(frozen=True)
class Restaurant:
    id: int
    name: str
    cuisine_type: str
    address: str
    latitude: float
    longitude: float
    rating: float
    onboarding_date: date
    operating_hours: OperatingHours
    commission_rate: float
    is_active: bool

    def as_row(self) -> dict:
        row = {k: v for k, v in self.__dict__.items() if k != "operating_hours"}
        row["operating_hours"] = self.operating_hours.to_json()
        return row


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    email: str
    phone: str
    address: str
    latitude: float
    longitude: float
    registration_date: date
    last_order_date: date
    total_orders: int
    customer_segment: str

    def as_row(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Driver:
    id: int
    name: str
    email: str
    phone: str
    vehicle_type: str
    joining_date: date
    rating: float
    is_active: bool
    current_latitude: float
    current_longitude: float
    last_status_update: datetime

    def as_row(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Order:
    id: int
    customer_id: int
    restaurant_id: int
    driver_id: int
    order_datetime: datetime
    delivery_datetime: datetime | None
    status: str
    total_amount: float
    delivery_fee: float
    restaurant_earnings: float
    driver_earnings: float
    platform_fee: float
    payment_method: str
    rating_restaurant: int | None
    rating_driver: int | None
    rating_overall: int | None

    @property
    def is_delivered(self) -> bool:
        return self.status == DELIVERED_STATUS

    def as_row(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Promotion:
    id: int
    code: str
    discount_type: str
    discount_value: int
    start_date: date
    end_date: date
    usage_count: int
    max_usage: int
    min_order_value: int

    def as_row(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OrderPromotion:
    order_id: int
    promotion_id: int
    discount_amount: float

    def as_row(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OrderItem:
    id: int
    order_id: int
    item_name: str
    quantity: int
    unit_price: float
    total_price: float
    special_instructions: str | None

    def as_row(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DeliveryTracking:
    id: int
    order_id: int
    driver_id: int
    status: str
    latitude: float
    longitude: float
    timestamp: datetime

    def as_row(self) -> dict:
        return asdict(self)
