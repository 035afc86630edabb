"""
Pytest fixtures for delivery-datagen tests.

Provides:
- Seeded configurations (a tiny scenario and a larger sample)
- A fully generated context for invariant checks
- An order factory for hand-crafted edge cases
"""

from datetime import datetime

import pytest

from delivery_datagen.config import GenerationConfig
from delivery_datagen.generators import (
    EntityGenerator,
    GeneratorContext,
    OrderDetailGenerator,
    OrderGenerator,
    OrderPromotionGenerator,
    PromotionGenerator,
)
from delivery_datagen.models import Order

REFERENCE_TIME = datetime(2024, 4, 1, 12, 0, 0)


@pytest.fixture
def small_config(tmp_path) -> GenerationConfig:
    """3 restaurants, 5 customers, 4 drivers, 10 orders, 2 promotions."""
    return GenerationConfig(
        restaurants=3,
        customers=5,
        drivers=4,
        orders=10,
        promotions=2,
        seed=42,
        output_dir=tmp_path / "results",
        reference_time=REFERENCE_TIME,
    )


@pytest.fixture
def sample_config(tmp_path) -> GenerationConfig:
    """Large enough for every status, segment and discount type to appear."""
    return GenerationConfig(
        restaurants=20,
        customers=200,
        drivers=30,
        orders=1000,
        promotions=10,
        seed=7,
        output_dir=tmp_path / "results",
        reference_time=REFERENCE_TIME,
        include_details=True,
    )


@pytest.fixture
def sample_ctx(sample_config) -> GeneratorContext:
    """Context with every stage (details included) already generated."""
    ctx = GeneratorContext.from_config(sample_config)
    for stage in (
        EntityGenerator,
        OrderGenerator,
        PromotionGenerator,
        OrderPromotionGenerator,
        OrderDetailGenerator,
    ):
        stage(ctx).generate()
    return ctx


@pytest.fixture
def make_order():
    """Factory for an undelivered order with sensible defaults."""
    return _build_order


def _build_order(order_id: int = 0, total_amount: float = 30.0, **overrides) -> Order:
    fields = {
        "id": order_id,
        "customer_id": 0,
        "restaurant_id": 0,
        "driver_id": 0,
        "order_datetime": datetime(2023, 6, 1, 12, 0, 0),
        "delivery_datetime": None,
        "status": "placed",
        "total_amount": total_amount,
        "delivery_fee": 5.0,
        "restaurant_earnings": round(total_amount * 0.70, 2),
        "driver_earnings": 4.0,
        "platform_fee": round(total_amount * 0.15, 2),
        "payment_method": "Cash",
        "rating_restaurant": None,
        "rating_driver": None,
        "rating_overall": None,
    }
    fields.update(overrides)
    return Order(**fields)
