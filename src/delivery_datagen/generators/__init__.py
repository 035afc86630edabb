"""
Generators Package - stage generators for food-delivery data.

Base Classes:
- GeneratorContext: Shared state dataclass passed to all generators
- BaseGenerator: Abstract base class for stage generators
- GenerationError: Failure of a named stage

Stage Generators (run in this order):
- EntityGenerator: restaurants, customers, drivers
- OrderGenerator: orders
- PromotionGenerator: promotions
- OrderPromotionGenerator: order_promotions
- OrderDetailGenerator: order_items, delivery_tracking (optional)
"""

from .base import BaseGenerator, GenerationError, GeneratorContext
from .details import OrderDetailGenerator
from .entities import EntityGenerator, customer_segment, random_operating_hours, random_point
from .orders import OrderGenerator, derive_earnings, share_of
from .promotions import OrderPromotionGenerator, PromotionGenerator, compute_discount

__all__ = [
    # Base classes
    "GeneratorContext",
    "BaseGenerator",
    "GenerationError",
    # Stages
    "EntityGenerator",
    "OrderGenerator",
    "PromotionGenerator",
    "OrderPromotionGenerator",
    "OrderDetailGenerator",
    # Pure helpers
    "customer_segment",
    "random_operating_hours",
    "random_point",
    "derive_earnings",
    "share_of",
    "compute_discount",
]
