"""
Delivery Datagen - synthetic food-delivery data as SQL INSERT files.

Generates restaurants, customers, drivers, orders, promotions and
order-promotion links with referentially valid ids and realistic
distributions, then writes one ``<table>.sql`` file per table for loading
into PostgreSQL.
"""

__version__ = "0.1.0"

from .config import BoundingBox, ConfigError, GenerationConfig, load_config
from .generators import GenerationError, GeneratorContext
from .pipeline import FoodDeliveryDataGenerator, import_order
from .sampling import Sampler
from .sql_writer import OutputWriteError, SqlFileWriter, render_insert
from .validation import DataValidator

__all__ = [
    "BoundingBox",
    "ConfigError",
    "GenerationConfig",
    "load_config",
    "GenerationError",
    "GeneratorContext",
    "FoodDeliveryDataGenerator",
    "import_order",
    "Sampler",
    "OutputWriteError",
    "SqlFileWriter",
    "render_insert",
    "DataValidator",
]
