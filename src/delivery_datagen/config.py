"""
Generation configuration.

GenerationConfig is an immutable value handed to every generator. Defaults
reproduce the reference dataset (Singapore bounding box, Jan 2023 - Mar 2024).
A YAML file can override any field:

    restaurants: 10
    orders: 200
    seed: 7
    bounding_box:
      min_lat: 1.29
      max_lat: 1.39
      min_lng: 103.70
      max_lng: 103.90
"""

from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

DEFAULT_OUTPUT_DIR = Path("results")


class ConfigError(Exception):
    """Raised when a configuration is malformed or cannot be loaded."""

    pass


@dataclass(frozen=True)
class BoundingBox:
    """Latitude/longitude rectangle that all generated coordinates fall in."""

    min_lat: float = 1.290270
    max_lat: float = 1.390270
    min_lng: float = 103.704566
    max_lng: float = 103.904566

    def contains(self, lat: float, lng: float) -> bool:
        """True if the point lies inside the box (edges included)."""
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


@dataclass(frozen=True)
class GenerationConfig:
    """Configuration for a single generation run."""

    # Global date range for onboarding, registration, orders and promotions
    start_date: date = date(2023, 1, 1)
    end_date: date = date(2024, 3, 31)

    # Target row counts
    restaurants: int = 50
    customers: int = 1000
    drivers: int = 100
    orders: int = 5000
    promotions: int = 20

    bounding_box: BoundingBox = field(default_factory=BoundingBox)

    # Fraction of orders that receive a promotion
    promotion_rate: float = 0.2

    output_dir: Path = DEFAULT_OUTPUT_DIR

    # None means a fresh, differently-randomized dataset on every run
    seed: int | None = None

    # Anchor for "recent" timestamps (driver status updates); None means now
    reference_time: datetime | None = None

    # Also emit order_items.sql and delivery_tracking.sql
    include_details: bool = False

    # Append setval() after each insert into a SERIAL-keyed table
    reset_sequences: bool = False

    def validate(self) -> None:
        """
        Fail fast on configurations that would produce empty or invalid output.

        Raises:
            ConfigError: Describing the first problem found
        """
        for name in ("restaurants", "customers", "drivers", "orders", "promotions"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")

        if self.start_date > self.end_date:
            raise ConfigError(
                f"start_date {self.start_date} is after end_date {self.end_date}"
            )

        box = self.bounding_box
        if not -90.0 <= box.min_lat < box.max_lat <= 90.0:
            raise ConfigError(
                f"Invalid latitude range [{box.min_lat}, {box.max_lat}]"
            )
        if not -180.0 <= box.min_lng < box.max_lng <= 180.0:
            raise ConfigError(
                f"Invalid longitude range [{box.min_lng}, {box.max_lng}]"
            )

        rate = self.promotion_rate
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            raise ConfigError(f"promotion_rate must be a number, got {rate!r}")
        if not 0.0 <= rate <= 1.0:
            raise ConfigError(f"promotion_rate must be within [0, 1], got {rate}")

        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")

        if self.reference_time is not None and self.reference_time.tzinfo is not None:
            raise ConfigError(
                f"reference_time must not carry a UTC offset, got {self.reference_time}"
            )

    def with_overrides(self, **overrides: Any) -> "GenerationConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    @property
    def target_counts(self) -> dict[str, int]:
        """Expected row count per core entity table (associations excluded)."""
        return {
            "restaurants": self.restaurants,
            "customers": self.customers,
            "drivers": self.drivers,
            "orders": self.orders,
            "promotions": self.promotions,
        }


def _parse_date(key: str, value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ConfigError(f"{key}: expected an ISO date, got {value!r}") from e


def _parse_datetime(key: str, value: Any) -> datetime:
    if not isinstance(value, datetime):
        try:
            value = datetime.fromisoformat(str(value))
        except ValueError as e:
            raise ConfigError(f"{key}: expected an ISO timestamp, got {value!r}") from e
    if value.tzinfo is not None:
        raise ConfigError(f"{key}: expected a timestamp without UTC offset, got {value}")
    return value


def _parse_rate(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{key}: expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key}: expected a number, got {value!r}") from e


def _parse_seed(key: str, value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key}: expected an integer or null, got {value!r}")
    return value


def _parse_path(key: str, value: Any) -> Path:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key}: expected a directory path, got {value!r}")
    return Path(value)


def _parse_switch(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key}: expected true or false, got {value!r}")
    return value


def config_from_dict(raw: dict[str, Any], base: GenerationConfig | None = None) -> GenerationConfig:
    """
    Build a config from a plain mapping, layered over ``base`` (or defaults).

    Args:
        raw: Mapping of field name to value, as loaded from YAML
        base: Config to override (defaults if None)

    Returns:
        New GenerationConfig

    Raises:
        ConfigError: On unknown keys or unparseable values
    """
    base = base or GenerationConfig()
    known = {f.name for f in fields(GenerationConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        if key in ("start_date", "end_date"):
            values[key] = _parse_date(key, value)
        elif key == "reference_time" and value is not None:
            values[key] = _parse_datetime(key, value)
        elif key == "output_dir":
            values[key] = _parse_path(key, value)
        elif key == "promotion_rate":
            values[key] = _parse_rate(key, value)
        elif key == "seed":
            values[key] = _parse_seed(key, value)
        elif key in ("include_details", "reset_sequences"):
            values[key] = _parse_switch(key, value)
        elif key == "bounding_box":
            if not isinstance(value, dict):
                raise ConfigError("bounding_box must be a mapping")
            box_keys = {f.name for f in fields(BoundingBox)}
            bad = sorted(set(value) - box_keys)
            if bad:
                raise ConfigError(f"Unknown bounding_box keys: {', '.join(bad)}")
            try:
                values[key] = replace(
                    base.bounding_box, **{k: float(v) for k, v in value.items()}
                )
            except (TypeError, ValueError) as e:
                raise ConfigError(f"bounding_box: {e}") from e
        else:
            values[key] = value

    return replace(base, **values)


def load_config(path: Path | str, base: GenerationConfig | None = None) -> GenerationConfig:
    """
    Load a YAML configuration file.

    Args:
        path: YAML file path
        base: Config whose values the file overrides

    Returns:
        GenerationConfig (not yet validated)

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return config_from_dict(raw, base)
