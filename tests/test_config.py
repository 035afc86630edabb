"""
Tests for generation configuration: validation and YAML loading.
"""

from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from delivery_datagen.config import (
    BoundingBox,
    ConfigError,
    GenerationConfig,
    config_from_dict,
    load_config,
)


class TestValidation:
    """Tests for GenerationConfig.validate()."""

    def test_defaults_are_valid(self):
        """Default configuration passes validation."""
        GenerationConfig().validate()

    @pytest.mark.parametrize("field", ["restaurants", "customers", "drivers", "orders", "promotions"])
    def test_zero_count_rejected(self, field):
        """Zero counts fail fast instead of producing empty files."""
        config = GenerationConfig(**{field: 0})
        with pytest.raises(ConfigError, match=field):
            config.validate()

    def test_negative_count_rejected(self):
        with pytest.raises(ConfigError, match="orders"):
            GenerationConfig(orders=-5).validate()

    def test_non_integer_count_rejected(self):
        with pytest.raises(ConfigError, match="integer"):
            GenerationConfig(drivers=True).validate()

    def test_inverted_latitude_rejected(self):
        box = BoundingBox(min_lat=1.4, max_lat=1.3)
        with pytest.raises(ConfigError, match="latitude"):
            GenerationConfig(bounding_box=box).validate()

    def test_inverted_longitude_rejected(self):
        box = BoundingBox(min_lng=104.0, max_lng=103.0)
        with pytest.raises(ConfigError, match="longitude"):
            GenerationConfig(bounding_box=box).validate()

    def test_out_of_range_latitude_rejected(self):
        box = BoundingBox(min_lat=80.0, max_lat=95.0)
        with pytest.raises(ConfigError, match="latitude"):
            GenerationConfig(bounding_box=box).validate()

    def test_inverted_dates_rejected(self):
        config = GenerationConfig(start_date=date(2024, 1, 1), end_date=date(2023, 1, 1))
        with pytest.raises(ConfigError, match="start_date"):
            config.validate()

    def test_single_day_range_allowed(self):
        GenerationConfig(start_date=date(2024, 1, 1), end_date=date(2024, 1, 1)).validate()

    @pytest.mark.parametrize("rate", [-0.1, 1.5, "0.2", None])
    def test_promotion_rate_rejected(self, rate):
        with pytest.raises(ConfigError, match="promotion_rate"):
            GenerationConfig(promotion_rate=rate).validate()

    @pytest.mark.parametrize("seed", ["abc", 2.5, True])
    def test_non_integer_seed_rejected(self, seed):
        with pytest.raises(ConfigError, match="seed"):
            GenerationConfig(seed=seed).validate()

    def test_aware_reference_time_rejected(self):
        aware = datetime(2024, 4, 1, 12, tzinfo=timezone(timedelta(hours=8)))
        with pytest.raises(ConfigError, match="reference_time"):
            GenerationConfig(reference_time=aware).validate()


class TestOverrides:
    """Tests for with_overrides() and config_from_dict()."""

    def test_none_overrides_ignored(self):
        config = GenerationConfig(orders=10)
        assert config.with_overrides(orders=None, seed=None) is config

    def test_overrides_applied(self):
        config = GenerationConfig().with_overrides(orders=7, seed=3)
        assert config.orders == 7
        assert config.seed == 3

    def test_config_is_immutable(self):
        config = GenerationConfig()
        with pytest.raises(AttributeError):
            config.orders = 1

    def test_partial_bounding_box_keeps_other_edges(self):
        config = config_from_dict({"bounding_box": {"max_lat": 1.35}})
        assert config.bounding_box.max_lat == 1.35
        assert config.bounding_box.min_lat == BoundingBox().min_lat

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError, match="num_orders"):
            config_from_dict({"num_orders": 5})

    def test_unknown_bounding_box_key_rejected(self):
        with pytest.raises(ConfigError, match="north"):
            config_from_dict({"bounding_box": {"north": 2.0}})

    def test_bad_date_rejected(self):
        with pytest.raises(ConfigError, match="start_date"):
            config_from_dict({"start_date": "first of january"})

    @pytest.mark.parametrize(
        "raw,key",
        [
            ({"promotion_rate": "lots"}, "promotion_rate"),
            ({"promotion_rate": None}, "promotion_rate"),
            ({"promotion_rate": True}, "promotion_rate"),
            ({"output_dir": None}, "output_dir"),
            ({"output_dir": 42}, "output_dir"),
            ({"seed": "abc"}, "seed"),
            ({"seed": 1.5}, "seed"),
            ({"include_details": "yes please"}, "include_details"),
            ({"reset_sequences": 1}, "reset_sequences"),
            ({"reference_time": "noon"}, "reference_time"),
        ],
    )
    def test_wrongly_typed_value_rejected(self, raw, key):
        """Malformed values fail as ConfigError naming the key."""
        with pytest.raises(ConfigError, match=key):
            config_from_dict(raw)

    def test_numeric_string_rate_coerced(self):
        config = config_from_dict({"promotion_rate": "0.35"})
        assert config.promotion_rate == 0.35
        config.validate()

    def test_null_seed_allowed(self):
        assert config_from_dict({"seed": None}, GenerationConfig(seed=3)).seed is None

    def test_offset_reference_time_rejected(self):
        """Timestamps are written without zone, so an offset would be lost."""
        with pytest.raises(ConfigError, match="UTC offset"):
            config_from_dict({"reference_time": "2024-04-01T12:00:00+08:00"})

    def test_naive_reference_time_parsed(self):
        config = config_from_dict({"reference_time": "2024-04-01T12:00:00"})
        assert config.reference_time == datetime(2024, 4, 1, 12)


class TestLoadConfig:
    """Tests for YAML config files."""

    def test_load_yaml(self, tmp_path):
        """YAML values override defaults, including dates and nested box."""
        path = tmp_path / "datagen.yaml"
        path.write_text(
            "start_date: 2023-02-01\n"
            "end_date: '2023-12-31'\n"
            "orders: 200\n"
            "seed: 11\n"
            "output_dir: staging\n"
            "bounding_box:\n"
            "  min_lat: 40.70\n"
            "  max_lat: 40.80\n"
            "  min_lng: -74.02\n"
            "  max_lng: -73.93\n"
        )
        config = load_config(path)
        config.validate()

        assert config.start_date == date(2023, 2, 1)
        assert config.end_date == date(2023, 12, 31)
        assert config.orders == 200
        assert config.seed == 11
        assert config.output_dir == Path("staging")
        assert config.bounding_box == BoundingBox(40.70, 40.80, -74.02, -73.93)
        assert config.restaurants == GenerationConfig().restaurants

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == GenerationConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("orders: [1, 2\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_example_config_loads(self):
        """The shipped example file stays in sync with the config fields."""
        example = Path(__file__).parent.parent / "datagen.example.yaml"
        config = load_config(example)
        config.validate()
        assert config.orders == 5000
