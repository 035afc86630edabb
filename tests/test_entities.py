"""
Tests for stage 1: restaurants, customers and drivers.

Uses a 1000-customer sample so every segment and closed days show up.
"""

import json
from datetime import timedelta

import pytest

from delivery_datagen.constants import (
    CUISINES,
    RESTAURANT_SUFFIXES,
    VEHICLE_TYPES,
    WEEKDAYS,
)
from delivery_datagen.generators import (
    EntityGenerator,
    GeneratorContext,
    customer_segment,
    random_operating_hours,
)
from delivery_datagen.models import DayHours, OperatingHours
from delivery_datagen.sampling import Sampler


class AlwaysClosedSampler(Sampler):
    """Sampler whose every coin flip lands heads."""

    def chance(self, probability: float) -> bool:
        return True


@pytest.fixture
def entity_ctx(sample_config):
    ctx = GeneratorContext.from_config(sample_config.with_overrides(customers=1000))
    EntityGenerator(ctx).generate()
    return ctx


class TestCustomerSegment:
    """Tests for the segment thresholds."""

    @pytest.mark.parametrize(
        "total_orders,expected",
        [
            (1, "new"),
            (19, "new"),
            (20, "regular"),
            (39, "regular"),
            (40, "vip"),
            (50, "vip"),
        ],
    )
    def test_boundaries(self, total_orders, expected):
        assert customer_segment(total_orders) == expected


class TestOperatingHours:
    """Tests for weekly opening hours."""

    def test_json_keys_and_labels(self):
        hours = random_operating_hours(Sampler(seed=1))
        decoded = json.loads(hours.to_json())
        assert list(decoded) == WEEKDAYS
        for label in decoded.values():
            if label != "CLOSED":
                opens, closes = label.split("-")
                assert "07:00" <= opens <= "11:00"
                assert "20:00" <= closes <= "23:00"

    def test_all_days_closed(self):
        """A restaurant may be closed on all seven days."""
        hours = random_operating_hours(AlwaysClosedSampler(seed=1))
        assert hours.open_days == 0
        assert set(json.loads(hours.to_json()).values()) == {"CLOSED"}

    def test_label_format(self):
        assert DayHours("monday", 8, 22).label() == "08:00-22:00"
        assert DayHours.closed("sunday").label() == "CLOSED"

    def test_weekday_order_enforced(self):
        days = tuple(DayHours.closed(d) for d in reversed(WEEKDAYS))
        with pytest.raises(ValueError):
            OperatingHours(days=days)


class TestRestaurants:
    """Tests for generated restaurants."""

    def test_fields(self, entity_ctx):
        box = entity_ctx.config.bounding_box
        restaurants = entity_ctx.table("restaurants")
        assert [r.id for r in restaurants] == list(range(20))
        for r in restaurants:
            assert r.cuisine_type in CUISINES
            assert r.name.split()[-1] in RESTAURANT_SUFFIXES
            assert 3.5 <= r.rating <= 5.0
            assert 15.0 <= r.commission_rate <= 25.0
            assert box.contains(r.latitude, r.longitude)
            assert entity_ctx.config.start_date <= r.onboarding_date <= entity_ctx.config.end_date

    def test_operating_hours_serialized(self, entity_ctx):
        row = entity_ctx.table("restaurants")[0].as_row()
        assert isinstance(row["operating_hours"], str)
        assert list(json.loads(row["operating_hours"])) == WEEKDAYS


class TestCustomers:
    """Tests for generated customers."""

    def test_dates_and_segments(self, entity_ctx):
        config = entity_ctx.config
        for c in entity_ctx.table("customers"):
            assert config.start_date <= c.registration_date <= c.last_order_date <= config.end_date
            assert 1 <= c.total_orders <= 50
            assert c.customer_segment == customer_segment(c.total_orders)

    def test_every_segment_present(self, entity_ctx):
        segments = {c.customer_segment for c in entity_ctx.table("customers")}
        assert segments == {"new", "regular", "vip"}

    def test_unique_emails(self, entity_ctx):
        emails = [c.email for c in entity_ctx.table("customers")]
        assert len(set(emails)) == len(emails)


class TestDrivers:
    """Tests for generated drivers."""

    def test_fields(self, entity_ctx):
        box = entity_ctx.config.bounding_box
        ref = entity_ctx.reference_time
        for d in entity_ctx.table("drivers"):
            assert d.vehicle_type in VEHICLE_TYPES
            assert 3.5 <= d.rating <= 5.0
            assert box.contains(d.current_latitude, d.current_longitude)
            assert ref - timedelta(days=1) <= d.last_status_update <= ref

    def test_emails_distinct_from_customers(self, entity_ctx):
        customers = {c.email for c in entity_ctx.table("customers")}
        drivers = {d.email for d in entity_ctx.table("drivers")}
        assert not customers & drivers

    def test_mostly_active(self, entity_ctx):
        """About 90% of restaurants and drivers are active."""
        flags = [r.is_active for r in entity_ctx.table("restaurants")]
        flags += [d.is_active for d in entity_ctx.table("drivers")]
        assert sum(flags) / len(flags) > 0.7
