"""
Sampler - single source of randomness for all generators.

Wraps a NumPy Generator (numbers, dates, choices) and a Faker instance
(names, addresses, emails). Seeding both from one seed makes a run
reproducible; leaving the seed unset gives a fresh dataset every time.

Usage:
    sampler = Sampler(seed=42)
    lat = sampler.uniform(1.29, 1.39, ndigits=6)
    active = sampler.weighted_choice([True, False], [0.9, 0.1])
    joined = sampler.date_between(date(2023, 1, 1), date(2024, 3, 31))
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import TypeVar

import numpy as np
from faker import Faker

T = TypeVar("T")

SECONDS_PER_DAY = 24 * 60 * 60


class Sampler:
    """
    Distribution helpers over a NumPy Generator and a Faker instance.

    Attributes:
        seed: Seed used for both sources, or None for OS entropy
        rng: NumPy random generator
        fake: Faker instance
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        fake: Faker | None = None,
    ) -> None:
        """
        Initialize sampler.

        Args:
            seed: Seed for both sources (ignored for sources passed in)
            rng: Pre-built NumPy generator to use instead of seeding one
            fake: Pre-built Faker instance to use instead of creating one
        """
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        if fake is None:
            fake = Faker()
            if seed is not None:
                fake.seed_instance(seed)
        self.fake = fake

    # =========================================================================
    # Numbers
    # =========================================================================

    def uniform(self, low: float, high: float, ndigits: int = 2) -> float:
        """Uniform float in [low, high], rounded to ``ndigits`` decimals."""
        value = round(float(self.rng.uniform(low, high)), ndigits)
        # Rounding can step just outside the interval at its edges
        return min(max(value, low), high)

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high] (both inclusive)."""
        return int(self.rng.integers(low, high + 1))

    def chance(self, probability: float) -> bool:
        """Bernoulli draw: True with the given probability."""
        return bool(self.rng.random() < probability)

    # =========================================================================
    # Discrete choice
    # =========================================================================

    def choice(self, options: Sequence[T]) -> T:
        """Uniformly pick one element."""
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        return options[int(self.rng.integers(0, len(options)))]

    def weighted_choice(self, options: Sequence[T], weights: Sequence[float]) -> T:
        """
        Pick one element with probability proportional to its weight.

        Args:
            options: Candidate values
            weights: Non-negative weights, same length as options

        Returns:
            Selected element
        """
        if len(options) != len(weights):
            raise ValueError(
                f"{len(options)} options but {len(weights)} weights"
            )
        probs = np.asarray(weights, dtype=float)
        total = probs.sum()
        if total <= 0:
            raise ValueError("Weights must sum to a positive value")
        index = self.rng.choice(len(options), p=probs / total)
        return options[int(index)]

    # =========================================================================
    # Dates and timestamps
    # =========================================================================

    def date_between(self, start: date, end: date) -> date:
        """Uniform calendar date in [start, end]."""
        span = (end - start).days
        if span < 0:
            raise ValueError(f"start {start} is after end {end}")
        return start + timedelta(days=self.randint(0, span))

    def datetime_between(self, start: datetime, end: datetime) -> datetime:
        """Uniform timestamp in [start, end], whole seconds."""
        span = int((end - start).total_seconds())
        if span < 0:
            raise ValueError(f"start {start} is after end {end}")
        return start + timedelta(seconds=self.randint(0, span))

    def soon_after(self, ref: datetime, hours: float) -> datetime:
        """Timestamp strictly after ``ref`` and at most ``hours`` later."""
        horizon = max(int(hours * 3600), 1)
        return ref + timedelta(seconds=self.randint(1, horizon))

    def recent_before(self, ref: datetime, days: float) -> datetime:
        """Timestamp within the ``days`` leading up to ``ref``."""
        lookback = int(days * SECONDS_PER_DAY)
        return ref - timedelta(seconds=self.randint(0, lookback))

    # =========================================================================
    # Text
    # =========================================================================

    def unique_email(self) -> str:
        """Email address never returned before by this sampler."""
        return self.fake.unique.email()

    def unique_code(self, length: int, alphabet: str) -> str:
        """Random code over ``alphabet``, never returned before by this sampler."""
        return self.fake.unique.lexify("?" * length, letters=alphabet)
