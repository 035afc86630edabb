"""
Base classes for stage generators.

This module provides:
- GeneratorContext: Shared state dataclass passed to all stage generators
- BaseGenerator: Abstract base class for stage-specific generators
- GenerationError: Failure of a named generation stage

Design Principles:
- Context owns all state (config, sampler, generated records)
- Generators append new records to context tables and never modify
  records produced by an earlier stage
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from faker import Faker

from ..config import GenerationConfig
from ..sampling import Sampler


class GenerationError(Exception):
    """Raised when a generation stage fails; names the stage."""

    def __init__(self, stage: str, cause: BaseException | str) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Stage '{stage}' failed: {cause}")


@dataclass
class GeneratorContext:
    """
    Shared state for all stage generators.

    Attributes:
        config: Immutable run configuration
        sampler: Source of all randomness
        reference_time: Anchor for "recent" timestamps
        data: Table name -> list of records, in id order
        stage_times: Seconds spent per stage, for the run summary
    """

    config: GenerationConfig
    sampler: Sampler
    reference_time: datetime = field(default_factory=datetime.now)
    data: dict[str, list[Any]] = field(default_factory=dict)
    stage_times: dict[str, float] = field(default_factory=dict, repr=False)

    @classmethod
    def from_config(cls, config: GenerationConfig) -> "GeneratorContext":
        """Build a context with a sampler seeded from ``config.seed``."""
        return cls(
            config=config,
            sampler=Sampler(seed=config.seed),
            reference_time=(config.reference_time or datetime.now()).replace(microsecond=0),
        )

    def table(self, name: str) -> list[Any]:
        """Records for a table, or an empty list if not generated yet."""
        return self.data.get(name, [])

    def row_counts(self) -> dict[str, int]:
        return {name: len(rows) for name, rows in self.data.items()}


class BaseGenerator(ABC):
    """
    Abstract base class for stage generators.

    Subclasses set STAGE (a display name), REQUIRES (tables that must exist
    first) and TABLES (tables they produce), then implement generate().

    Example:
        class PromotionGenerator(BaseGenerator):
            STAGE = "promotions"
            TABLES = ("promotions",)

            def generate(self) -> None:
                self.data["promotions"] = [
                    self._promotion(i) for i in range(self.config.promotions)
                ]
    """

    STAGE: str = ""
    REQUIRES: tuple[str, ...] = ()
    TABLES: tuple[str, ...] = ()

    def __init__(self, ctx: GeneratorContext) -> None:
        """
        Initialize generator with shared context.

        Args:
            ctx: Shared GeneratorContext instance
        """
        self.ctx = ctx

    @abstractmethod
    def generate(self) -> None:
        """Generate this stage's tables and store them in the context."""
        pass

    def check_requirements(self) -> None:
        """
        Ensure upstream tables exist and are non-empty.

        Raises:
            GenerationError: If a required table is missing
        """
        for table in self.REQUIRES:
            if not self.ctx.table(table):
                raise GenerationError(
                    self.STAGE, f"requires '{table}' to be generated first"
                )

    @property
    def config(self) -> GenerationConfig:
        """Convenience accessor for the run configuration."""
        return self.ctx.config

    @property
    def sampler(self) -> Sampler:
        """Convenience accessor for the sampler."""
        return self.ctx.sampler

    @property
    def fake(self) -> Faker:
        """Convenience accessor for the Faker instance."""
        return self.ctx.sampler.fake

    @property
    def data(self) -> dict[str, list[Any]]:
        """Convenience accessor for shared data storage."""
        return self.ctx.data
