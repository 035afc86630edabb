"""
Orchestrates a full generation run.

Stages run in FK dependency order, each consuming identifiers from the
previous ones:

    entities -> orders -> promotions -> order_promotions [-> order_details]

then every table is written to ``<output_dir>/<table>.sql`` in the order the
import step applies them.
"""

import time
from pathlib import Path

from .config import GenerationConfig
from .constants import CORE_IMPORT_ORDER, DETAIL_IMPORT_ORDER
from .generators import (
    BaseGenerator,
    EntityGenerator,
    GenerationError,
    GeneratorContext,
    OrderDetailGenerator,
    OrderGenerator,
    OrderPromotionGenerator,
    PromotionGenerator,
)
from .sql_writer import SqlFileWriter
from .validation import DataValidator


def import_order(config: GenerationConfig) -> list[str]:
    """Tables in the order their files must be applied."""
    if config.include_details:
        return CORE_IMPORT_ORDER + DETAIL_IMPORT_ORDER
    return list(CORE_IMPORT_ORDER)


class FoodDeliveryDataGenerator:
    """
    Generates the food-delivery dataset and writes it as SQL files.

    The configuration is validated up front so a bad config fails before
    any data is generated or any file is touched.
    """

    def __init__(self, config: GenerationConfig | None = None) -> None:
        """
        Initialize generator.

        Args:
            config: Run configuration (defaults if None)

        Raises:
            ConfigError: If the configuration is invalid
        """
        self.config = config or GenerationConfig()
        self.config.validate()
        self.ctx = GeneratorContext.from_config(self.config)

    def stages(self) -> list[BaseGenerator]:
        """Stage generators in dependency order."""
        stages: list[BaseGenerator] = [
            EntityGenerator(self.ctx),
            OrderGenerator(self.ctx),
            PromotionGenerator(self.ctx),
            OrderPromotionGenerator(self.ctx),
        ]
        if self.config.include_details:
            stages.append(OrderDetailGenerator(self.ctx))
        return stages

    def generate_all(self) -> dict[str, int]:
        """
        Run every stage.

        Returns:
            Row count per generated table

        Raises:
            GenerationError: Naming the stage that failed
        """
        print("=" * 60)
        print("Food Delivery - Synthetic Data Generation")
        print("=" * 60)
        print(f"Seed: {self.config.seed if self.config.seed is not None else 'random'}")
        print(f"Date range: {self.config.start_date} to {self.config.end_date}")
        print()

        gen_start = time.time()
        for stage in self.stages():
            self._run_stage(stage)
        gen_elapsed = time.time() - gen_start

        counts = self.ctx.row_counts()
        total_rows = sum(counts.values())
        print()
        print(f"Total rows: {total_rows:,} in {gen_elapsed:.2f}s")
        return counts

    def _run_stage(self, stage: BaseGenerator) -> None:
        start = time.time()
        try:
            stage.generate()
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(stage.STAGE, e) from e
        self.ctx.stage_times[stage.STAGE] = time.time() - start

    def validate(self) -> dict[str, tuple[bool, str]]:
        """
        Run the validation suite and print a PASS/FAIL line per check.

        Returns:
            Dict of check name -> (passed, message)
        """
        print()
        print("=" * 60)
        print("Validation Suite")
        print("=" * 60)
        results = DataValidator(self.ctx).run_all()
        for name, (passed, msg) in results.items():
            status = "PASS" if passed else "FAIL"
            print(f"  [{status}] {name}: {msg}")
        passed_checks = sum(1 for passed, _ in results.values() if passed)
        print("-" * 40)
        print(f"Validation: {passed_checks}/{len(results)} checks passed")
        return results

    def write_sql(self, output_dir: Path | None = None) -> list[Path]:
        """
        Write one SQL file per table in import order.

        Args:
            output_dir: Staging directory (defaults to config.output_dir)

        Returns:
            Paths of the written files, in import order

        Raises:
            OutputWriteError: If the directory or a file cannot be written
        """
        output_dir = Path(output_dir or self.config.output_dir)
        print()
        print(f"Writing SQL to {output_dir}/...")
        write_start = time.time()
        writer = SqlFileWriter(output_dir, reset_sequences=self.config.reset_sequences)
        paths = writer.write_tables(self.ctx.data, import_order(self.config))
        stats = writer.get_stats()
        print(
            f"Done. {stats['total_rows']:,} rows in {stats['files_written']} files "
            f"({stats['total_bytes_written'] / 1024:.1f} KB) in {time.time() - write_start:.2f}s"
        )
        return paths
