"""
Command-line interface for the food-delivery data generator.

Run ``delivery-datagen --help`` for usage.
"""

import argparse
import sys
from pathlib import Path

import psycopg2

from .config import ConfigError, GenerationConfig, load_config
from .generators import GenerationError
from .loader import VerificationError, get_connection, verify_sql_files
from .pipeline import FoodDeliveryDataGenerator, import_order
from .sql_writer import OutputWriteError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic food-delivery data as SQL INSERT files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default dataset (50 restaurants, 1000 customers, 100 drivers, 5000 orders)
  delivery-datagen

  # Small reproducible dataset
  delivery-datagen --restaurants 3 --customers 5 --drivers 4 --orders 10 --promotions 2 --seed 7

  # Settings from YAML, with order items and tracking pings
  delivery-datagen --config datagen.yaml --with-details

  # Check the files load against a schema (rolled back afterwards)
  delivery-datagen --verify-db --schema database-schema.sql --dsn postgresql://localhost/delivery
""",
    )

    parser.add_argument("--config", type=Path, help="YAML file overriding default settings")
    parser.add_argument(
        "--output",
        type=Path,
        help=f"Staging directory for SQL files (default: {GenerationConfig.output_dir})",
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible dataset")

    counts = parser.add_argument_group("row counts")
    for name in ("restaurants", "customers", "drivers", "orders", "promotions"):
        counts.add_argument(f"--{name}", type=int, metavar="N", help=f"Number of {name}")

    parser.add_argument(
        "--with-details",
        action="store_true",
        help="Also generate order_items.sql and delivery_tracking.sql",
    )
    parser.add_argument(
        "--reset-sequences",
        action="store_true",
        help="Append setval() so SERIAL sequences continue after generated ids",
    )
    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Skip validation checks after generation",
    )

    db = parser.add_argument_group("database check")
    db.add_argument(
        "--verify-db",
        action="store_true",
        help="Apply schema + files in a rolled-back transaction to prove they load",
    )
    db.add_argument("--schema", type=Path, help="Schema DDL file (required with --verify-db)")
    db.add_argument("--dsn", help="PostgreSQL DSN (default: PG* environment variables)")

    args = parser.parse_args(argv)
    if args.verify_db and args.schema is None:
        parser.error("--verify-db requires --schema")
    return args


def build_config(args: argparse.Namespace) -> GenerationConfig:
    """Defaults, then the YAML file, then command line flags."""
    config = load_config(args.config) if args.config else GenerationConfig()
    return config.with_overrides(
        restaurants=args.restaurants,
        customers=args.customers,
        drivers=args.drivers,
        orders=args.orders,
        promotions=args.promotions,
        output_dir=args.output,
        seed=args.seed,
        include_details=True if args.with_details else None,
        reset_sequences=True if args.reset_sequences else None,
    )


def verify(config: GenerationConfig, schema: Path, dsn: str | None) -> None:
    """Run the database round-trip check and print per-table counts."""
    print()
    print("Verifying files against PostgreSQL (rolled back)...")
    conn = get_connection(dsn)
    try:
        counts = verify_sql_files(conn, schema, config.output_dir, import_order(config))
    finally:
        conn.close()
    for table, count in counts.items():
        print(f"  {table:20s} {count:>8,} rows loaded")


def main(argv: list[str] | None = None) -> int:
    """
    Generate data with CLI interface.

    Returns:
        0 on success, 1 on error or validation failure
    """
    args = parse_args(argv)

    try:
        config = build_config(args)
        generator = FoodDeliveryDataGenerator(config)
        generator.generate_all()

        all_passed = True
        if not args.skip_validation:
            results = generator.validate()
            all_passed = all(passed for passed, _ in results.values())
        else:
            print("\nValidation skipped.")

        generator.write_sql()

        if args.verify_db:
            verify(generator.config, args.schema, args.dsn)
    except ConfigError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1
    except (GenerationError, OutputWriteError, VerificationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except psycopg2.Error as e:
        print(f"Error: database check failed: {e}", file=sys.stderr)
        return 1

    if all_passed:
        print("\nSuccess!")
        return 0
    print("\nValidation failed. Review errors above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
