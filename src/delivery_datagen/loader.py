"""
Round-trip check of generated SQL files against PostgreSQL.

Applies the schema DDL and then every generated file in import order
inside a single transaction, counts rows per table, and rolls back.
Nothing is persisted: this only proves the files load cleanly.
"""

import os
from pathlib import Path

import psycopg2
from psycopg2.extensions import connection as PgConnection


class VerificationError(Exception):
    """Raised when a file fails to apply; names the file."""

    def __init__(self, filename: str, cause: BaseException | str) -> None:
        self.filename = filename
        self.cause = cause
        super().__init__(f"Applying {filename} failed: {cause}")


def get_connection(
    dsn: str | None = None,
    host: str | None = None,
    port: int | None = None,
    database: str | None = None,
    user: str | None = None,
    password: str | None = None,
) -> PgConnection:
    """
    Get a PostgreSQL connection.

    A DSN wins when given; otherwise keyword arguments fall back to the
    standard PG* environment variables.

    Returns:
        PostgreSQL connection
    """
    if dsn:
        return psycopg2.connect(dsn)
    return psycopg2.connect(
        host=host or os.getenv("PGHOST", "localhost"),
        port=port or int(os.getenv("PGPORT", "5432")),
        database=database or os.getenv("PGDATABASE", "delivery_food_db"),
        user=user or os.getenv("PGUSER", "delivery_user"),
        password=password or os.getenv("PGPASSWORD", ""),
    )


def verify_sql_files(
    conn: PgConnection,
    schema_path: Path,
    output_dir: Path,
    tables: list[str],
) -> dict[str, int]:
    """
    Apply schema + generated files in a rolled-back transaction.

    Args:
        conn: Open connection (its transaction is rolled back on return)
        schema_path: DDL file creating the target tables
        output_dir: Directory holding ``<table>.sql`` files
        tables: Tables in import order

    Returns:
        Row count per table as seen inside the transaction

    Raises:
        VerificationError: Naming the schema or data file that failed
    """
    counts: dict[str, int] = {}
    try:
        with conn.cursor() as cur:
            _execute_file(cur, Path(schema_path))
            for table in tables:
                _execute_file(cur, Path(output_dir) / f"{table}.sql")
                cur.execute(f"SELECT COUNT(*) FROM {table}")
                counts[table] = cur.fetchone()[0]
    finally:
        conn.rollback()
    return counts


def _execute_file(cur, path: Path) -> None:
    try:
        sql = path.read_text(encoding="utf-8")
    except OSError as e:
        raise VerificationError(path.name, e) from e
    if not _has_statements(sql):
        return
    try:
        cur.execute(sql)
    except psycopg2.Error as e:
        raise VerificationError(path.name, str(e).strip()) from e


def _has_statements(sql: str) -> bool:
    """False for files holding only comments and blank lines."""
    return any(
        line.strip() and not line.strip().startswith("--")
        for line in sql.splitlines()
    )
