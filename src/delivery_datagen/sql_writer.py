"""
SqlFileWriter - renders generated tables as batch INSERT files.

Each table becomes ``<table>.sql`` in the staging directory, holding one
multi-row INSERT with rows in id order:

    INSERT INTO promotions (id, code, discount_type, ...)
    VALUES
    (0, 'X7K2P9QA', 'percentage', ...),
    (1, 'M3NB8Z1C', 'fixed_amount', ...);

Usage:
    writer = SqlFileWriter(Path("results"))
    writer.write_table("restaurants", restaurants)
    print(writer.get_stats())
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from .constants import SERIAL_TABLES, TABLE_COLUMNS


class OutputWriteError(Exception):
    """Raised when the staging directory or a SQL file cannot be written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot write {path}: {cause}")


# =============================================================================
# SQL literals
# =============================================================================

def format_sql_value(val: Any) -> str:
    """
    Render a Python value as a PostgreSQL literal.

    None becomes NULL and booleans become true/false (checked before int,
    which bool subclasses). Dates and timestamps are quoted ISO text with a
    space separator; anything else is quoted text with single quotes doubled.
    """
    if val is None:
        return "NULL"
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, (int, float, Decimal)):
        return str(val)
    if isinstance(val, datetime):
        return f"'{val.isoformat(sep=' ')}'"
    if isinstance(val, date):
        return f"'{val.isoformat()}'"
    return "'" + str(val).replace("'", "''") + "'"


def as_row(record: Any) -> dict[str, Any]:
    """Column dict for a model record (or pass a dict through)."""
    if isinstance(record, dict):
        return record
    return record.as_row()


def render_values(row: dict[str, Any], columns: list[str]) -> str:
    """One ``(v1, v2, ...)`` tuple in column order."""
    return "(" + ", ".join(format_sql_value(row.get(col)) for col in columns) + ")"


def render_insert(table: str, records: Iterable[Any], columns: list[str] | None = None) -> str:
    """
    Render a single multi-row INSERT statement.

    Args:
        table: Target table name
        records: Model records or row dicts, in the order to emit
        columns: Column order (defaults to TABLE_COLUMNS[table])

    Returns:
        SQL text ending in a newline; a comment-only body if there are no rows
    """
    columns = columns or TABLE_COLUMNS[table]
    tuples = [render_values(as_row(r), columns) for r in records]
    if not tuples:
        return f"-- {table}: no rows generated\n"
    return (
        f"INSERT INTO {table} ({', '.join(columns)})\n"
        "VALUES\n"
        + ",\n".join(tuples)
        + ";\n"
    )


def render_sequence_reset(table: str, max_id: int) -> str:
    """Point the table's SERIAL sequence past the generated ids."""
    return f"SELECT setval('{table}_id_seq', {max_id + 1}, false);\n"


class SqlFileWriter:
    """
    Writes one ``<table>.sql`` file per table into a staging directory.

    Attributes:
        output_dir: Staging directory (created on first write)
        reset_sequences: Append a setval() after inserts into SERIAL tables
    """

    def __init__(self, output_dir: Path | str, reset_sequences: bool = False) -> None:
        """
        Initialize writer.

        Args:
            output_dir: Staging directory for the SQL files
            reset_sequences: Whether to emit sequence resets
        """
        self.output_dir = Path(output_dir)
        self.reset_sequences = reset_sequences
        self._row_counts: dict[str, int] = {}
        self._bytes_written: dict[str, int] = {}
        self._dir_ready = False

    def _ensure_dir(self) -> None:
        if self._dir_ready:
            return
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(self.output_dir, e) from e
        self._dir_ready = True

    def path_for(self, table: str) -> Path:
        return self.output_dir / f"{table}.sql"

    def render_table(self, table: str, records: list[Any]) -> str:
        """Full file content for a table."""
        sql = render_insert(table, records)
        if self.reset_sequences and table in SERIAL_TABLES and records:
            max_id = max(as_row(r)["id"] for r in records)
            sql += render_sequence_reset(table, max_id)
        return sql

    def write_table(self, table: str, records: list[Any]) -> Path:
        """
        Render and write a table's file.

        Args:
            table: Table name (must be in TABLE_COLUMNS)
            records: Records in id order

        Returns:
            Path of the written file

        Raises:
            OutputWriteError: If the directory or file cannot be written
        """
        self._ensure_dir()
        path = self.path_for(table)
        content = self.render_table(table, records)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(path, e) from e

        self._row_counts[table] = len(records)
        self._bytes_written[table] = len(content.encode("utf-8"))
        return path

    def write_tables(self, data: dict[str, list[Any]], order: list[str]) -> list[Path]:
        """Write tables sequentially in the given import order."""
        paths = []
        for table in order:
            path = self.write_table(table, data.get(table, []))
            print(f"  Generated {path} ({self._row_counts[table]:,} rows)")
            paths.append(path)
        return paths

    def get_stats(self) -> dict[str, Any]:
        """Return writer statistics."""
        return {
            "output_dir": str(self.output_dir),
            "files_written": len(self._row_counts),
            "row_counts": dict(self._row_counts),
            "total_rows": sum(self._row_counts.values()),
            "total_bytes_written": sum(self._bytes_written.values()),
        }
