"""
SQLite database utilities for the results store.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path


# Decimal columns have TEXT affinity so values keep every digit.
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS testExecution (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  executionTime TIMESTAMP NOT NULL,
  testName VARCHAR NOT NULL,
  targetVersion VARCHAR NOT NULL
);

CREATE TABLE IF NOT EXISTS testOperation (
  testExecution INTEGER NOT NULL,
  version VARCHAR,
  executionTimeMs DECIMAL TEXT NOT NULL,
  heapUsageBytes DECIMAL TEXT NOT NULL,
  FOREIGN KEY (testExecution) REFERENCES testExecution(id)
);
"""

# Fixed-width UTC text so that ORDER BY on the column is chronological.
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def ensure_schema(connection: sqlite3.Connection) -> None:
    """Create both result tables unless they already exist."""
    _ = connection.executescript(SCHEMA_SQL)


def connect(db_path: str | Path) -> sqlite3.Connection:
    """Open an autocommit SQLite connection, creating parent directories."""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(str(path), isolation_level=None)
    connection.row_factory = sqlite3.Row
    try:
        _ = connection.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error:
        connection.close()
        raise
    return connection


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None and value.tzinfo.utcoffset(value) is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(_TIMESTAMP_FORMAT)


def parse_timestamp(value: object) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.strptime(value, _TIMESTAMP_FORMAT)
    else:
        raise ValueError(f"executionTime must be a timestamp string, got {value!r}")
    return parsed.replace(tzinfo=timezone.utc)


def format_decimal(value: Decimal) -> str:
    return format(value, "f")


def parse_decimal(value: object, field: str) -> Decimal:
    if value is None:
        raise ValueError(f"{field} is required")
    if isinstance(value, bool):
        raise ValueError(f"{field} must be numeric")
    if isinstance(value, (int, str, Decimal)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    raise ValueError(f"{field} must be numeric")
