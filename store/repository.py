"""
SQLite-backed performance results store.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from types import TracebackType
from typing import TypeAlias, TypeVar, cast

from perf_core.measure import DataAmount, Duration
from perf_core.results import (
    BaselineVersion,
    DataReporter,
    MeasuredOperation,
    PerformanceResults,
    TestExecutionHistory,
)

from .database import (
    connect,
    ensure_schema,
    format_decimal,
    format_timestamp,
    parse_decimal,
    parse_timestamp,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")
OperationRow: TypeAlias = tuple[int, str | None, str, str]


def _require_str(value: object, field: str) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        raise ValueError(f"{field} is required")
    return str(value)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _require_int(value: object, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an int")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value)
    if value is None:
        raise ValueError(f"{field} is required")
    raise ValueError(f"{field} must be an int")


def _operation_rows(
    test_id: int, version: str | None, operations: Iterable[MeasuredOperation]
) -> Iterator[OperationRow]:
    for operation in operations:
        yield (
            test_id,
            version,
            format_decimal(operation.execution_time.to_millis()),
            format_decimal(operation.total_memory_used.to_bytes()),
        )


def _operation_from_row(row: sqlite3.Row) -> MeasuredOperation:
    execution_time_ms = parse_decimal(cast(object, row["executionTimeMs"]), "executionTimeMs")
    heap_usage_bytes = parse_decimal(cast(object, row["heapUsageBytes"]), "heapUsageBytes")
    return MeasuredOperation(
        execution_time=Duration.millis(execution_time_ms),
        total_memory_used=DataAmount.bytes(heap_usage_bytes),
    )


class ResultsStore(DataReporter):
    """A DataReporter that keeps results in a SQLite database file.

    The store lazily opens a single connection on first use and keeps it
    until ``close()``. Every operation makes sure the schema exists first;
    if that fails the connection is dropped so the next call starts over.
    Instances are not safe to share between threads.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path: Path = Path(db_path)
        self._connection: sqlite3.Connection | None = None

    def __enter__(self) -> ResultsStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def report(self, results: PerformanceResults) -> None:
        try:
            self._with_connection(lambda connection: self._insert_results(connection, results))
        except Exception as e:
            raise RuntimeError(f"Could not open results datastore '{self.db_path}'.") from e

    def _insert_results(self, connection: sqlite3.Connection, results: PerformanceResults) -> None:
        cursor = connection.execute(
            "INSERT INTO testExecution (executionTime, testName, targetVersion) VALUES (?, ?, ?)",
            (
                format_timestamp(results.test_time),
                results.display_name,
                results.version_under_test,
            ),
        )
        test_id = _require_int(cursor.lastrowid, "testExecution.id")
        rows = list(_operation_rows(test_id, None, results.current))
        for baseline in results.baseline_versions.values():
            rows.extend(_operation_rows(test_id, baseline.version, baseline.results))
        _ = connection.executemany(
            """
            INSERT INTO testOperation (testExecution, version, executionTimeMs, heapUsageBytes)
            VALUES (?, ?, ?, ?)
            """,
            rows,
        )
        logger.debug(
            f"Stored execution {test_id} of '{results.display_name}' with {len(rows)} operations"
        )

    def get_test_names(self) -> list[str]:
        try:
            return self._with_connection(self._select_test_names)
        except Exception as e:
            raise RuntimeError(
                f"Could not load test history from datastore '{self.db_path}'."
            ) from e

    def _select_test_names(self, connection: sqlite3.Connection) -> list[str]:
        rows = connection.execute(
            "SELECT DISTINCT testName FROM testExecution ORDER BY testName"
        ).fetchall()
        return [_require_str(cast(object, row[0]), "testName") for row in rows]

    def get_test_results(self, test_name: str) -> TestExecutionHistory:
        try:
            return self._with_connection(
                lambda connection: self._select_test_results(connection, test_name)
            )
        except Exception as e:
            raise RuntimeError(f"Could not load results from datastore '{self.db_path}'.") from e

    def _select_test_results(
        self, connection: sqlite3.Connection, test_name: str
    ) -> TestExecutionHistory:
        results: list[PerformanceResults] = []
        all_versions: set[str] = set()
        executions = connection.execute(
            """
            SELECT id, executionTime, targetVersion
            FROM testExecution
            WHERE testName = ?
            ORDER BY executionTime DESC, id DESC
            """,
            (test_name,),
        ).fetchall()
        for execution in executions:
            typed_execution = cast(sqlite3.Row, execution)
            performance_results = PerformanceResults(
                display_name=test_name,
                version_under_test=_require_str(
                    cast(object, typed_execution["targetVersion"]), "targetVersion"
                ),
                test_time=parse_timestamp(cast(object, typed_execution["executionTime"])),
            )
            versions: dict[str, BaselineVersion] = {}
            operations = connection.execute(
                """
                SELECT version, executionTimeMs, heapUsageBytes
                FROM testOperation
                WHERE testExecution = ?
                ORDER BY rowid
                """,
                (_require_int(cast(object, typed_execution["id"]), "id"),),
            ).fetchall()
            for row in operations:
                typed_row = cast(sqlite3.Row, row)
                operation = _operation_from_row(typed_row)
                version = _optional_str(cast(object, typed_row["version"]))
                if version is None:
                    performance_results.current.append(operation)
                else:
                    baseline = versions.get(version)
                    if baseline is None:
                        baseline = BaselineVersion(version=version)
                        versions[version] = baseline
                    baseline.results.append(operation)
            performance_results.baseline_versions = dict(sorted(versions.items()))
            all_versions.update(versions)
            results.append(performance_results)
        return TestExecutionHistory(versions=sorted(all_versions), results=results)

    def close(self) -> None:
        if self._connection is None:
            return
        try:
            self._connection.close()
        except Exception as e:
            raise RuntimeError(f"Could not close datastore '{self.db_path}'.") from e
        finally:
            self._connection = None
            logger.debug(f"Closed results datastore {self.db_path}")

    def _with_connection(self, action: Callable[[sqlite3.Connection], T]) -> T:
        if self._connection is None:
            self._connection = connect(self.db_path)
            logger.debug(f"Opened results datastore {self.db_path}")
        connection = self._connection
        try:
            ensure_schema(connection)
        except Exception:
            logger.warning(
                f"Could not create schema in {self.db_path}; discarding connection"
            )
            self._connection = None
            with contextlib.suppress(sqlite3.Error):
                connection.close()
            raise
        return action(connection)
