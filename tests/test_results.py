from datetime import datetime, timedelta, timezone

from perf_core.measure import DataAmount, Duration
from perf_core.results import (
    BaselineVersion,
    DataReporter,
    MeasuredOperation,
    MeasuredOperationList,
    PerformanceResults,
)


def operation(seconds: int, kbytes: int) -> MeasuredOperation:
    return MeasuredOperation(
        execution_time=Duration.seconds(seconds),
        total_memory_used=DataAmount.kbytes(kbytes),
    )


def test_operation_list_statistics() -> None:
    operations = MeasuredOperationList(
        [operation(10, 10), operation(20, 30), operation(30, 20)]
    )

    assert operations.avg_time() == Duration.seconds(20)
    assert operations.min_time() == Duration.seconds(10)
    assert operations.max_time() == Duration.seconds(30)
    assert operations.avg_memory() == DataAmount.kbytes(20)
    assert operations.min_memory() == DataAmount.kbytes(10)
    assert operations.max_memory() == DataAmount.kbytes(30)


def test_empty_operation_list_statistics_are_zero() -> None:
    operations = MeasuredOperationList()

    assert operations.avg_time() == Duration.zero()
    assert operations.max_time() == Duration.millis(0)
    assert operations.avg_memory() == DataAmount.zero()
    assert operations.min_memory() == DataAmount.bytes(0)


def test_measured_operation_defaults() -> None:
    measured = MeasuredOperation()

    assert measured.execution_time == Duration.millis(0)
    assert measured.total_memory_used == DataAmount.bytes(0)
    assert measured.is_successful()
    assert not MeasuredOperation(exception=RuntimeError("boom")).is_successful()


def test_performance_results_normalise_test_time_to_utc() -> None:
    naive = PerformanceResults(test_time=datetime(2026, 1, 1, 12, 0))
    offset = PerformanceResults(
        test_time=datetime(2026, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    )

    assert naive.test_time.tzinfo == timezone.utc
    assert offset.test_time.hour == 12
    assert offset.test_time == naive.test_time


def test_current_is_coerced_to_operation_list() -> None:
    results = PerformanceResults(current=[operation(1, 1)])  # type: ignore[arg-type]

    assert isinstance(results.current, MeasuredOperationList)
    assert results.current.avg_time() == Duration.seconds(1)


def test_baseline_creates_missing_versions_once() -> None:
    results = PerformanceResults(display_name="buildPerf", version_under_test="2.0")

    first = results.baseline("1.9")
    first.results.append(operation(4, 4))
    second = results.baseline("1.9")

    assert first is second
    assert results.baseline_versions == {
        "1.9": BaselineVersion(version="1.9", results=MeasuredOperationList([operation(4, 4)]))
    }


def test_data_reporter_collects_results() -> None:
    class RecordingReporter(DataReporter):
        def __init__(self) -> None:
            self.reported: list[PerformanceResults] = []
            self.closed = False

        def report(self, results: PerformanceResults) -> None:
            self.reported.append(results)

        def close(self) -> None:
            self.closed = True

    reporter = RecordingReporter()
    results = PerformanceResults(display_name="buildPerf")
    reporter.report(results)
    reporter.close()

    assert reporter.reported == [results]
    assert reporter.closed
