"""In-memory performance result aggregates and the reporter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TypeVar

from .measure import Amount, DataAmount, Duration


TAmount = TypeVar("TAmount", bound=Amount)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class MeasuredOperation:
    """A single measured (non warm-up) run of a test."""

    execution_time: Duration = field(default_factory=Duration.zero)
    total_memory_used: DataAmount = field(default_factory=DataAmount.zero)
    exception: BaseException | None = None

    def is_successful(self) -> bool:
        return self.exception is None


class MeasuredOperationList(list[MeasuredOperation]):
    """Ordered operations with summary statistics over time and memory."""

    def _collect(
        self,
        getter: Callable[[MeasuredOperation], TAmount],
        zero: TAmount,
        reducer: Callable[[Iterable[TAmount]], TAmount],
    ) -> TAmount:
        if not self:
            return zero
        return reducer(getter(operation) for operation in self)

    def avg_time(self) -> Duration:
        if not self:
            return Duration.zero()
        total = sum((operation.execution_time for operation in self), Duration.zero())
        return total / len(self)

    def min_time(self) -> Duration:
        return self._collect(lambda op: op.execution_time, Duration.zero(), min)

    def max_time(self) -> Duration:
        return self._collect(lambda op: op.execution_time, Duration.zero(), max)

    def avg_memory(self) -> DataAmount:
        if not self:
            return DataAmount.zero()
        total = sum((operation.total_memory_used for operation in self), DataAmount.zero())
        return total / len(self)

    def min_memory(self) -> DataAmount:
        return self._collect(lambda op: op.total_memory_used, DataAmount.zero(), min)

    def max_memory(self) -> DataAmount:
        return self._collect(lambda op: op.total_memory_used, DataAmount.zero(), max)


@dataclass
class BaselineVersion:
    version: str
    results: MeasuredOperationList = field(default_factory=MeasuredOperationList)


@dataclass
class PerformanceResults:
    """Results of one test execution: the current build plus its baselines.

    ``baseline_versions`` maps each baseline version label to the
    operations measured against that version.
    """

    display_name: str = ""
    version_under_test: str = ""
    test_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    current: MeasuredOperationList = field(default_factory=MeasuredOperationList)
    baseline_versions: dict[str, BaselineVersion] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.test_time = ensure_utc(self.test_time)
        if not isinstance(self.current, MeasuredOperationList):
            self.current = MeasuredOperationList(self.current)

    def baseline(self, version: str) -> BaselineVersion:
        """Return the baseline for ``version``, adding an empty one if absent."""
        baseline = self.baseline_versions.get(version)
        if baseline is None:
            baseline = BaselineVersion(version=version)
            self.baseline_versions[version] = baseline
        return baseline


@dataclass
class TestExecutionHistory:
    """All recorded executions of one test, newest first."""

    versions: list[str]
    results: list[PerformanceResults]

    __test__ = False


class DataReporter(ABC):
    """Receives the results of each performance test execution."""

    @abstractmethod
    def report(self, results: PerformanceResults) -> None:
        """Record the results of one test execution."""

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by the reporter."""
