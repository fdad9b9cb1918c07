"""
Performance Core Module

Measurement value types and in-memory result aggregates.

This module provides:
- Duration and DataAmount amounts with unit conversion
- Measured operations and per-version operation lists
- PerformanceResults and TestExecutionHistory aggregates
- The DataReporter interface implemented by result stores
"""

__version__ = "0.1.0"

from .measure import DataAmount, Duration
from .results import (
    BaselineVersion,
    DataReporter,
    MeasuredOperation,
    MeasuredOperationList,
    PerformanceResults,
    TestExecutionHistory,
)

__all__ = [
    "BaselineVersion",
    "DataAmount",
    "DataReporter",
    "Duration",
    "MeasuredOperation",
    "MeasuredOperationList",
    "PerformanceResults",
    "TestExecutionHistory",
]
