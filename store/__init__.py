"""
Store Module

Performance results storage and persistence layer.

This module provides:
- SQLite-backed storage for test executions and measured operations
- History queries grouped by test name and baseline version
- YAML configuration for the datastore location
"""

__version__ = "0.1.0"

from .config import load_config, open_store, save_config
from .repository import ResultsStore

__all__ = [
    "ResultsStore",
    "load_config",
    "open_store",
    "save_config",
]
