"""YAML configuration for the results store."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from perf_core.schemas import StoreConfig

from .repository import ResultsStore


logger = logging.getLogger(__name__)


def load_config(yaml_path: str | Path) -> StoreConfig:
    """Read a StoreConfig from YAML; an empty file yields the defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the YAML content is not a valid StoreConfig
    """
    yaml_path = Path(yaml_path)
    data = yaml.safe_load(yaml_path.read_text(encoding="utf-8")) or {}
    try:
        config = StoreConfig.from_dict(data)
    except ValidationError as e:
        raise ValueError(f"Invalid store configuration in {yaml_path}: {e}") from e
    logger.debug(f"Loaded store configuration from {yaml_path}")
    return config


def save_config(config: StoreConfig, yaml_path: str | Path) -> None:
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    yaml_path.write_text(yaml.safe_dump(config.to_dict(), sort_keys=False), encoding="utf-8")


def open_store(config: StoreConfig) -> ResultsStore:
    """Create a ResultsStore for the configured datastore file."""
    return ResultsStore(config.db_path)
