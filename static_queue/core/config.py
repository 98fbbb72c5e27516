"""
Configuration loader for static-queue.

This module provides Pydantic models that validate queue and logging
settings, and a loader function that merges a YAML configuration file with
environment variables.

Design Principles:
- Strict Schema: all settings are Pydantic models, so a bad capacity or an
  unknown dtype is rejected before any queue is built.
- Environment Overrides: any setting can be overridden by an environment
  variable following the nested structure, e.g. `queue.capacity` is
  overridden by `STATIC_QUEUE_QUEUE__CAPACITY`.
- Clear Errors: Pydantic's `ValidationError` is wrapped in `ConfigError`
  together with a per-field breakdown in the log.
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from static_queue.core.ring_queue import ContainsRingQueue, RingQueue

ENV_PREFIX = "STATIC_QUEUE"

# --- Custom Exceptions ---

class ConfigError(Exception):
    """Custom exception for configuration-related errors."""
    pass

# --- Pydantic Models for Configuration Sections ---

class QueueSettings(BaseModel):
    """Shape of the queue to build."""
    capacity: int = Field(..., gt=0)
    # Mirrors the original SQUEUE_ENABLE_CONTAINS build switch
    enable_contains: bool = False
    dtype: Optional[str] = None

    @field_validator('dtype')
    def dtype_must_be_known_to_numpy(cls, v):
        if v is None:
            return v
        try:
            np.dtype(v)
        except TypeError:
            raise PydanticCustomError(
                "dtype_invalid",
                "'{dtype}' is not a valid numpy dtype",
                {"dtype": v},
            )
        return v


class LoggingSettings(BaseModel):
    """Loguru sink settings."""
    level: str = "INFO"
    file: Optional[str] = None
    rotation: str = "10 MB"

    @field_validator('level')
    def level_must_be_known(cls, v):
        try:
            logger.level(v.upper())
        except ValueError:
            raise PydanticCustomError(
                "log_level_invalid",
                "Unknown log level '{level}'",
                {"level": v},
            )
        return v.upper()


class Settings(BaseModel):
    """Root settings object."""
    queue: QueueSettings
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

# --- Helper Functions ---

def _load_config_from_yaml(path: Path) -> Dict[str, Any]:
    """Loads the YAML configuration file."""
    if not path.is_file():
        raise ConfigError(f"Configuration file not found at: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML file at {path}: {e}") from e

def _get_env_overrides(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    """
    Parses environment variables and converts them into a nested dict.
    e.g., STATIC_QUEUE_QUEUE__CAPACITY=8 becomes {'queue': {'capacity': 8}}
    """
    overrides: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix + "_"):
            continue
        parts = key.removeprefix(prefix).strip("_").lower().split("__")

        # JSON for lists, dicts, booleans, numbers; everything else stays a string
        if (value.startswith('[') and value.endswith(']')) or \
           (value.startswith('{') and value.endswith('}')) or \
           value.lower() in ['true', 'false', 'null'] or \
           value.replace('.', '', 1).isdigit():
            try:
                parsed_value = json.loads(value.lower() if value.lower() in ['true', 'false', 'null'] else value)
            except json.JSONDecodeError:
                parsed_value = value
        else:
            parsed_value = value

        d = overrides
        for part in parts[:-1]:
            d = d.setdefault(part, {})
            if not isinstance(d, dict):
                raise ConfigError(f"Environment variable {key} conflicts with a scalar override of '{part}'")
        if isinstance(d.get(parts[-1]), dict):
            raise ConfigError(f"Environment variable {key} conflicts with nested overrides of '{parts[-1]}'")
        d[parts[-1]] = parsed_value
    return overrides

def _merge_configs(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merges the override dict into the base dict.
    Overwrites values, dictionaries, and lists.
    """
    for key, value in overrides.items():
        if isinstance(value, dict) and key in base and isinstance(base[key], dict):
            base[key] = _merge_configs(base[key], value)
        else:
            base[key] = value
    return base

# --- Public API ---

def load_settings(path: str = "settings.yaml") -> Settings:
    """
    Loads, validates, and returns the settings.

    Steps:
    1. Load the base configuration from the YAML file.
    2. Collect environment overrides prefixed with "STATIC_QUEUE_".
    3. Merge the overrides into the base configuration.
    4. Validate the result against the `Settings` model.

    Raises:
        ConfigError: if the file is missing, empty or unparsable, or if
                     validation fails.
    """
    logger.info(f"Loading settings from '{path}'...")

    yaml_config = _load_config_from_yaml(Path(path))
    if not yaml_config:
        raise ConfigError(f"YAML file '{path}' is empty or invalid.")
    if not isinstance(yaml_config, dict):
        raise ConfigError(f"YAML file '{path}' must contain a mapping at the top level.")

    final_config = _merge_configs(yaml_config, _get_env_overrides())

    try:
        settings = Settings.model_validate(final_config)
        logger.success("Settings loaded and validated successfully.")
        return settings
    except ValidationError as e:
        error_details = e.errors()
        error_msg = f"Configuration validation failed with {len(error_details)} error(s):\n"
        for error in error_details:
            loc = " -> ".join(map(str, error['loc'])) if error['loc'] else "root"
            error_msg += f"  - Location: {loc}\n    Message: {error['msg']}\n"

        logger.error(error_msg)
        raise ConfigError("Failed to validate settings.") from e


def make_queue(settings: Union[Settings, QueueSettings]) -> RingQueue:
    """Build the queue described by `settings`.

    A ContainsRingQueue is returned only when `enable_contains` is set;
    otherwise the plain RingQueue has no contains() at all.
    """
    qs = settings.queue if isinstance(settings, Settings) else settings
    if qs.enable_contains:
        return ContainsRingQueue(qs.capacity, dtype=qs.dtype)
    return RingQueue(qs.capacity, dtype=qs.dtype)
