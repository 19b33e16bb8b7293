"""
taskcore Configuration — Load and validate taskcore.yaml at startup.

Usage:
    from taskcore.engine.config import load_config, get_config
"""

from __future__ import annotations

from datetime import timezone as dt_timezone
from datetime import tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from taskcore.engine.errors import TaskConfigError

CONFIG_FILENAME = "taskcore.yaml"


# ---------------------------------------------------------------------------
# Pydantic models for taskcore.yaml
# ---------------------------------------------------------------------------

class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class TasksConfig(BaseModel):
    # Placeholder owner until an identity provider is wired in.
    default_owner_id: int = 1
    # Zone in which "today" is evaluated for the due-date rule.
    timezone: str = "UTC"
    client_due_date_grace_days: int = Field(default=1, ge=0)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v == "UTC":
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone '{v}'")
        return v


class LogAsyncQueueConfig(BaseModel):
    flush_interval_ms: int = 100
    flush_batch_size: int = 50
    max_queue_size: int = 10000


class LoggingConfig(BaseModel):
    enabled: bool = True
    level: str = "INFO"
    directory: str = ".taskcore/logs"
    async_queue: LogAsyncQueueConfig = LogAsyncQueueConfig()

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"invalid log level '{v}'")
        return v


class TaskCoreConfig(BaseModel):
    """Root model for taskcore.yaml."""
    name: str = "taskcore"
    version: str = "1.0.0"
    environment: str = "dev"

    server: ServerConfig = ServerConfig()
    tasks: TasksConfig = TasksConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ("dev", "staging", "prod"):
            raise ValueError(f"environment must be dev/staging/prod, got '{v}'")
        return v

    @property
    def zone(self) -> tzinfo:
        if self.tasks.timezone == "UTC":
            return dt_timezone.utc
        return ZoneInfo(self.tasks.timezone)


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_config: Optional[TaskCoreConfig] = None


def _find_config_file() -> Path:
    """Walk up from CWD looking for taskcore.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return current / CONFIG_FILENAME


def load_config(config_path: Optional[str] = None) -> TaskCoreConfig:
    """
    Load and validate taskcore.yaml.

    Args:
        config_path: Explicit path to the file. If None, auto-discovers.

    Returns:
        Validated TaskCoreConfig instance (defaults when the file is absent).

    Raises:
        TaskConfigError: The file exists but is not valid YAML or fails validation.
    """
    global _config

    path = Path(config_path) if config_path else _find_config_file()
    if not path.exists():
        _config = TaskCoreConfig()
        return _config

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise TaskConfigError(f"Invalid YAML in {path}: {e}", config_path=str(path))

    if not isinstance(raw, dict):
        raise TaskConfigError(
            f"{path} must contain a mapping at the top level",
            config_path=str(path),
        )

    try:
        _config = TaskCoreConfig(**raw)
    except ValidationError as e:
        raise TaskConfigError(
            f"Invalid configuration in {path}: {e.errors()[0]['msg']}",
            config_path=str(path),
        )
    return _config


def get_config() -> TaskCoreConfig:
    """Get the currently loaded config, loading if necessary."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    return get_config().environment
