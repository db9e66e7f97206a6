"""
Configuration management for Device Compliance.

Handles loading, validation, and access to evaluation settings.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from compliance.policy.checkers import DEFAULT_CHECKERS


# Default configuration paths
DEFAULT_CONFIG_PATH = Path("/etc/device-compliance/compliance.yaml")
DEFAULT_SNAPSHOT_PATH = Path("/var/lib/device-compliance/state.yaml")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = LOG_FORMAT
    file: str | None = None

    def __post_init__(self) -> None:
        # Environment overrides the file setting
        env_level = os.environ.get("COMPLIANCE_LOG_LEVEL")
        if env_level:
            self.level = env_level.lower()


@dataclass
class EngineConfig:
    """Compliance engine settings."""

    disabled_kinds: list[str] = field(default_factory=list)


@dataclass
class StateConfig:
    """Device state settings."""

    snapshot_file: str = str(DEFAULT_SNAPSHOT_PATH)


@dataclass
class ComplianceConfig:
    """Main configuration container."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    state: StateConfig = field(default_factory=StateConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ComplianceConfig:
        """Create configuration from dictionary."""
        return cls(
            logging=LoggingConfig(**data.get("logging", {})),
            engine=EngineConfig(**data.get("engine", {})),
            state=StateConfig(**data.get("state", {})),
        )


def load_config(path: str | Path | None = None) -> ComplianceConfig:
    """
    Load configuration from YAML file.

    Args:
        path: Path to configuration file. If None, uses default paths.

    Returns:
        ComplianceConfig instance with loaded settings.

    Raises:
        FileNotFoundError: If config file not found.
        yaml.YAMLError: If config file is invalid YAML.
        TypeError: If the config file is not a mapping.
    """
    if path is None:
        # Try default locations
        candidates = [
            DEFAULT_CONFIG_PATH,
            Path("config/compliance.yaml"),
            Path("compliance.yaml"),
        ]
        for candidate in candidates:
            if candidate.exists():
                path = candidate
                break

    if path is None:
        return ComplianceConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise TypeError("Configuration must be a mapping")

    return ComplianceConfig.from_dict(data)


def validate_config(config: ComplianceConfig) -> list[str]:
    """
    Validate configuration and return list of errors.

    Args:
        config: Configuration to validate.

    Returns:
        List of error messages. Empty list if valid.
    """
    errors: list[str] = []

    valid_log_levels = {"debug", "info", "warning", "error"}
    if config.logging.level not in valid_log_levels:
        errors.append(f"Invalid log level: {config.logging.level}")

    if not isinstance(config.engine.disabled_kinds, list):
        errors.append("disabled_kinds must be a list")
    else:
        for kind in config.engine.disabled_kinds:
            if kind not in DEFAULT_CHECKERS:
                errors.append(f"Unknown policy kind in disabled_kinds: {kind}")

    return errors


def setup_logging(config: ComplianceConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.logging.level.upper(), logging.INFO)
    kwargs: dict[str, Any] = {}
    if config.logging.file:
        kwargs["filename"] = config.logging.file
    logging.basicConfig(
        level=level,
        format=config.logging.format,
        datefmt=LOG_DATE_FORMAT,
        **kwargs,
    )
