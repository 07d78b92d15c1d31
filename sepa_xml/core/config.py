"""
SEPA XML - Configuration Management

This module provides configuration for document construction, supporting
defaults, YAML files and environment variables as configuration sources.
"""

import os
import yaml
from dataclasses import dataclass, fields
from typing import Any, Dict, Union
from pathlib import Path
from enum import Enum
import logging

from .exceptions import ConfigurationException

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class SEPAConfig:
    """
    Settings captured by a document at construction time.

    A document keeps the instance it was built with, so two documents using
    different separators never interfere with each other.
    """

    # Separator placed between the parts of composed batch/transaction ids
    id_separator: str = "."

    # Pain format used when a document is created without one
    default_pain_format: str = "pain.008.001.02"

    log_level: LogLevel = LogLevel.INFO
    debug: bool = False

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "SEPAConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationException(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in configuration file: {e}")

        return cls._from_dict(config_data or {})

    @classmethod
    def load_from_env(cls, prefix: str = "SEPA_XML_") -> "SEPAConfig":
        """Load configuration from environment variables."""
        config = cls()

        config.id_separator = os.getenv(f"{prefix}ID_SEPARATOR", config.id_separator)
        config.default_pain_format = os.getenv(
            f"{prefix}DEFAULT_PAIN_FORMAT", config.default_pain_format
        )
        try:
            config.log_level = LogLevel(
                os.getenv(f"{prefix}LOG_LEVEL", config.log_level.value).upper()
            )
        except ValueError:
            raise ConfigurationException(
                f"Invalid log level: {os.getenv(f'{prefix}LOG_LEVEL')}",
                config_key="log_level",
            )
        config.debug = os.getenv(f"{prefix}DEBUG", str(config.debug)).lower() == "true"

        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "SEPAConfig":
        """Create configuration from dictionary."""
        if not isinstance(data, dict):
            raise ConfigurationException("Configuration root must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationException(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                config_key=sorted(unknown)[0],
            )

        config = cls(**data)
        if not isinstance(config.log_level, LogLevel):
            try:
                config.log_level = LogLevel(str(config.log_level).upper())
            except ValueError:
                raise ConfigurationException(
                    f"Invalid log level: {config.log_level}", config_key="log_level"
                )
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "id_separator": self.id_separator,
            "default_pain_format": self.default_pain_format,
            "log_level": self.log_level.value,
            "debug": self.debug,
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        # Local import: the registry lives in the protocol package
        from sepa_xml.protocols.pain.pain_codes import PainFormat

        errors = []

        if not isinstance(self.id_separator, str) or not self.id_separator:
            errors.append("ID separator must be a non-empty string")

        if PainFormat.from_code(self.default_pain_format) is None:
            errors.append(f"Unknown default pain format: {self.default_pain_format}")

        if errors:
            raise ConfigurationException(
                f"Configuration validation failed: {'; '.join(errors)}"
            )


def load_config(config_path: Union[str, Path]) -> SEPAConfig:
    """Load and validate configuration from file."""
    config = SEPAConfig.load_from_file(config_path)
    config.validate()
    logger.debug(f"Loaded configuration from {config_path}: {config.to_dict()}")
    return config
