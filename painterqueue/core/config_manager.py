"""
Configuration management for PainterQueue.

Handles loading, validation, and access to storage, telemetry and
logging settings.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from enum import Enum

import yaml
from pydantic import BaseModel, Field, ValidationError, ConfigDict

from .exceptions import ConfigurationError
from .logging_config import redact

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Valid log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageBackendType(str, Enum):
    """Supported storage service adapters."""
    AZURE = "azure"
    MEMORY = "memory"


class StorageSettings(BaseModel):
    """Blob storage settings."""
    backend: StorageBackendType = StorageBackendType.AZURE
    connection_string: str = ""
    seed_container_name: str = ""
    rule_blob_name: str = ""

    model_config = ConfigDict(use_enum_values=True)


class TelemetrySettings(BaseModel):
    """Structured telemetry settings."""
    connection_string: str = ""
    api_key: str = ""
    enable_adaptive_sampling: bool = True
    trace_logger: str = Field(
        default="painterqueue.telemetry.trace",
        description="Logger receiving structured trace events"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO
    format: str = "json"
    file: Optional[str] = None
    rotation_size: str = "10MB"
    rotation_count: int = 5
    module_levels: Optional[Dict[str, str]] = Field(
        default=None,
        description="Per-module log levels, e.g., {'painterqueue.storage': 'DEBUG'}"
    )


class PainterQueueConfig(BaseModel):
    """Main PainterQueue configuration schema."""

    storage: StorageSettings = Field(default_factory=StorageSettings)

    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(use_enum_values=True)


def validate_storage_settings(settings: StorageSettings) -> None:
    """
    Reject storage settings the application cannot start with.

    The in-memory backend needs no connection string, but every backend
    needs to know where the rule seed lives.

    Raises:
        ConfigurationError: If a required setting is blank
    """
    if settings.backend == StorageBackendType.AZURE.value and not settings.connection_string.strip():
        raise ConfigurationError("storage.connection_string", "Connection string cannot be null or empty")
    if not settings.seed_container_name.strip():
        raise ConfigurationError("storage.seed_container_name", "Seed container name cannot be null or empty")
    if not settings.rule_blob_name.strip():
        raise ConfigurationError("storage.rule_blob_name", "Rule blob name cannot be null or empty")


def validate_telemetry_settings(settings: TelemetrySettings) -> None:
    """
    Reject telemetry settings for a remote trace backend that is only half configured.

    Raises:
        ConfigurationError: If the api key is missing or sampling is disabled
    """
    if not settings.connection_string.strip():
        return
    if not settings.api_key.strip():
        raise ConfigurationError("telemetry.api_key", "API key cannot be null or empty")
    if not settings.enable_adaptive_sampling:
        raise ConfigurationError("telemetry.enable_adaptive_sampling", "Adaptive sampling must be enabled")


class ConfigManager:
    """
    Manages PainterQueue configuration loading and validation.

    Configuration precedence (highest to lowest):
    1. CLI arguments
    2. Environment variables (PAINTERQUEUE_*)
    3. Configuration file (YAML/JSON)
    4. Defaults
    """

    def __init__(self):
        self._config: Optional[PainterQueueConfig] = None
        self._config_file: Optional[Path] = None

    def load(
        self,
        config_file: Optional[str] = None,
        cli_overrides: Optional[Dict[str, Any]] = None
    ) -> PainterQueueConfig:
        """
        Load and validate configuration from multiple sources.

        Args:
            config_file: Path to configuration file (YAML or JSON)
            cli_overrides: Dictionary of CLI argument overrides

        Returns:
            Validated PainterQueueConfig instance

        Raises:
            ValidationError: If a value has the wrong type
            ConfigurationError: If a required setting is missing
            FileNotFoundError: If specified config file doesn't exist
        """
        logger.info("Loading PainterQueue configuration")

        config_dict: Dict[str, Any] = {}

        if config_file:
            config_dict = self._load_from_file(config_file)
            self._config_file = Path(config_file)
            logger.info(f"Loaded configuration from file: {config_file}")

        env_config = self._load_from_env()
        config_dict = self._merge_configs(config_dict, env_config)
        if env_config:
            logger.info(f"Applied {len(env_config)} environment variable overrides")

        if cli_overrides:
            config_dict = self._merge_configs(config_dict, cli_overrides)
            logger.info(f"Applied {len(cli_overrides)} CLI argument overrides")

        try:
            config = PainterQueueConfig(**config_dict)
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        try:
            validate_storage_settings(config.storage)
            validate_telemetry_settings(config.telemetry)
        except ConfigurationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        self._config = config
        logger.info("Configuration validated successfully")
        self._log_configuration()
        return self._config

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                return yaml.safe_load(f) or {}
            elif path.suffix == '.json':
                return json.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        if conn := os.getenv("PAINTERQUEUE_STORAGE_CONNECTION_STRING"):
            config.setdefault("storage", {})["connection_string"] = conn
        if container := os.getenv("PAINTERQUEUE_SEED_CONTAINER"):
            config.setdefault("storage", {})["seed_container_name"] = container
        if blob := os.getenv("PAINTERQUEUE_RULE_BLOB"):
            config.setdefault("storage", {})["rule_blob_name"] = blob
        if backend := os.getenv("PAINTERQUEUE_STORAGE_BACKEND"):
            config.setdefault("storage", {})["backend"] = backend.lower()

        if telemetry_conn := os.getenv("PAINTERQUEUE_TELEMETRY_CONNECTION_STRING"):
            config.setdefault("telemetry", {})["connection_string"] = telemetry_conn
        if api_key := os.getenv("PAINTERQUEUE_TELEMETRY_API_KEY"):
            config.setdefault("telemetry", {})["api_key"] = api_key

        if log_level := os.getenv("PAINTERQUEUE_LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level.upper()
        if log_file := os.getenv("PAINTERQUEUE_LOG_FILE"):
            config.setdefault("logging", {})["file"] = log_file
        if log_format := os.getenv("PAINTERQUEUE_LOG_FORMAT"):
            config.setdefault("logging", {})["format"] = log_format.lower()

        return config

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def redacted(self) -> Dict[str, Any]:
        """Return the loaded configuration with secrets masked."""
        config_dict = self.get_config().model_dump()

        storage = config_dict["storage"]
        if storage["connection_string"]:
            storage["connection_string"] = redact(storage["connection_string"])

        telemetry = config_dict["telemetry"]
        if telemetry["connection_string"]:
            telemetry["connection_string"] = redact(telemetry["connection_string"])
        if telemetry["api_key"]:
            telemetry["api_key"] = "***REDACTED***"

        return config_dict

    def _log_configuration(self) -> None:
        """Log the loaded configuration (with sensitive data redacted)."""
        if not self._config:
            return

        logger.info(f"Active configuration: {json.dumps(self.redacted(), indent=2)}")

    def get_config(self) -> PainterQueueConfig:
        """
        Get the loaded configuration.

        Returns:
            PainterQueueConfig instance

        Raises:
            RuntimeError: If configuration hasn't been loaded
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    def reload(self) -> PainterQueueConfig:
        """
        Reload configuration from the same sources.

        Returns:
            Reloaded PainterQueueConfig instance
        """
        config_file = str(self._config_file) if self._config_file else None
        return self.load(config_file=config_file)
