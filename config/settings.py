"""
Pydantic Settings for Hybrid Collection Operations

This module provides strongly-typed configuration settings using Pydantic,
with support for environment variables and YAML configuration files.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_yaml import to_yaml_str


class ConnectionSettings(BaseSettings):
    """
    Connection settings for the Milvus storage backend.

    Only the pymilvus-backed storage engine reads these; the in-memory engine
    ignores them.
    """
    model_config = SettingsConfigDict(env_prefix="MILVUS_", case_sensitive=False)

    host: str = Field("localhost", description="Hostname or IP address of the Milvus server")
    port: str = Field("19530", description="Port number on which Milvus server is listening")
    user: str = Field("", description="Username for authentication (if enabled on server)")
    password: str = Field("", description="Password for authentication (if enabled on server)")
    secure: bool = Field(False, description="Whether to use TLS/SSL for secure connection")
    timeout: float = Field(60.0, description="Timeout in seconds for calls into the Milvus server")
    alias: str = Field("default", description="pymilvus connection alias used by the storage backend")


class CollectionSettings(BaseSettings):
    """
    Collection defaults supplied to the schema builder and storage backends.

    These are the collaborator-defined values a request falls back to when the
    client does not specify them.
    """
    model_config = SettingsConfigDict(env_prefix="HYBRID_", case_sensitive=False)

    default_index_file_size: int = Field(
        1024,
        description="Segment size (MB) used when extra_params carries no 'segment_size'"
    )
    primary_field_name: str = Field(
        "_id",
        description="Name of the auto-id primary key field added by the Milvus backend"
    )
    default_varchar_max_length: int = Field(
        65535,
        description="max_length given to STRING fields that do not declare one"
    )

    @field_validator("default_index_file_size")
    def validate_index_file_size(cls, value):
        """Validate that the default segment size is positive."""
        if value <= 0:
            raise ValueError("default_index_file_size must be positive")
        return value

    @field_validator("default_varchar_max_length")
    def validate_varchar_max_length(cls, value):
        """Validate that the VARCHAR length fits the Milvus limit."""
        if value <= 0 or value > 65535:
            raise ValueError("default_varchar_max_length must be between 1 and 65535")
        return value


class MonitoringSettings(BaseSettings):
    """
    Logging and timing settings.
    """
    model_config = SettingsConfigDict(env_prefix="HYBRID_", case_sensitive=False)

    log_level: str = Field("INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    enable_timing: bool = Field(True, description="Whether to record per-stage timing of each request")

    @field_validator("log_level")
    def validate_log_level(cls, value):
        """Normalize and validate the logging level name."""
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


class HybridOpsSettings(BaseSettings):
    """
    Main settings class that consolidates all configuration categories.

    Usage:
        # Load from environment variables and defaults
        settings = HybridOpsSettings()

        # Load from YAML file
        settings = HybridOpsSettings.from_yaml('config.yaml')

        # Access nested settings
        segment_size = settings.collection.default_index_file_size
    """
    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_nested_delimiter="__"
    )

    connection: ConnectionSettings = Field(default_factory=ConnectionSettings,
                                           description="Connection settings for the Milvus backend")
    collection: CollectionSettings = Field(default_factory=CollectionSettings,
                                           description="Collection defaults")
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings,
                                           description="Logging and timing settings")

    @classmethod
    def from_yaml(cls, yaml_file: Union[str, Path]) -> "HybridOpsSettings":
        """Load settings from YAML file"""
        import yaml
        with open(yaml_file, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self) -> str:
        """Serialize settings to a YAML string (secrets included)"""
        return to_yaml_str(self)


def load_settings(config_path: Optional[str] = None) -> HybridOpsSettings:
    """
    Load settings from file and/or environment variables.

    Args:
        config_path: Path to YAML configuration file. If None or file doesn't exist,
                    falls back to environment variables and default values.

    Returns:
        HybridOpsSettings object with loaded configuration
    """
    if config_path and os.path.exists(config_path):
        return HybridOpsSettings.from_yaml(config_path)
    return HybridOpsSettings()


def configure_logging(settings: Optional[HybridOpsSettings] = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.monitoring.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
