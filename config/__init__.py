"""
Configuration Module

This module provides centralized configuration management for hybrid
collection operations:
- Connection configuration for the Milvus storage backend
- Collection defaults (segment size, primary key name, VARCHAR length)
- Logging and timing settings

Settings are loaded from environment variables or YAML files and validated
with Pydantic.
"""

from .settings import (
    HybridOpsSettings,
    ConnectionSettings,
    CollectionSettings,
    MonitoringSettings,
    load_settings,
    configure_logging
)

__all__ = [
    'HybridOpsSettings',
    'ConnectionSettings',
    'CollectionSettings',
    'MonitoringSettings',
    'load_settings',
    'configure_logging'
]
