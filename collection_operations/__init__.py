"""
Collection Operations Module

This module provides the create pipeline for hybrid collections:
- Collection name validation
- Schema building from per-field parameters
- Metric and index type resolution
- Submission to a storage engine with error translation

Every request produces one schema and one `Status`; nothing is retried or
cached between requests.
"""

from .manager import HybridCollectionManager, CreateHybridCollectionRequest
from .schema import (
    CollectionSchema,
    FieldSchema,
    FieldsSchema,
    HybridFieldSpec,
    DataType
)
from .type_mapper import (
    MetricType,
    EngineType,
    resolve_metric_type,
    resolve_engine_type,
    resolve_vector_types
)
from .builder import SchemaBuilder, join_field_maps
from .validator import CollectionNameValidator, NameValidator
from .entities import Status, RequestState

__all__ = [
    'HybridCollectionManager',
    'CreateHybridCollectionRequest',
    'CollectionSchema',
    'FieldSchema',
    'FieldsSchema',
    'HybridFieldSpec',
    'DataType',
    'MetricType',
    'EngineType',
    'resolve_metric_type',
    'resolve_engine_type',
    'resolve_vector_types',
    'SchemaBuilder',
    'join_field_maps',
    'CollectionNameValidator',
    'NameValidator',
    'Status',
    'RequestState',
]
