"""
Hybrid Collection Operations Exceptions

This module defines the exception hierarchy for the hybrid_collection_ops
package. Every exception carries the client-facing status code it is reported
under, so the request boundary can turn any expected failure into a result
without inspecting exception types one by one.
"""

from enum import Enum
from typing import Any, List, Optional


class StatusCode(str, Enum):
    """
    Client-facing result categories for collection operations.

    These are the only categories a caller ever observes. Storage backends
    report through the same codes, with ALREADY_EXISTS reserved for name
    collisions detected by the storage engine.
    """
    SUCCESS = "SUCCESS"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    INVALID_DIMENSION = "INVALID_DIMENSION"
    INVALID_COLLECTION_NAME = "INVALID_COLLECTION_NAME"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    DB_ERROR = "DB_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class HybridOpsError(Exception):
    """
    Base exception for all hybrid collection errors.

    Attributes:
        message: Human-readable error message
        collection_name: Name of the collection involved (if applicable)
    """
    status_code: StatusCode = StatusCode.UNEXPECTED_ERROR

    def __init__(self, message: str, collection_name: Optional[str] = None):
        self.message = message
        self.collection_name = collection_name
        super().__init__(self.message)


class InvalidArgumentError(HybridOpsError):
    """Raised when a request argument is malformed (e.g. unknown field type)"""
    status_code = StatusCode.INVALID_ARGUMENT


class SchemaError(HybridOpsError):
    """Base exception for failures while building a collection schema"""
    status_code = StatusCode.UNEXPECTED_ERROR


class MissingFieldError(SchemaError):
    """
    Raised when a field declared in the field-type map has no entry in one
    of the other per-field maps.

    Attributes:
        field_name: The field that could not be joined
        map_name: The per-field map the field was missing from
    """
    status_code = StatusCode.MISSING_FIELD

    def __init__(
        self,
        field_name: str,
        map_name: str,
        collection_name: Optional[str] = None
    ):
        super().__init__(
            f"Field '{field_name}' is missing from {map_name}",
            collection_name=collection_name
        )
        self.field_name = field_name
        self.map_name = map_name


class FieldParamsParseError(SchemaError):
    """
    Raised when a vector field's parameters, or the extra parameters, cannot
    be interpreted as structured configuration.
    """
    status_code = StatusCode.UNEXPECTED_ERROR

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        collection_name: Optional[str] = None
    ):
        super().__init__(message, collection_name=collection_name)
        self.field_name = field_name


class InvalidDimensionError(SchemaError):
    """
    Raised when a vector dimension does not fit an unsigned 16-bit integer.

    Attributes:
        field_name: The vector field carrying the dimension
        dimension: The rejected value
    """
    status_code = StatusCode.INVALID_DIMENSION

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        dimension: Any = None,
        collection_name: Optional[str] = None
    ):
        super().__init__(message, collection_name=collection_name)
        self.field_name = field_name
        self.dimension = dimension


class InvalidEnumValueError(HybridOpsError):
    """
    Raised when a metric type or index type string is not in its lookup table.

    Attributes:
        key: Configuration key holding the value ("metric_type" or "index_type")
        value: The unmatched value
        supported: The values the table accepts
    """
    status_code = StatusCode.INVALID_ENUM_VALUE

    def __init__(
        self,
        key: str,
        value: Any,
        supported: Optional[List[str]] = None
    ):
        super().__init__(f"Invalid {key}: {value!r}")
        self.key = key
        self.value = value
        self.supported = supported or []


class StorageError(HybridOpsError):
    """Raised by storage backends when the underlying engine cannot be reached"""
    status_code = StatusCode.DB_ERROR
