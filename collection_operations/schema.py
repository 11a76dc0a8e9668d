"""
Schema models for hybrid collections.

This module defines Pydantic models for the internal representation of a
hybrid collection: the collection-level descriptor, the per-field descriptors,
and the per-field input record a request is built from. All models are frozen;
once the schema builder has produced them they are handed to the storage
engine unchanged.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hybrid_ops_exceptions import InvalidArgumentError

MAX_DIMENSION = 65535


class DataType(int, Enum):
    """
    Enumeration of hybrid field types.

    The integer values are the codes stored in `FieldSchema.field_type` and
    understood by the storage engine.
    """
    NONE = 0
    BOOL = 1
    INT8 = 2
    INT16 = 3
    INT32 = 4
    INT64 = 5
    FLOAT = 10
    DOUBLE = 11
    STRING = 20
    BINARY_VECTOR = 100
    FLOAT_VECTOR = 101

    @property
    def is_vector(self) -> bool:
        """Whether values of this type are vectors."""
        return self in (DataType.FLOAT_VECTOR, DataType.BINARY_VECTOR)

    @classmethod
    def parse(cls, value: Any) -> "DataType":
        """
        Converts a client-supplied field type into a `DataType`.

        Accepts enum members, integer codes, and names (case-insensitive).

        Raises:
            InvalidArgumentError: If the value names no known field type.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidArgumentError(f"Invalid field type: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidArgumentError(f"Invalid field type code: {value}")
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidArgumentError(f"Invalid field type: {value!r}")
        raise InvalidArgumentError(f"Invalid field type: {value!r}")


class HybridFieldSpec(BaseModel):
    """
    Everything a client supplied about one field, in one record.

    Attributes:
        name: The field name, unique within the request.
        data_type: The field type.
        index_params: The field's index-parameter object. The "name" key, when
                      present, is the index name; every other key is opaque.
        field_params: The field's parameters as a JSON-encoded string. Only
                      vector fields have it parsed.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="The field name.")
    data_type: DataType = Field(..., description="The field type.")
    index_params: Dict[str, Any] = Field(default_factory=dict, description="Index parameters for the field.")
    field_params: str = Field("", description="JSON-encoded field parameters.")

    @field_validator('data_type', mode='before')
    def parse_data_type(cls, value):
        return DataType.parse(value)


class FieldSchema(BaseModel):
    """
    Internal descriptor of one field of a hybrid collection.

    Attributes:
        collection_id: Name of the owning collection.
        field_name: The field name.
        field_type: The `DataType` code of the field.
        index_name: Name of the field's index, or "" when none was given.
        index_param: The index-parameter object serialized as JSON text.
        field_params: The field parameters exactly as the client sent them.
    """
    model_config = ConfigDict(frozen=True)

    collection_id: str
    field_name: str
    field_type: int
    index_name: str = ""
    index_param: str = "{}"
    field_params: str = ""

    @property
    def data_type(self) -> DataType:
        return DataType(self.field_type)


class FieldsSchema(BaseModel):
    """Ordered set of a collection's field descriptors."""
    model_config = ConfigDict(frozen=True)

    fields_schema: Tuple[FieldSchema, ...] = ()

    def __len__(self) -> int:
        return len(self.fields_schema)

    def get_field_by_name(self, name: str) -> Optional[FieldSchema]:
        """
        Retrieves a field descriptor by name.

        Returns:
            The `FieldSchema` if found, otherwise `None`.
        """
        for field in self.fields_schema:
            if field.field_name == name:
                return field
        return None

    def get_vector_fields(self) -> List[FieldSchema]:
        """Returns the vector-typed field descriptors in declaration order."""
        return [f for f in self.fields_schema if f.data_type.is_vector]


class CollectionSchema(BaseModel):
    """
    Top-level descriptor of a hybrid collection.

    `metric_type` and `engine_type` are 0 when the collection has no vector
    field or the vector field does not name them.

    Attributes:
        collection_id: The collection name.
        dimension: Vector dimension of the collection, 0 without a vector field.
        index_file_size: Segment size threshold used by the storage engine.
        metric_type: Metric type code (see `MetricType`).
        engine_type: Engine/index type code (see `EngineType`).
    """
    model_config = ConfigDict(frozen=True)

    collection_id: str
    dimension: int = Field(0, ge=0, le=MAX_DIMENSION)
    index_file_size: int
    metric_type: int = 0
    engine_type: int = 0

    @property
    def id(self) -> str:
        return self.collection_id
