"""
Schema builder for hybrid collections.

Turns the per-field parameters of a create request into the collection
descriptor and the ordered field descriptors handed to the storage engine.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from config import CollectionSettings
from hybrid_ops_exceptions import (
    FieldParamsParseError,
    InvalidArgumentError,
    InvalidDimensionError,
    MissingFieldError
)

from .schema import (
    MAX_DIMENSION,
    CollectionSchema,
    DataType,
    FieldSchema,
    FieldsSchema,
    HybridFieldSpec
)
from .type_mapper import resolve_vector_types

logger = logging.getLogger(__name__)


def join_field_maps(
    field_types: Mapping[str, Any],
    field_index_params: Mapping[str, Dict[str, Any]],
    field_params: Mapping[str, str]
) -> List[HybridFieldSpec]:
    """
    Joins the three per-field maps of a request into one ordered list of
    field records.

    The order of `field_types` is the declaration order of the collection.
    Every field it names must also appear in the other two maps; entries of
    the other maps that `field_types` does not name are ignored.

    Raises:
        MissingFieldError: If a field is absent from `field_index_params`
                           or `field_params`.
        InvalidArgumentError: If a field's type or parameters are malformed.
    """
    specs = []
    for name, data_type in field_types.items():
        if name not in field_index_params:
            raise MissingFieldError(name, "field_index_params")
        if name not in field_params:
            raise MissingFieldError(name, "field_params")
        try:
            specs.append(HybridFieldSpec(
                name=name,
                data_type=data_type,
                index_params=field_index_params[name],
                field_params=field_params[name]
            ))
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid parameters for field '{name}': {e}")
    return specs


def _parse_vector_params(spec: HybridFieldSpec) -> Dict[str, Any]:
    try:
        params = json.loads(spec.field_params)
    except ValueError as e:
        raise FieldParamsParseError(
            f"Invalid field_params for vector field '{spec.name}': {e}",
            field_name=spec.name
        )
    if not isinstance(params, dict):
        raise FieldParamsParseError(
            f"field_params for vector field '{spec.name}' must be a JSON object",
            field_name=spec.name
        )
    return params


def _index_name(spec: HybridFieldSpec) -> str:
    index_name = spec.index_params.get("name", "")
    if not isinstance(index_name, str):
        raise FieldParamsParseError(
            f"Index name of field '{spec.name}' must be a string, got {index_name!r}",
            field_name=spec.name
        )
    return index_name


def _check_dimension(spec: HybridFieldSpec, dimension: Any) -> int:
    if isinstance(dimension, bool) or not isinstance(dimension, int):
        raise InvalidDimensionError(
            f"Dimension of vector field '{spec.name}' must be an integer, got {dimension!r}",
            field_name=spec.name,
            dimension=dimension
        )
    if dimension < 0 or dimension > MAX_DIMENSION:
        raise InvalidDimensionError(
            f"Dimension of vector field '{spec.name}' must be between 0 and "
            f"{MAX_DIMENSION}, got {dimension}",
            field_name=spec.name,
            dimension=dimension
        )
    return dimension


class SchemaBuilder:
    """
    Builds the `CollectionSchema` and `FieldsSchema` of a hybrid collection.

    When several vector fields are declared, the last one in declaration
    order decides the collection's dimension, metric type and engine type.
    """

    def __init__(self, settings: Optional[CollectionSettings] = None):
        self._settings = settings or CollectionSettings()

    def build_fields(
        self,
        collection_name: str,
        fields: Sequence[HybridFieldSpec]
    ) -> Tuple[FieldsSchema, int, Dict[str, Any]]:
        """
        Builds the field descriptors and extracts the vector configuration.

        Returns:
            A tuple of (fields schema, dimension, parsed parameters of the
            deciding vector field). The dimension is 0 and the parameters are
            empty when no vector field is declared.

        Raises:
            InvalidArgumentError: If a field name is declared twice.
            FieldParamsParseError: If a vector field's parameters are not a
                                   JSON object, or an index name is not a
                                   string.
            InvalidDimensionError: If a vector dimension is not in 0..65535.
        """
        seen = set()
        field_schemas = []
        dimension = 0
        vector_config: Dict[str, Any] = {}

        for spec in fields:
            if spec.name in seen:
                raise InvalidArgumentError(
                    f"Duplicate field name '{spec.name}'",
                    collection_name=collection_name
                )
            seen.add(spec.name)

            index_name = _index_name(spec)
            field_schemas.append(FieldSchema(
                collection_id=collection_name,
                field_name=spec.name,
                field_type=int(spec.data_type),
                index_name=index_name,
                index_param=json.dumps(
                    spec.index_params, sort_keys=True, separators=(",", ":"), ensure_ascii=False
                ),
                field_params=spec.field_params
            ))

            if spec.data_type.is_vector:
                vector_config = _parse_vector_params(spec)
                if "dimension" in vector_config:
                    dimension = _check_dimension(spec, vector_config["dimension"])

        return FieldsSchema(fields_schema=tuple(field_schemas)), dimension, vector_config

    def resolve_index_file_size(self, extra_params: Optional[Mapping[str, Any]]) -> int:
        """
        Returns the segment size requested in `extra_params`, or the
        configured default when none is given.

        Raises:
            FieldParamsParseError: If "segment_size" is not an integer.
        """
        if not extra_params or "segment_size" not in extra_params:
            return self._settings.default_index_file_size
        segment_size = extra_params["segment_size"]
        if isinstance(segment_size, bool) or not isinstance(segment_size, int):
            raise FieldParamsParseError(f"segment_size must be an integer, got {segment_size!r}")
        return segment_size

    def build(
        self,
        collection_name: str,
        fields: Sequence[HybridFieldSpec],
        extra_params: Optional[Mapping[str, Any]] = None
    ) -> Tuple[CollectionSchema, FieldsSchema]:
        """
        Builds the complete schema of a hybrid collection.

        Args:
            collection_name: The name of the collection.
            fields: The field records in declaration order.
            extra_params: Collection-level parameters; "segment_size" is
                          recognized.

        Returns:
            A tuple of (collection schema, fields schema).

        Raises:
            SchemaError: If a field or extra parameter is invalid.
            InvalidEnumValueError: If a metric or index type is unknown.
        """
        fields_schema, dimension, vector_config = self.build_fields(collection_name, fields)
        index_file_size = self.resolve_index_file_size(extra_params)
        collection_schema = self.assemble(collection_name, dimension, index_file_size, vector_config)
        logger.debug(f"Built schema for '{collection_name}': {len(fields_schema)} fields")
        return collection_schema, fields_schema

    def assemble(
        self,
        collection_name: str,
        dimension: int,
        index_file_size: int,
        vector_config: Dict[str, Any]
    ) -> CollectionSchema:
        """
        Resolves the vector types named by `vector_config` and creates the
        collection descriptor.

        Raises:
            InvalidEnumValueError: If a metric or index type is unknown.
        """
        metric_type, engine_type = resolve_vector_types(vector_config)
        logger.debug(
            f"Collection '{collection_name}': dimension={dimension}, "
            f"index_file_size={index_file_size}, metric_type={metric_type}, engine_type={engine_type}"
        )
        return CollectionSchema(
            collection_id=collection_name,
            dimension=dimension,
            index_file_size=index_file_size,
            metric_type=metric_type,
            engine_type=engine_type
        )

    def build_from_maps(
        self,
        collection_name: str,
        field_types: Mapping[str, Any],
        field_index_params: Mapping[str, Dict[str, Any]],
        field_params: Mapping[str, str],
        extra_params: Optional[Mapping[str, Any]] = None
    ) -> Tuple[CollectionSchema, FieldsSchema]:
        """Joins the three per-field maps and builds the schema from them."""
        fields = join_field_maps(field_types, field_index_params, field_params)
        return self.build(collection_name, fields, extra_params)
