"""
Milvus Storage Engine

Creates hybrid collections on a Milvus server through the PyMilvus SDK.

The hybrid schema is translated field by field into PyMilvus objects. Milvus
requires a primary key, so an auto-id INT64 primary field is added in front
of the declared fields. Collection-level attributes that have no PyMilvus
counterpart (segment size, metric and engine type codes) are recorded in the
collection description as JSON.
"""

import json
import logging
from typing import Any, Dict, Optional

from config import HybridOpsSettings, load_settings
from hybrid_ops_exceptions import StatusCode, StorageError
from collection_operations.entities import Status
from collection_operations.schema import CollectionSchema, DataType, FieldSchema, FieldsSchema

from .base import StorageEngine

logger = logging.getLogger(__name__)


class MilvusStorageEngine(StorageEngine):
    """
    Storage engine that creates collections on a Milvus server.

    Example:
        ```python
        engine = MilvusStorageEngine(load_settings())
        status = engine.create_hybrid_collection(collection_schema, fields_schema)
        ```
    """

    # Explicit mapping between hybrid field types and pymilvus DataType names
    _MILVUS_DATATYPE_MAP = {
        DataType.BOOL: "BOOL",
        DataType.INT8: "INT8",
        DataType.INT16: "INT16",
        DataType.INT32: "INT32",
        DataType.INT64: "INT64",
        DataType.FLOAT: "FLOAT",
        DataType.DOUBLE: "DOUBLE",
        DataType.STRING: "VARCHAR",
        DataType.BINARY_VECTOR: "BINARY_VECTOR",
        DataType.FLOAT_VECTOR: "FLOAT_VECTOR",
    }

    def __init__(self, settings: Optional[HybridOpsSettings] = None):
        """
        Initialize the Milvus storage engine.

        Args:
            settings: Settings providing the connection and collection
                      defaults. Loaded from the environment when omitted.
        """
        self._settings = settings or load_settings()
        self._alias = self._settings.connection.alias
        logger.info(
            f"MilvusStorageEngine initialized for "
            f"{self._settings.connection.host}:{self._settings.connection.port}"
        )

    def _ensure_connection(self) -> None:
        from pymilvus import connections

        if connections.has_connection(self._alias):
            return
        conn = self._settings.connection
        try:
            connections.connect(
                alias=self._alias,
                host=conn.host,
                port=conn.port,
                user=conn.user,
                password=conn.password,
                secure=conn.secure,
                timeout=conn.timeout
            )
        except Exception as e:
            raise StorageError(f"Failed to connect to Milvus at {conn.host}:{conn.port}: {e}")
        logger.info(f"Connected to Milvus at {conn.host}:{conn.port} (alias={self._alias})")

    def has_collection(self, collection_name: str) -> bool:
        from pymilvus import utility

        self._ensure_connection()
        return utility.has_collection(
            collection_name,
            using=self._alias,
            timeout=self._settings.connection.timeout
        )

    def create_hybrid_collection(
        self,
        collection_schema: CollectionSchema,
        fields_schema: FieldsSchema
    ) -> Status:
        from pymilvus import Collection
        from pymilvus.exceptions import MilvusException

        name = collection_schema.collection_id
        try:
            if self.has_collection(name):
                return Status.error(StatusCode.ALREADY_EXISTS, f"Collection already exists: {name}")

            schema = self._to_milvus_schema(collection_schema, fields_schema)
            Collection(
                name=name,
                schema=schema,
                using=self._alias,
                timeout=self._settings.connection.timeout
            )
        except StorageError as e:
            logger.error(f"[create_hybrid_collection] {e.message}")
            return Status.error(e.status_code, e.message)
        except MilvusException as e:
            logger.error(f"[create_hybrid_collection] Failed to create collection '{name}': {e}")
            # A concurrent creator can win between the existence check and the create call
            if "already exist" in str(e).lower():
                return Status.error(StatusCode.ALREADY_EXISTS, str(e))
            return Status.error(StatusCode.DB_ERROR, str(e))

        logger.info(f"Successfully created collection '{name}' on Milvus")
        return Status.success()

    def _to_milvus_schema(self, collection_schema: CollectionSchema, fields_schema: FieldsSchema):
        """
        Translates the hybrid schema into a PyMilvus CollectionSchema.

        Raises:
            StorageError: If a field cannot be represented in Milvus.
        """
        from pymilvus import CollectionSchema as MilvusCollectionSchema
        from pymilvus import DataType as MilvusDataType
        from pymilvus import FieldSchema as MilvusFieldSchema

        primary_name = self._settings.collection.primary_field_name
        if fields_schema.get_field_by_name(primary_name) is not None:
            raise StorageError(
                f"Field name '{primary_name}' is reserved for the primary key",
                collection_name=collection_schema.collection_id
            )

        fields = [MilvusFieldSchema(
            name=primary_name,
            dtype=MilvusDataType.INT64,
            is_primary=True,
            auto_id=True
        )]
        for field in fields_schema.fields_schema:
            fields.append(self._to_milvus_field(collection_schema, field))

        description = json.dumps({
            "index_file_size": collection_schema.index_file_size,
            "metric_type": collection_schema.metric_type,
            "engine_type": collection_schema.engine_type,
        }, sort_keys=True)
        return MilvusCollectionSchema(fields=fields, description=description)

    def _to_milvus_field(self, collection_schema: CollectionSchema, field: FieldSchema):
        from pymilvus import DataType as MilvusDataType
        from pymilvus import FieldSchema as MilvusFieldSchema

        data_type = field.data_type
        if data_type not in self._MILVUS_DATATYPE_MAP:
            raise StorageError(
                f"Unsupported data type for field '{field.field_name}': {data_type.name}",
                collection_name=collection_schema.collection_id
            )
        dtype = getattr(MilvusDataType, self._MILVUS_DATATYPE_MAP[data_type])

        kwargs: Dict[str, Any] = {"description": field.index_param}
        params = _loads_object(field.field_params)
        if data_type.is_vector:
            kwargs["dim"] = params.get("dimension", collection_schema.dimension)
        elif data_type == DataType.STRING:
            kwargs["max_length"] = params.get(
                "max_length", self._settings.collection.default_varchar_max_length
            )
        return MilvusFieldSchema(name=field.field_name, dtype=dtype, **kwargs)


def _loads_object(text: str) -> Dict[str, Any]:
    # Scalar field params are opaque and need not be JSON
    try:
        value = json.loads(text)
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}
