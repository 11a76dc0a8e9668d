"""
In-Memory Storage Engine

Keeps created collections in a process-local catalog. Used by the tests and
the usage examples, and anywhere a real Milvus server is not available.
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from hybrid_ops_exceptions import StatusCode
from collection_operations.entities import Status
from collection_operations.schema import CollectionSchema, FieldsSchema

from .base import StorageEngine

logger = logging.getLogger(__name__)


class InMemoryStorageEngine(StorageEngine):
    """
    Storage engine backed by a dictionary.

    Creation is serialized with a lock, so when several requests race for
    the same name exactly one succeeds and the others observe ALREADY_EXISTS.
    """

    def __init__(self):
        self._collections: Dict[str, Tuple[CollectionSchema, FieldsSchema]] = {}
        self._lock = threading.Lock()
        logger.info("InMemoryStorageEngine initialized")

    def create_hybrid_collection(
        self,
        collection_schema: CollectionSchema,
        fields_schema: FieldsSchema
    ) -> Status:
        name = collection_schema.collection_id
        with self._lock:
            if name in self._collections:
                return Status.error(
                    StatusCode.ALREADY_EXISTS,
                    f"Collection already exists: {name}"
                )
            self._collections[name] = (collection_schema, fields_schema)
        logger.info(f"Created collection '{name}' with {len(fields_schema)} fields")
        return Status.success()

    def has_collection(self, collection_name: str) -> bool:
        with self._lock:
            return collection_name in self._collections

    def describe_collection(
        self,
        collection_name: str
    ) -> Optional[Tuple[CollectionSchema, FieldsSchema]]:
        """Returns the stored schema of a collection, or None if it does not exist."""
        with self._lock:
            return self._collections.get(collection_name)

    def list_collections(self) -> List[str]:
        """Returns the names of all collections, sorted."""
        with self._lock:
            return sorted(self._collections)

    def drop_collection(self, collection_name: str) -> Status:
        """Removes a collection from the catalog."""
        with self._lock:
            if collection_name not in self._collections:
                return Status.error(
                    StatusCode.DB_ERROR,
                    f"Collection not found: {collection_name}"
                )
            del self._collections[collection_name]
        logger.info(f"Dropped collection '{collection_name}'")
        return Status.success()
