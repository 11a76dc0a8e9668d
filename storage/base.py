"""
Storage engine interface.

The create pipeline hands the assembled schema to a storage engine and
relays whatever status the engine reports. Engines arbitrate name
collisions themselves and report them as ALREADY_EXISTS.
"""

from abc import ABC, abstractmethod

from collection_operations.entities import Status
from collection_operations.schema import CollectionSchema, FieldsSchema


class StorageEngine(ABC):
    """
    Interface for the engine that physically creates collections.
    """

    @abstractmethod
    def create_hybrid_collection(
        self,
        collection_schema: CollectionSchema,
        fields_schema: FieldsSchema
    ) -> Status:
        """
        Creates a hybrid collection.

        Args:
            collection_schema: The collection-level descriptor.
            fields_schema: The field descriptors, in declaration order.

        Returns:
            A successful `Status`; an ALREADY_EXISTS status when a collection
            with the same name exists; any other error status otherwise.
        """

    @abstractmethod
    def has_collection(self, collection_name: str) -> bool:
        """Returns whether a collection with the given name exists."""
