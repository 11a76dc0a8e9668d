"""
Hybrid Collection Manager.

This module provides the create pipeline for hybrid collections: the name is
validated, the schema is built from the request's per-field parameters, the
vector metric and index types are resolved, and the result is submitted to a
storage engine whose failures are translated into client-facing statuses.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Sequence, Tuple

from config import HybridOpsSettings, load_settings
from hybrid_ops_exceptions import HybridOpsError, StatusCode
from utils.timing import TimeRecorder

from .builder import SchemaBuilder, join_field_maps
from .entities import RequestState, Status
from .schema import CollectionSchema, FieldsSchema, HybridFieldSpec
from .validator import CollectionNameValidator, NameValidator

if TYPE_CHECKING:
    from storage.base import StorageEngine

logger = logging.getLogger(__name__)

FieldMaps = Tuple[Mapping[str, Any], Mapping[str, Dict[str, Any]], Mapping[str, str]]

# Terminal state for a failure, keyed by the last state reached
_FAILURE_STATES = {
    RequestState.START: RequestState.FAILED_VALIDATION,
    RequestState.NAME_VALIDATED: RequestState.FAILED_BUILD,
    RequestState.SCHEMA_BUILT: RequestState.FAILED_TYPE_RESOLUTION,
    RequestState.TYPES_RESOLVED: RequestState.FAILED_SUBMISSION,
    RequestState.SUBMITTED: RequestState.FAILED_SUBMISSION,
}


class CreateHybridCollectionRequest:
    """
    A single request to create a hybrid collection.

    The request runs once. Each stage advances `state`; the first failure
    moves it to the matching FAILED_* state and no later stage runs, so a
    schema that failed to build or resolve is never submitted. Running
    `execute` again returns the stored status.

    Expected failures (bad names, missing fields, unknown enum strings, bad
    dimensions) are reported with their own status codes. Any other error is
    reported as UNEXPECTED_ERROR carrying the original message.
    """

    def __init__(
        self,
        storage: "StorageEngine",
        collection_name: str,
        fields: Sequence[HybridFieldSpec] = (),
        extra_params: Optional[Mapping[str, Any]] = None,
        name_validator: Optional[NameValidator] = None,
        settings: Optional[HybridOpsSettings] = None,
        field_maps: Optional[FieldMaps] = None
    ):
        """
        Initialize the request.

        Args:
            storage: The storage engine the schema is submitted to.
            collection_name: The proposed collection name.
            fields: The collection's fields in declaration order. Ignored
                    when `field_maps` is given.
            extra_params: Collection-level parameters ("segment_size").
            name_validator: Gate for the collection name. Defaults to
                            `CollectionNameValidator`.
            settings: Settings providing collection defaults and the timing
                      switch. Loaded from the environment when omitted.
            field_maps: The (field_types, field_index_params, field_params)
                        maps of a client call. They are joined when the
                        request executes.
        """
        self._storage = storage
        self._collection_name = collection_name
        self._fields = fields
        self._field_maps = field_maps
        self._extra_params = extra_params or {}
        self._name_validator = name_validator or CollectionNameValidator()
        self._settings = settings or load_settings()
        self._builder = SchemaBuilder(self._settings.collection)

        self._state = RequestState.START
        self._status: Optional[Status] = None
        self._collection_schema: Optional[CollectionSchema] = None
        self._fields_schema: Optional[FieldsSchema] = None

    @classmethod
    def create(
        cls,
        storage: "StorageEngine",
        collection_name: str,
        field_types: Mapping[str, Any],
        field_index_params: Mapping[str, Dict[str, Any]],
        field_params: Mapping[str, str],
        extra_params: Optional[Mapping[str, Any]] = None,
        **kwargs
    ) -> "CreateHybridCollectionRequest":
        """
        Builds a request from the three per-field maps of a client call.

        The maps are joined when the request executes, so an inconsistent
        set of maps is reported as a MISSING_FIELD result rather than raised
        here.
        """
        return cls(
            storage,
            collection_name,
            extra_params=extra_params,
            field_maps=(field_types, field_index_params, field_params),
            **kwargs
        )

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def status(self) -> Optional[Status]:
        """The result of the request, or None before it has executed."""
        return self._status

    @property
    def collection_schema(self) -> Optional[CollectionSchema]:
        """The collection descriptor, once types have been resolved."""
        return self._collection_schema

    @property
    def fields_schema(self) -> Optional[FieldsSchema]:
        """The field descriptors, once the schema has been built."""
        return self._fields_schema

    def execute(self) -> Status:
        """
        Runs the request.

        Returns:
            A successful `Status`, or an error status describing the first
            failure.
        """
        if self._status is not None:
            return self._status

        header = f"CreateHybridCollectionRequest(collection={self._collection_name})"
        with TimeRecorder(header, enabled=self._settings.monitoring.enable_timing) as rc:
            try:
                status = self._run(rc)
            except HybridOpsError as e:
                self._state = _FAILURE_STATES.get(self._state, self._state)
                status = Status.from_exception(e)
            except Exception as e:
                logger.exception(f"{header} failed unexpectedly")
                self._state = _FAILURE_STATES.get(self._state, self._state)
                status = Status.error(StatusCode.UNEXPECTED_ERROR, str(e))

        if status.ok:
            logger.info(f"Created hybrid collection '{self._collection_name}'")
        else:
            logger.error(f"{header} failed ({self._state.value}): [{status.code.value}] {status.message}")
        self._status = status
        return status

    def _run(self, rc: TimeRecorder) -> Status:
        # step 1: check arguments
        status = self._name_validator.validate(self._collection_name)
        if not status.ok:
            self._state = RequestState.FAILED_VALIDATION
            return status
        self._state = RequestState.NAME_VALIDATED
        rc.record_section("check validation")

        # step 2: construct collection schema and fields schema
        fields = self._fields
        if self._field_maps is not None:
            fields = join_field_maps(*self._field_maps)
        fields_schema, dimension, vector_config = self._builder.build_fields(
            self._collection_name, fields
        )
        index_file_size = self._builder.resolve_index_file_size(self._extra_params)
        self._fields_schema = fields_schema
        self._state = RequestState.SCHEMA_BUILT

        # step 3: resolve metric and engine types of the vector field
        self._collection_schema = self._builder.assemble(
            self._collection_name, dimension, index_file_size, vector_config
        )
        self._state = RequestState.TYPES_RESOLVED
        rc.record_section("build schema")

        # step 4: create collection
        status = self._storage.create_hybrid_collection(self._collection_schema, fields_schema)
        self._state = RequestState.SUBMITTED
        rc.record_section("create collection")
        if not status.ok:
            self._state = RequestState.FAILED_SUBMISSION
            # the collection could exist already; report it as a naming problem
            if status.code == StatusCode.ALREADY_EXISTS:
                return Status.error(StatusCode.INVALID_COLLECTION_NAME, status.message)
            return status

        self._state = RequestState.SUCCEEDED
        return Status.success()


class HybridCollectionManager:
    """
    Entry point for creating hybrid collections.

    Holds the storage engine, name validator and settings shared by all
    requests; every call builds and runs a fresh
    `CreateHybridCollectionRequest`, so no state is carried between calls.
    """

    def __init__(
        self,
        storage: "StorageEngine",
        name_validator: Optional[NameValidator] = None,
        settings: Optional[HybridOpsSettings] = None
    ):
        """
        Initialize the HybridCollectionManager.

        Args:
            storage: The storage engine collections are created in.
            name_validator: Gate for collection names.
            settings: Settings shared by all requests.
        """
        self._storage = storage
        self._name_validator = name_validator or CollectionNameValidator()
        self._settings = settings or load_settings()

    def create_hybrid_collection(
        self,
        collection_name: str,
        field_types: Mapping[str, Any],
        field_index_params: Mapping[str, Dict[str, Any]],
        field_params: Mapping[str, str],
        extra_params: Optional[Mapping[str, Any]] = None
    ) -> Status:
        """
        Creates a hybrid collection from the three per-field maps of a
        client call.

        Args:
            collection_name: The proposed collection name.
            field_types: Field name to field type, in declaration order.
            field_index_params: Field name to index-parameter object.
            field_params: Field name to JSON-encoded field parameters.
            extra_params: Collection-level parameters ("segment_size").

        Returns:
            The status of the request.
        """
        request = CreateHybridCollectionRequest.create(
            self._storage,
            collection_name,
            field_types,
            field_index_params,
            field_params,
            extra_params,
            name_validator=self._name_validator,
            settings=self._settings
        )
        return request.execute()

    def create_collection_from_fields(
        self,
        collection_name: str,
        fields: Sequence[HybridFieldSpec],
        extra_params: Optional[Mapping[str, Any]] = None
    ) -> Status:
        """Creates a hybrid collection from an ordered list of field records."""
        request = CreateHybridCollectionRequest(
            self._storage,
            collection_name,
            fields,
            extra_params=extra_params,
            name_validator=self._name_validator,
            settings=self._settings
        )
        return request.execute()
