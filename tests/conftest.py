import json

import pytest

from collection_operations import DataType, HybridCollectionManager, Status
from config import CollectionSettings, HybridOpsSettings, MonitoringSettings
from storage import InMemoryStorageEngine, StorageEngine

DEFAULT_SEGMENT_SIZE = 1024


class RecordingStorage(StorageEngine):
    """Storage engine that records submissions and returns a canned result."""

    def __init__(self, status=None, error=None):
        self.status = status or Status.success()
        self.error = error
        self.calls = []

    def create_hybrid_collection(self, collection_schema, fields_schema):
        self.calls.append((collection_schema, fields_schema))
        if self.error is not None:
            raise self.error
        return self.status

    def has_collection(self, collection_name):
        return any(c.collection_id == collection_name for c, _ in self.calls)


@pytest.fixture
def settings():
    return HybridOpsSettings(
        collection=CollectionSettings(default_index_file_size=DEFAULT_SEGMENT_SIZE),
        monitoring=MonitoringSettings(log_level="DEBUG", enable_timing=True)
    )


@pytest.fixture
def make_storage():
    def factory(status=None, error=None):
        return RecordingStorage(status=status, error=error)
    return factory


@pytest.fixture
def storage(make_storage):
    return make_storage()


@pytest.fixture
def memory_storage():
    return InMemoryStorageEngine()


@pytest.fixture
def manager(storage, settings):
    return HybridCollectionManager(storage, settings=settings)


@pytest.fixture
def vector_request():
    """Maps for one scalar field and one 128-d float vector field."""
    field_types = {
        "age": DataType.INT32,
        "vec": DataType.FLOAT_VECTOR,
    }
    field_index_params = {
        "age": {},
        "vec": {"name": "vec_index", "nlist": 1024},
    }
    field_params = {
        "age": "",
        "vec": json.dumps({"dimension": 128, "metric_type": "L2", "index_type": "IVF_FLAT"}),
    }
    return field_types, field_index_params, field_params
