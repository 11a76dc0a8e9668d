from collection_operations.schema import CollectionSchema, DataType, FieldSchema, FieldsSchema
from hybrid_ops_exceptions import StatusCode


def make_schema(name):
    collection = CollectionSchema(collection_id=name, dimension=4, index_file_size=1024)
    fields = FieldsSchema(fields_schema=(
        FieldSchema(collection_id=name, field_name="vec", field_type=DataType.FLOAT_VECTOR),
    ))
    return collection, fields


def test_create_and_describe(memory_storage):
    collection, fields = make_schema("c1")
    assert memory_storage.create_hybrid_collection(collection, fields).ok
    assert memory_storage.has_collection("c1")
    assert memory_storage.describe_collection("c1") == (collection, fields)
    assert memory_storage.list_collections() == ["c1"]


def test_duplicate_create_reports_already_exists(memory_storage):
    memory_storage.create_hybrid_collection(*make_schema("c1"))
    status = memory_storage.create_hybrid_collection(*make_schema("c1"))
    assert status.code == StatusCode.ALREADY_EXISTS
    assert "c1" in status.message


def test_drop_collection(memory_storage):
    memory_storage.create_hybrid_collection(*make_schema("c1"))
    assert memory_storage.drop_collection("c1").ok
    assert not memory_storage.has_collection("c1")
    assert memory_storage.describe_collection("c1") is None
    assert memory_storage.drop_collection("c1").code == StatusCode.DB_ERROR
