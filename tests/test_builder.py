import json

import pytest

from collection_operations.builder import SchemaBuilder, join_field_maps
from collection_operations.schema import DataType, HybridFieldSpec
from collection_operations.type_mapper import EngineType, MetricType
from config import CollectionSettings
from hybrid_ops_exceptions import (
    FieldParamsParseError,
    InvalidArgumentError,
    InvalidDimensionError,
    InvalidEnumValueError,
    MissingFieldError,
    StatusCode
)


@pytest.fixture
def builder():
    return SchemaBuilder(CollectionSettings(default_index_file_size=1024))


def vector_spec(name, params, data_type=DataType.FLOAT_VECTOR, index_params=None):
    return HybridFieldSpec(
        name=name,
        data_type=data_type,
        index_params=index_params or {},
        field_params=json.dumps(params)
    )


def test_join_field_maps_keeps_declaration_order(vector_request):
    specs = join_field_maps(*vector_request)
    assert [s.name for s in specs] == ["age", "vec"]
    assert specs[1].data_type is DataType.FLOAT_VECTOR
    assert specs[1].index_params == {"name": "vec_index", "nlist": 1024}


def test_join_field_maps_ignores_undeclared_entries(vector_request):
    field_types, field_index_params, field_params = vector_request
    field_index_params = dict(field_index_params, extra={})
    specs = join_field_maps(field_types, field_index_params, field_params)
    assert [s.name for s in specs] == ["age", "vec"]


def test_missing_index_params_entry():
    with pytest.raises(MissingFieldError) as exc_info:
        join_field_maps({"x": DataType.INT64}, {}, {"x": ""})
    error = exc_info.value
    assert error.field_name == "x"
    assert error.map_name == "field_index_params"
    assert error.status_code == StatusCode.MISSING_FIELD


def test_missing_field_params_entry():
    with pytest.raises(MissingFieldError) as exc_info:
        join_field_maps({"x": DataType.INT64}, {"x": {}}, {})
    assert exc_info.value.map_name == "field_params"


def test_malformed_index_params():
    with pytest.raises(InvalidArgumentError):
        join_field_maps({"x": DataType.INT64}, {"x": ["not", "an", "object"]}, {"x": ""})


def test_build_single_vector_field(builder, vector_request):
    collection, fields = builder.build_from_maps("coll1", *vector_request, extra_params={})

    assert collection.id == "coll1"
    assert collection.dimension == 128
    assert collection.metric_type == MetricType.L2
    assert collection.engine_type == EngineType.FAISS_IVFFLAT
    assert collection.index_file_size == 1024

    assert len(fields) == 2
    vec = fields.get_field_by_name("vec")
    assert vec.collection_id == "coll1"
    assert vec.field_type == DataType.FLOAT_VECTOR
    assert vec.index_name == "vec_index"
    assert json.loads(vec.index_param) == {"name": "vec_index", "nlist": 1024}
    assert vec.field_params == vector_request[2]["vec"]


def test_index_param_is_canonical_json(builder):
    spec = HybridFieldSpec(name="age", data_type=DataType.INT32, index_params={"b": 1, "a": 2})
    _, fields = builder.build("c", [spec])
    field = fields.get_field_by_name("age")
    assert field.index_param == '{"a":2,"b":1}'
    assert field.index_name == ""


def test_scalar_only_collection(builder):
    specs = [
        HybridFieldSpec(name="age", data_type=DataType.INT32, field_params="not json"),
        HybridFieldSpec(name="score", data_type=DataType.DOUBLE),
    ]
    collection, fields = builder.build("scalars", specs)
    assert collection.dimension == 0
    assert collection.metric_type == 0
    assert collection.engine_type == 0
    assert fields.get_field_by_name("age").field_params == "not json"


def test_segment_size_overrides_default(builder):
    spec = vector_spec("vec", {"dimension": 8})
    collection, _ = builder.build("c", [spec], extra_params={"segment_size": 512})
    assert collection.index_file_size == 512


@pytest.mark.parametrize("segment_size", ["512", 1.5, True])
def test_non_integer_segment_size(builder, segment_size):
    with pytest.raises(FieldParamsParseError):
        builder.build("c", [], extra_params={"segment_size": segment_size})


def test_last_vector_field_wins(builder):
    specs = [
        vector_spec("first", {"dimension": 64, "metric_type": "IP", "index_type": "HNSW"}),
        vector_spec("second", {"dimension": 16, "metric_type": "HAMMING", "index_type": "BIN_FLAT"},
                    data_type=DataType.BINARY_VECTOR),
    ]
    collection, _ = builder.build("c", specs)
    assert collection.dimension == 16
    assert collection.metric_type == MetricType.HAMMING
    assert collection.engine_type == EngineType.FAISS_BIN_IDMAP


def test_later_vector_without_dimension_keeps_earlier_dimension(builder):
    specs = [
        vector_spec("first", {"dimension": 64, "metric_type": "IP"}),
        vector_spec("second", {"index_type": "FLAT"}),
    ]
    collection, _ = builder.build("c", specs)
    assert collection.dimension == 64
    # metric and index type come only from the last vector field
    assert collection.metric_type == 0
    assert collection.engine_type == EngineType.FAISS_IDMAP


def test_invalid_vector_params_json(builder):
    spec = HybridFieldSpec(name="vec", data_type=DataType.FLOAT_VECTOR, field_params="{dimension")
    with pytest.raises(FieldParamsParseError) as exc_info:
        builder.build("c", [spec])
    assert exc_info.value.field_name == "vec"
    assert exc_info.value.status_code == StatusCode.UNEXPECTED_ERROR


def test_vector_params_must_be_object(builder):
    spec = HybridFieldSpec(name="vec", data_type=DataType.FLOAT_VECTOR, field_params="[128]")
    with pytest.raises(FieldParamsParseError):
        builder.build("c", [spec])


@pytest.mark.parametrize("dimension", [-1, 65536, 70000, "128", 12.5, True])
def test_invalid_dimension(builder, dimension):
    with pytest.raises(InvalidDimensionError) as exc_info:
        builder.build("c", [vector_spec("vec", {"dimension": dimension})])
    assert exc_info.value.field_name == "vec"
    assert exc_info.value.status_code == StatusCode.INVALID_DIMENSION


def test_max_dimension_accepted(builder):
    collection, _ = builder.build("c", [vector_spec("vec", {"dimension": 65535})])
    assert collection.dimension == 65535


def test_unknown_metric_type(builder):
    with pytest.raises(InvalidEnumValueError):
        builder.build("c", [vector_spec("vec", {"dimension": 8, "metric_type": "MANHATTAN"})])


def test_duplicate_field_names(builder):
    specs = [
        HybridFieldSpec(name="age", data_type=DataType.INT32),
        HybridFieldSpec(name="age", data_type=DataType.INT64),
    ]
    with pytest.raises(InvalidArgumentError):
        builder.build("c", specs)


@pytest.mark.parametrize("index_name", [None, 5])
def test_non_string_index_name(builder, index_name):
    spec = vector_spec("vec", {"dimension": 8}, index_params={"name": index_name, "nlist": 16})
    with pytest.raises(FieldParamsParseError) as exc_info:
        builder.build("c", [spec])
    assert exc_info.value.field_name == "vec"
    assert exc_info.value.status_code == StatusCode.UNEXPECTED_ERROR


def test_index_param_keeps_non_ascii_text(builder):
    spec = HybridFieldSpec(name="title", data_type=DataType.STRING, index_params={"name": "índice_名"})
    _, fields = builder.build("c", [spec])
    field = fields.get_field_by_name("title")
    assert field.index_param == '{"name":"índice_名"}'
    assert field.index_name == "índice_名"


def test_assemble_resolves_vector_types(builder):
    collection = builder.assemble("c", 64, 512, {"metric_type": "IP", "index_type": "HNSW"})
    assert collection.id == "c"
    assert collection.dimension == 64
    assert collection.index_file_size == 512
    assert collection.metric_type == MetricType.IP
    assert collection.engine_type == EngineType.HNSW


def test_assemble_without_vector_config(builder):
    collection = builder.assemble("c", 0, 1024, {})
    assert collection.metric_type == 0
    assert collection.engine_type == 0
