"""
Metric and engine type resolution.

Vector field parameters name their metric and index type as strings. This
module holds the fixed lookup tables that translate those strings into the
integer codes stored on the collection schema.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from hybrid_ops_exceptions import InvalidEnumValueError


class MetricType(int, Enum):
    """Distance functions for vector similarity."""
    INVALID = 0
    L2 = 1
    IP = 2
    HAMMING = 3
    JACCARD = 4
    TANIMOTO = 5
    SUBSTRUCTURE = 6
    SUPERSTRUCTURE = 7


class EngineType(int, Enum):
    """Indexing algorithms applied to a vector field."""
    INVALID = 0
    FAISS_IDMAP = 1
    FAISS_IVFFLAT = 2
    FAISS_IVFSQ8 = 3
    NSG_MIX = 4
    FAISS_IVFSQ8H = 5
    FAISS_PQ = 6
    SPTAG_KDT = 7
    SPTAG_BKT = 8
    FAISS_BIN_IDMAP = 9
    FAISS_BIN_IVFFLAT = 10
    HNSW = 11
    ANNOY = 12
    FAISS_IVFSQ8NR = 13
    HNSW_SQ8NM = 14


METRIC_TYPE_MAP: Mapping[str, MetricType] = MappingProxyType({
    "L2": MetricType.L2,
    "IP": MetricType.IP,
    "HAMMING": MetricType.HAMMING,
    "JACCARD": MetricType.JACCARD,
    "TANIMOTO": MetricType.TANIMOTO,
    "SUBSTRUCTURE": MetricType.SUBSTRUCTURE,
    "SUPERSTRUCTURE": MetricType.SUPERSTRUCTURE,
})

# Both the index names and their legacy spellings are accepted
ENGINE_TYPE_MAP: Mapping[str, EngineType] = MappingProxyType({
    "FLAT": EngineType.FAISS_IDMAP,
    "IVF_FLAT": EngineType.FAISS_IVFFLAT,
    "IVFFLAT": EngineType.FAISS_IVFFLAT,
    "IVF_SQ8": EngineType.FAISS_IVFSQ8,
    "IVFSQ8": EngineType.FAISS_IVFSQ8,
    "RNSG": EngineType.NSG_MIX,
    "IVF_SQ8_HYBRID": EngineType.FAISS_IVFSQ8H,
    "IVFSQ8H": EngineType.FAISS_IVFSQ8H,
    "IVF_PQ": EngineType.FAISS_PQ,
    "IVFPQ": EngineType.FAISS_PQ,
    "SPTAG_KDT_RNT": EngineType.SPTAG_KDT,
    "SPTAGKDT": EngineType.SPTAG_KDT,
    "SPTAG_BKT_RNT": EngineType.SPTAG_BKT,
    "SPTAGBKT": EngineType.SPTAG_BKT,
    "BIN_FLAT": EngineType.FAISS_BIN_IDMAP,
    "BIN_IVF_FLAT": EngineType.FAISS_BIN_IVFFLAT,
    "HNSW": EngineType.HNSW,
    "ANNOY": EngineType.ANNOY,
    "IVF_SQ8NR": EngineType.FAISS_IVFSQ8NR,
    "HNSW_SQ8NM": EngineType.HNSW_SQ8NM,
})


def _lookup(table: Mapping[str, Enum], key: str, value: Any) -> int:
    if not isinstance(value, str) or value not in table:
        raise InvalidEnumValueError(key, value, supported=sorted(table))
    return int(table[value])


def resolve_metric_type(name: Any) -> int:
    """
    Returns the metric type code for `name`.

    Raises:
        InvalidEnumValueError: If `name` is not a known metric type string.
    """
    return _lookup(METRIC_TYPE_MAP, "metric_type", name)


def resolve_engine_type(name: Any) -> int:
    """
    Returns the engine type code for the index type `name`.

    Raises:
        InvalidEnumValueError: If `name` is not a known index type string.
    """
    return _lookup(ENGINE_TYPE_MAP, "index_type", name)


def resolve_vector_types(vector_config: Dict[str, Any]) -> Tuple[int, int]:
    """
    Resolves the metric and engine type codes named by a vector field's
    parameters.

    A missing "metric_type" or "index_type" key leaves the corresponding
    code at 0.

    Args:
        vector_config: The parsed parameters of the deciding vector field.

    Returns:
        A tuple of (metric_type code, engine_type code).

    Raises:
        InvalidEnumValueError: If either string is not in its lookup table.
    """
    metric_type = 0
    engine_type = 0
    if "metric_type" in vector_config:
        metric_type = resolve_metric_type(vector_config["metric_type"])
    if "index_type" in vector_config:
        engine_type = resolve_engine_type(vector_config["index_type"])
    return metric_type, engine_type
