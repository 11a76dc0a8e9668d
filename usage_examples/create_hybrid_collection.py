"""
Create Hybrid Collection Example

Demonstrates how to create a hybrid collection from the three per-field
parameter maps of a client call, and how failures are reported.

Runs against the in-memory storage engine by default. Set
HYBRID_EXAMPLE_BACKEND=milvus to create the collection on the Milvus server
configured through the MILVUS_* environment variables.
"""

import json
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from collection_operations import DataType, HybridCollectionManager
from config import configure_logging, load_settings
from storage import InMemoryStorageEngine, MilvusStorageEngine

from example_utils import print_section, print_step, print_success, print_info, print_error, print_note


COLLECTION_NAME = "example_hybrid_collection"
VECTOR_DIM = 128


def main():
    """Main function to demonstrate hybrid collection creation."""
    print_section("Create Hybrid Collection Example")

    # Step 1: Initialize Manager
    print_step(1, "Initialize Manager")
    settings = load_settings()
    configure_logging(settings)
    if os.environ.get("HYBRID_EXAMPLE_BACKEND") == "milvus":
        storage = MilvusStorageEngine(settings)
        print_info("Backend", f"Milvus at {settings.connection.host}:{settings.connection.port}")
    else:
        storage = InMemoryStorageEngine()
        print_info("Backend", "in-memory")
    manager = HybridCollectionManager(storage, settings=settings)
    print_success("Manager initialized")

    # Step 2: Describe Fields
    print_step(2, "Describe Fields")
    field_types = {
        "price": DataType.DOUBLE,
        "category": DataType.INT32,
        "embedding": DataType.FLOAT_VECTOR,
    }
    field_index_params = {
        "price": {},
        "category": {},
        "embedding": {"name": "embedding_index", "nlist": 1024},
    }
    field_params = {
        "price": "",
        "category": "",
        "embedding": json.dumps({
            "dimension": VECTOR_DIM,
            "metric_type": "L2",
            "index_type": "IVF_FLAT",
        }),
    }
    extra_params = {"segment_size": 512}
    print_info("Fields", ", ".join(field_types))
    print_info("Vector dimension", VECTOR_DIM)

    # Step 3: Create Collection
    print_step(3, "Create Collection")
    status = manager.create_hybrid_collection(
        COLLECTION_NAME, field_types, field_index_params, field_params, extra_params
    )
    if status.ok:
        print_success(f"Collection '{COLLECTION_NAME}' created")
    else:
        print_error(f"[{status.code.value}] {status.message}")

    # Step 4: Create It Again
    print_step(4, "Create the Same Collection Again")
    status = manager.create_hybrid_collection(
        COLLECTION_NAME, field_types, field_index_params, field_params, extra_params
    )
    print_info("Result", status.code.value)
    print_info("Message", status.message)
    print_note("A name collision is reported as INVALID_COLLECTION_NAME")

    # Step 5: Unknown Metric Type
    print_step(5, "Reject an Unknown Metric Type")
    bad_params = dict(field_params, embedding=json.dumps({"dimension": VECTOR_DIM, "metric_type": "MANHATTAN"}))
    status = manager.create_hybrid_collection(
        "example_bad_metric", field_types, field_index_params, bad_params
    )
    print_info("Result", status.code.value)
    print_info("Message", status.message)

    print_section("Example Completed")


if __name__ == "__main__":
    main()
