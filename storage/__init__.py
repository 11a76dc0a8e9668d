"""
Storage Module

Storage engines that physically create hybrid collections:
- StorageEngine: the interface the create pipeline submits schemas to
- InMemoryStorageEngine: process-local catalog
- MilvusStorageEngine: collections on a Milvus server via PyMilvus
"""

from .base import StorageEngine
from .memory_backend import InMemoryStorageEngine
from .milvus_backend import MilvusStorageEngine

__all__ = [
    'StorageEngine',
    'InMemoryStorageEngine',
    'MilvusStorageEngine',
]
