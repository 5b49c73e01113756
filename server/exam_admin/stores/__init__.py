"""
Store clients for the document store and the key-tree store.
"""
from exam_admin.stores.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    KeyTreeStore,
    join_path,
)
from exam_admin.stores.memory import MemoryDocumentStore, MemoryKeyTreeStore

__all__ = [
    "SERVER_TIMESTAMP",
    "Document",
    "DocumentStore",
    "KeyTreeStore",
    "join_path",
    "MemoryDocumentStore",
    "MemoryKeyTreeStore",
]
