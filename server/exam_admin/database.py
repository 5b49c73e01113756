"""
Store wiring.

The two store clients are built once at startup, kept on ``app.state`` and
handed to route handlers through FastAPI dependencies.
"""
import logging
from datetime import datetime
from typing import Tuple

from fastapi import FastAPI, Request

from exam_admin.config import Settings
from exam_admin.stores import DocumentStore, KeyTreeStore, MemoryDocumentStore, MemoryKeyTreeStore

logger = logging.getLogger(__name__)


def build_stores(settings: Settings) -> Tuple[DocumentStore, KeyTreeStore]:
    """Create the document and key-tree stores for the configured backend."""
    backend = settings.store_backend.lower()
    if backend == "memory":
        return MemoryDocumentStore(), MemoryKeyTreeStore()
    if backend == "firebase":
        # Imported lazily so the memory backend runs without credentials
        from exam_admin.stores.firebase import (
            FirestoreDocumentStore,
            RealtimeKeyTreeStore,
            init_firebase_app,
        )

        firebase_app = init_firebase_app(settings)
        return FirestoreDocumentStore(firebase_app), RealtimeKeyTreeStore(firebase_app)
    raise ValueError(f"Unknown store backend: {settings.store_backend}")


def init_db(app: FastAPI, settings: Settings) -> None:
    """Attach store clients to the app unless they were injected already."""
    if getattr(app.state, "document_store", None) is not None:
        return
    document_store, key_tree_store = build_stores(settings)
    app.state.document_store = document_store
    app.state.key_tree_store = key_tree_store
    logger.info(f"📚 Stores ready (backend: {settings.store_backend})")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_key_tree_store(request: Request) -> KeyTreeStore:
    return request.app.state.key_tree_store


def get_today() -> str:
    """Today's date on the server's local clock, as YYYY-MM-DD."""
    return datetime.now().strftime("%Y-%m-%d")
