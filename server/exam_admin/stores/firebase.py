"""
Firebase-backed stores.

Firestore serves as the document store and the Realtime Database as the
key-tree store. The Admin SDK is blocking, so every call runs in a worker
thread and the request task suspends until it returns.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, db, firestore
from google.api_core import exceptions as google_exceptions

from exam_admin.config import Settings
from exam_admin.errors import ExamAdminError, NotFoundError, UpstreamStoreError
from exam_admin.stores.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    KeyTreeStore,
    join_path,
)

logger = logging.getLogger(__name__)

# Realtime Database server-value placeholder
RTDB_SERVER_TIMESTAMP = {".sv": "timestamp"}


def init_firebase_app(settings: Settings) -> firebase_admin.App:
    """Initialize (or reuse) the default Firebase app from settings."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if settings.firebase_credentials_path:
        cred = credentials.Certificate(settings.firebase_credentials_path)
    else:
        cred = credentials.ApplicationDefault()

    options = {}
    if settings.firebase_database_url:
        options["databaseURL"] = settings.firebase_database_url
    if settings.firebase_project_id:
        options["projectId"] = settings.firebase_project_id

    return firebase_admin.initialize_app(cred, options)


def _replace_sentinel(value: Any, replacement: Any) -> Any:
    if value is SERVER_TIMESTAMP:
        return replacement
    if isinstance(value, dict):
        return {k: _replace_sentinel(v, replacement) for k, v in value.items()}
    if isinstance(value, list):
        return [_replace_sentinel(v, replacement) for v in value]
    return value


async def _call(store_name: str, fn: Callable) -> Any:
    try:
        return await asyncio.to_thread(fn)
    except ExamAdminError:
        raise
    except Exception as e:
        logger.error(f"❌ {store_name} call failed: {e}")
        raise UpstreamStoreError(f"{store_name} request failed", details=str(e)) from e


def _to_document(snapshot) -> Document:
    return Document(id=snapshot.id, path=snapshot.reference.path, data=snapshot.to_dict() or {})


class FirestoreDocumentStore(DocumentStore):
    """Document store on Cloud Firestore."""

    def __init__(self, app: Optional[firebase_admin.App] = None):
        self.client = firestore.client(app)

    async def get_document(self, path: str) -> Optional[Document]:
        def _get():
            snapshot = self.client.document(path).get()
            return _to_document(snapshot) if snapshot.exists else None

        return await _call("Firestore", _get)

    async def list_documents(self, collection_path: str, order_by: Optional[str] = None) -> List[Document]:
        def _list():
            query = self.client.collection(collection_path)
            if order_by:
                query = query.order_by(order_by)
            return [_to_document(s) for s in query.stream()]

        return await _call("Firestore", _list)

    async def where_equals(self, collection_path: str, field_name: str, value: Any) -> List[Document]:
        def _query():
            query = self.client.collection(collection_path).where(
                filter=firestore.FieldFilter(field_name, "==", value)
            )
            return [_to_document(s) for s in query.stream()]

        return await _call("Firestore", _query)

    async def add_document(self, collection_path: str, data: Dict[str, Any]) -> str:
        payload = _replace_sentinel(data, firestore.SERVER_TIMESTAMP)

        def _add():
            _, doc_ref = self.client.collection(collection_path).add(payload)
            return doc_ref.id

        return await _call("Firestore", _add)

    async def set_document(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        payload = _replace_sentinel(data, firestore.SERVER_TIMESTAMP)
        await _call("Firestore", lambda: self.client.document(path).set(payload, merge=merge))

    async def update_document(self, path: str, data: Dict[str, Any]) -> None:
        payload = _replace_sentinel(data, firestore.SERVER_TIMESTAMP)

        def _update():
            try:
                self.client.document(path).update(payload)
            except google_exceptions.NotFound as e:
                raise NotFoundError(f"No document to update: {path}", details=str(e)) from e

        await _call("Firestore", _update)

    async def delete_document(self, path: str) -> None:
        await _call("Firestore", lambda: self.client.document(path).delete())

    async def list_subcollections(self, document_path: str) -> List[str]:
        def _collections():
            return [join_path(document_path, c.id) for c in self.client.document(document_path).collections()]

        return await _call("Firestore", _collections)

    async def list_document_paths(self, collection_path: str) -> List[str]:
        def _refs():
            # list_documents() also yields missing documents, unlike stream()
            return [ref.path for ref in self.client.collection(collection_path).list_documents()]

        return await _call("Firestore", _refs)


class RealtimeKeyTreeStore(KeyTreeStore):
    """Key-tree store on the Firebase Realtime Database."""

    def __init__(self, app: Optional[firebase_admin.App] = None):
        self.app = app

    def _ref(self, path: str):
        return db.reference("/" + path.strip("/"), app=self.app)

    async def get(self, path: str) -> Any:
        return await _call("Realtime Database", lambda: self._ref(path).get())

    async def set(self, path: str, value: Any) -> None:
        payload = _replace_sentinel(value, RTDB_SERVER_TIMESTAMP)
        await _call("Realtime Database", lambda: self._ref(path).set(payload))

    async def delete(self, path: str) -> None:
        await _call("Realtime Database", lambda: self._ref(path).delete())
