"""
In-memory storage for exams, candidates, results and key-tree records.
Used for local development and tests; production uses the Firebase stores.
"""
import copy
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from exam_admin.errors import NotFoundError
from exam_admin.stores.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    KeyTreeStore,
    join_path,
    parent_path,
)


def _resolve_timestamps(value: Any, now: Any) -> Any:
    if value is SERVER_TIMESTAMP:
        return now
    if isinstance(value, dict):
        return {k: _resolve_timestamps(v, now) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_timestamps(v, now) for v in value]
    return copy.deepcopy(value)


def _deep_merge(existing: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(existing)
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _split(path: str) -> List[str]:
    return [segment for segment in path.split("/") if segment]


class MemoryDocumentStore(DocumentStore):
    """Document store kept in a dict: document path -> fields."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}

    def _snapshot(self, path: str) -> Document:
        return Document(
            id=path.rsplit("/", 1)[-1],
            path=path,
            data=copy.deepcopy(self.documents[path]),
        )

    def _collection_paths(self, collection_path: str) -> List[str]:
        collection_path = collection_path.strip("/")
        paths = [p for p in self.documents if parent_path(p) == collection_path]
        return sorted(paths, key=lambda p: p.rsplit("/", 1)[-1])

    async def get_document(self, path: str) -> Optional[Document]:
        path = path.strip("/")
        if path not in self.documents:
            return None
        return self._snapshot(path)

    async def list_documents(self, collection_path: str, order_by: Optional[str] = None) -> List[Document]:
        docs = [self._snapshot(p) for p in self._collection_paths(collection_path)]
        if order_by:
            # Documents without the field are left out, as Firestore does
            docs = [d for d in docs if order_by in d.data]
            docs.sort(key=lambda d: d.data[order_by])
        return docs

    async def where_equals(self, collection_path: str, field_name: str, value: Any) -> List[Document]:
        return [
            self._snapshot(p)
            for p in self._collection_paths(collection_path)
            if field_name in self.documents[p] and self.documents[p][field_name] == value
        ]

    async def add_document(self, collection_path: str, data: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        await self.set_document(join_path(collection_path, doc_id), data)
        return doc_id

    async def set_document(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        path = path.strip("/")
        resolved = _resolve_timestamps(data, datetime.now(timezone.utc))
        if merge and path in self.documents:
            self.documents[path] = _deep_merge(self.documents[path], resolved)
        else:
            self.documents[path] = resolved

    async def update_document(self, path: str, data: Dict[str, Any]) -> None:
        path = path.strip("/")
        if path not in self.documents:
            raise NotFoundError(f"No document to update: {path}")
        resolved = _resolve_timestamps(data, datetime.now(timezone.utc))
        self.documents[path].update(resolved)

    async def delete_document(self, path: str) -> None:
        self.documents.pop(path.strip("/"), None)

    async def list_subcollections(self, document_path: str) -> List[str]:
        prefix = document_path.strip("/") + "/"
        names = set()
        for path in self.documents:
            if path.startswith(prefix):
                names.add(path[len(prefix):].split("/", 1)[0])
        return [prefix + name for name in sorted(names)]

    async def list_document_paths(self, collection_path: str) -> List[str]:
        # A stored path below a document implies the document, stored or not
        prefix = collection_path.strip("/") + "/"
        ids = {path[len(prefix):].split("/", 1)[0] for path in self.documents if path.startswith(prefix)}
        return [prefix + doc_id for doc_id in sorted(ids)]


class MemoryKeyTreeStore(KeyTreeStore):
    """Key-tree store kept as nested dicts."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.tree: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, path: str) -> Any:
        node: Any = self.tree
        for segment in _split(path):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        if node == {}:
            return None
        return copy.deepcopy(node)

    async def set(self, path: str, value: Any) -> None:
        value = _resolve_timestamps(value, int(time.time() * 1000))
        if value is None or value == {}:
            await self.delete(path)
            return
        segments = _split(path)
        if not segments:
            self.tree = value
            return
        node = self.tree
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[segments[-1]] = value

    async def delete(self, path: str) -> None:
        segments = _split(path)
        if not segments:
            self.tree = {}
            return
        trail = [self.tree]
        node = self.tree
        for segment in segments[:-1]:
            node = node.get(segment) if isinstance(node, dict) else None
            if not isinstance(node, dict):
                return
            trail.append(node)
        node.pop(segments[-1], None)
        # Empty branches do not exist in a key tree
        for depth in range(len(trail) - 1, 0, -1):
            if trail[depth]:
                break
            trail[depth - 1].pop(segments[depth - 1], None)
