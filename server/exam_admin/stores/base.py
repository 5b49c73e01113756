"""
Store interfaces.

Two external stores back the application:

- ``DocumentStore``: collections of documents, each document may own
  sub-collections. Paths are slash-joined, e.g. ``Exams/Math/Questions/abc``.
- ``KeyTreeStore``: a single JSON tree addressed by slash-joined paths,
  e.g. ``Results/Math/REG001``.

Both are async so handlers suspend on every store round-trip.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class _ServerTimestamp:
    """Placeholder replaced by the store's own clock at write time."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


def join_path(*parts: str) -> str:
    return "/".join(str(p).strip("/") for p in parts if p not in (None, ""))


def parent_path(path: str) -> str:
    return path.rsplit("/", 1)[0] if "/" in path else ""


@dataclass
class Document:
    """Snapshot of one document."""
    id: str
    path: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **self.data}


class DocumentStore(ABC):
    """Hierarchical document database."""

    @abstractmethod
    async def get_document(self, path: str) -> Optional[Document]:
        """Return the document at ``path`` or None."""

    @abstractmethod
    async def list_documents(self, collection_path: str, order_by: Optional[str] = None) -> List[Document]:
        """List a collection, by document id unless ``order_by`` names a field."""

    @abstractmethod
    async def where_equals(self, collection_path: str, field_name: str, value: Any) -> List[Document]:
        """Documents in a collection whose ``field_name`` equals ``value``."""

    @abstractmethod
    async def add_document(self, collection_path: str, data: Dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""

    @abstractmethod
    async def set_document(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        ...

    @abstractmethod
    async def update_document(self, path: str, data: Dict[str, Any]) -> None:
        """Update fields of an existing document. Raises NotFoundError if absent."""

    @abstractmethod
    async def delete_document(self, path: str) -> None:
        """Delete one document. Its sub-collections are left in place."""

    @abstractmethod
    async def list_subcollections(self, document_path: str) -> List[str]:
        """Paths of the sub-collections owned by a document."""

    @abstractmethod
    async def list_document_paths(self, collection_path: str) -> List[str]:
        """
        Paths of every document in a collection, including missing documents
        that still own sub-collections.
        """


class KeyTreeStore(ABC):
    """Path-addressed JSON tree."""

    @abstractmethod
    async def get(self, path: str) -> Any:
        """Value at ``path``, or None when nothing is stored there."""

    @abstractmethod
    async def set(self, path: str, value: Any) -> None:
        """Replace the value at ``path``."""

    @abstractmethod
    async def delete(self, path: str) -> None:
        ...
