from typing import Any, Dict, List

from exam_admin.config import Settings
from exam_admin.errors import NotFoundError
from exam_admin.stores import DocumentStore, join_path


async def list_concerns(store: DocumentStore, settings: Settings) -> List[Dict[str, Any]]:
    docs = await store.list_documents(settings.concerns_collection)
    if not docs:
        raise NotFoundError("No concerns found")
    return [doc.to_dict() for doc in docs]


async def delete_concern(store: DocumentStore, settings: Settings, concern_id: str) -> None:
    await store.delete_document(join_path(settings.concerns_collection, concern_id))
