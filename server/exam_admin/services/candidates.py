"""
Candidate listing and cascading bulk delete.

The document store does not delete sub-collections with their parent, so
the purge walks each candidate's tree first, deletes every descendant
document leaf-to-root and only then the candidate itself. Nothing is
transactional: a failure part way leaves the remaining candidates in
place, and running the purge again picks up whatever is left.
"""
import logging
from typing import Any, Dict, List

from exam_admin.config import Settings
from exam_admin.errors import NotFoundError
from exam_admin.stores import DocumentStore, join_path

logger = logging.getLogger(__name__)


async def list_candidates(store: DocumentStore, settings: Settings) -> List[Dict[str, Any]]:
    docs = await store.list_documents(settings.candidates_collection)
    if not docs:
        raise NotFoundError("No candidates found")
    return [doc.to_dict() for doc in docs]


async def collect_descendants(store: DocumentStore, document_path: str) -> List[str]:
    """
    Paths of every document below ``document_path``, deepest first.

    Missing documents that still own sub-collections are included so their
    children are reached.
    """
    paths: List[str] = []
    for collection_path in await store.list_subcollections(document_path):
        for path in await store.list_document_paths(collection_path):
            paths.extend(await collect_descendants(store, path))
            paths.append(path)
    return paths


async def purge_candidate(store: DocumentStore, settings: Settings, candidate_path: str) -> int:
    """Delete one candidate and everything under it. Returns delete calls issued."""
    deleted = 0

    answers_path = join_path(candidate_path, settings.purge_answers_collection, settings.purge_answers_document)
    if await store.get_document(answers_path) is not None:
        await store.delete_document(answers_path)
        deleted += 1

    for path in await collect_descendants(store, candidate_path):
        await store.delete_document(path)
        deleted += 1

    await store.delete_document(candidate_path)
    return deleted + 1


async def delete_all_candidates(store: DocumentStore, settings: Settings) -> Dict[str, Any]:
    collection = settings.candidates_purge_collection
    candidates = await store.list_document_paths(collection)
    logger.info(f"🧹 Purging {len(candidates)} candidates from '{collection}'")

    documents_deleted = 0
    for index, candidate_path in enumerate(candidates, start=1):
        documents_deleted += await purge_candidate(store, settings, candidate_path)
        logger.info(f"🗑️ Candidate {candidate_path.rsplit('/', 1)[-1]} purged ({index}/{len(candidates)})")

    return {
        "message": "Candidates collection and related data deleted successfully",
        "candidatesDeleted": len(candidates),
        "documentsDeleted": documents_deleted,
    }
