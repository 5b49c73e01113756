import logging

from fastapi import APIRouter, Depends

from exam_admin.config import Settings
from exam_admin.database import get_document_store, get_settings
from exam_admin.errors import CLIENT_ERRORS, upstream_failure
from exam_admin.services import candidates as candidate_service
from exam_admin.stores import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Candidates"])


@router.get("")
async def list_candidates(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    try:
        candidates = await candidate_service.list_candidates(store, settings)
        return {"message": "Candidates fetched successfully", "candidates": candidates}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error fetching candidates")
        raise upstream_failure("Failed to fetch candidates", e) from e


@router.delete("")
async def delete_candidates(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    """
    Delete every candidate together with their sub-collections.
    Not transactional: on failure the candidates already purged stay deleted.
    """
    try:
        return await candidate_service.delete_all_candidates(store, settings)
    except Exception as e:
        logger.exception("Error deleting candidates data")
        raise upstream_failure("Internal server error", e) from e
