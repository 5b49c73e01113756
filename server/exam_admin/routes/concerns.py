import logging

from fastapi import APIRouter, Depends

from exam_admin.config import Settings
from exam_admin.database import get_document_store, get_settings
from exam_admin.errors import CLIENT_ERRORS, upstream_failure
from exam_admin.services import concerns as concern_service
from exam_admin.stores import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Concerns"])


@router.get("")
async def list_concerns(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    """
    Concern reports raised by candidates (404 when there are none)
    """
    try:
        return {"concerns": await concern_service.list_concerns(store, settings)}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error fetching concerns")
        raise upstream_failure("Failed to fetch concerns", e) from e


@router.delete("/{concern_id}")
async def delete_concern(
    concern_id: str,
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    try:
        await concern_service.delete_concern(store, settings, concern_id)
        return {"message": "Concern deleted successfully"}
    except Exception as e:
        logger.exception("Error deleting concern")
        raise upstream_failure("Failed to delete concern", e) from e
