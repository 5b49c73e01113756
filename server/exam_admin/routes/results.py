import logging

from fastapi import APIRouter, Depends

from exam_admin.config import Settings
from exam_admin.database import get_document_store, get_key_tree_store, get_settings, get_today
from exam_admin.errors import CLIENT_ERRORS, upstream_failure
from exam_admin.schemas import TodayResultsResponse
from exam_admin.services import results as results_service
from exam_admin.stores import DocumentStore, KeyTreeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Results"])


@router.get("/today-exam-results", response_model=TodayResultsResponse)
async def today_exam_results(
    today: str = Depends(get_today),
    document_store: DocumentStore = Depends(get_document_store),
    key_tree_store: KeyTreeStore = Depends(get_key_tree_store),
    settings: Settings = Depends(get_settings),
):
    """
    Score every candidate of the exam scheduled today and store the results.
    Re-running overwrites the stored results.
    """
    try:
        return await results_service.compute_today_results(
            document_store, key_tree_store, settings, today=today
        )
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error fetching exam results")
        raise upstream_failure("Failed to fetch exam results", e) from e


@router.get("/all-exam-results")
async def all_exam_results(
    key_tree_store: KeyTreeStore = Depends(get_key_tree_store),
    settings: Settings = Depends(get_settings),
):
    """
    Stored results grouped by exam
    """
    try:
        return await results_service.get_all_results(key_tree_store, settings)
    except Exception as e:
        logger.exception("Error fetching exam results")
        raise upstream_failure("Failed to fetch exam results", e) from e
