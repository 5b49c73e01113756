import logging

from fastapi import APIRouter, Depends

from exam_admin.config import Settings
from exam_admin.database import get_key_tree_store, get_settings
from exam_admin.errors import CLIENT_ERRORS, upstream_failure
from exam_admin.schemas import ExamQARequest
from exam_admin.services import records
from exam_admin.services.records import RecordCollection
from exam_admin.stores import KeyTreeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Exam Q&A"])


def get_exam_qa(
    store: KeyTreeStore = Depends(get_key_tree_store),
    settings: Settings = Depends(get_settings),
) -> RecordCollection:
    return records.exam_qa(store, settings)


@router.post("")
async def create_exam_qa(request: ExamQARequest, exam_qa: RecordCollection = Depends(get_exam_qa)):
    """
    Save a Q&A link for an exam
    """
    try:
        data = await exam_qa.create(request.model_dump(exclude_none=True))
        return {"message": "Exam Q&A saved successfully", "data": data}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error saving Q&A details")
        raise upstream_failure("Failed to save Q&A details", e) from e


@router.get("")
async def list_exam_qa(
    exam_qa: RecordCollection = Depends(get_exam_qa),
    settings: Settings = Depends(get_settings),
):
    """
    All Q&A links keyed by id. An empty store is not an error.
    """
    try:
        data = await exam_qa.list()
        message = "Exam Q&A fetched successfully" if data else "No exam Q&A found"
        return {"message": message, "data": data, "version": settings.exam_qa_version}
    except Exception as e:
        logger.exception("Error fetching Q&A details")
        raise upstream_failure("Failed to fetch Q&A details", e) from e


@router.get("/{qa_id}")
async def get_exam_qa_item(qa_id: str, exam_qa: RecordCollection = Depends(get_exam_qa)):
    try:
        return {"message": "Exam Q&A fetched successfully", "data": await exam_qa.get(qa_id)}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error fetching Q&A details")
        raise upstream_failure("Failed to fetch Q&A details", e) from e


@router.put("/{qa_id}")
async def update_exam_qa(
    qa_id: str,
    request: ExamQARequest,
    exam_qa: RecordCollection = Depends(get_exam_qa),
):
    try:
        data = await exam_qa.update(qa_id, request.model_dump(exclude_none=True))
        return {"message": "Exam Q&A updated successfully", "data": data}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error updating Q&A details")
        raise upstream_failure("Failed to update Q&A details", e) from e


@router.delete("/{qa_id}")
async def delete_exam_qa(qa_id: str, exam_qa: RecordCollection = Depends(get_exam_qa)):
    try:
        await exam_qa.delete(qa_id)
        return {"message": "Exam Q&A deleted successfully"}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error deleting Q&A details")
        raise upstream_failure("Failed to delete Q&A details", e) from e
