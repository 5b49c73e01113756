import logging

from fastapi import APIRouter, Depends

from exam_admin.config import Settings
from exam_admin.database import get_key_tree_store, get_settings
from exam_admin.errors import CLIENT_ERRORS, upstream_failure
from exam_admin.schemas import SyllabusRequest
from exam_admin.services import records
from exam_admin.services.records import RecordCollection
from exam_admin.stores import KeyTreeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Syllabus"])


def get_syllabus(
    store: KeyTreeStore = Depends(get_key_tree_store),
    settings: Settings = Depends(get_settings),
) -> RecordCollection:
    return records.syllabus(store, settings)


@router.post("")
async def create_syllabus(request: SyllabusRequest, syllabus: RecordCollection = Depends(get_syllabus)):
    """
    Save a syllabus link for an exam
    """
    try:
        data = await syllabus.create(request.model_dump(exclude_none=True))
        return {"message": "Syllabus saved successfully", "data": data}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error saving syllabus")
        raise upstream_failure("Failed to save syllabus", e) from e


@router.get("")
async def list_syllabus(
    syllabus: RecordCollection = Depends(get_syllabus),
    settings: Settings = Depends(get_settings),
):
    """
    All syllabus links keyed by id. An empty store is not an error.
    """
    try:
        data = await syllabus.list()
        message = "Syllabus fetched successfully" if data else "No syllabus found"
        return {"message": message, "data": data, "version": settings.syllabus_version}
    except Exception as e:
        logger.exception("Error fetching syllabus")
        raise upstream_failure("Failed to fetch syllabus", e) from e


@router.get("/{syllabus_id}")
async def get_syllabus_item(syllabus_id: str, syllabus: RecordCollection = Depends(get_syllabus)):
    try:
        return {"message": "Syllabus fetched successfully", "data": await syllabus.get(syllabus_id)}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error fetching syllabus")
        raise upstream_failure("Failed to fetch syllabus", e) from e


@router.put("/{syllabus_id}")
async def update_syllabus(
    syllabus_id: str,
    request: SyllabusRequest,
    syllabus: RecordCollection = Depends(get_syllabus),
):
    try:
        data = await syllabus.update(syllabus_id, request.model_dump(exclude_none=True))
        return {"message": "Syllabus updated successfully", "data": data}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error updating syllabus")
        raise upstream_failure("Failed to update syllabus", e) from e


@router.delete("/{syllabus_id}")
async def delete_syllabus(syllabus_id: str, syllabus: RecordCollection = Depends(get_syllabus)):
    try:
        await syllabus.delete(syllabus_id)
        return {"message": "Syllabus deleted successfully"}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error deleting syllabus")
        raise upstream_failure("Failed to delete syllabus", e) from e
