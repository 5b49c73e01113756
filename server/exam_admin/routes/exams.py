import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from exam_admin.config import Settings
from exam_admin.database import get_document_store, get_key_tree_store, get_settings
from exam_admin.errors import CLIENT_ERRORS, upstream_failure
from exam_admin.schemas import ExamScheduleRequest
from exam_admin.services import exams as exam_service
from exam_admin.services import questions as question_service
from exam_admin.services import schedule as schedule_service
from exam_admin.services.questions import QuestionImage
from exam_admin.stores import DocumentStore, KeyTreeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Exams"])


async def _read_image(image: Optional[UploadFile]) -> Optional[QuestionImage]:
    if image is None or not image.filename:
        return None
    content = await image.read()
    return QuestionImage(content, image.content_type)


@router.get("")
async def list_exams(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    """
    List every exam with its schedule and nested questions
    """
    try:
        exams = await exam_service.list_exams(store, settings)
        return {"success": True, "data": exams}
    except Exception as e:
        logger.exception("Error fetching exams")
        raise upstream_failure("Failed to fetch exams", e) from e


@router.get("/{exam_title}/questions")
async def list_questions(
    exam_title: str,
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    """
    Questions of one exam in ascending order
    """
    try:
        questions = await question_service.list_questions(store, settings, exam_title)
        return {"examTitle": exam_title, "questions": questions, "total_questions": len(questions)}
    except Exception as e:
        logger.exception(f"Error fetching questions for {exam_title}")
        raise upstream_failure("Failed to fetch questions", e) from e


@router.post("/{exam_title}/questions")
async def add_question(
    exam_title: str,
    question: Optional[str] = Form(None),
    options: Optional[str] = Form(None),
    correctAnswer: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    """
    Add a question to an exam (multipart form).
    ``options`` is a JSON array of four strings; an optional image is
    stored inline as a data URI.
    """
    try:
        return await question_service.add_question(
            store,
            settings,
            exam_title,
            question,
            options,
            correctAnswer,
            await _read_image(image),
        )
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error saving question")
        raise upstream_failure("Internal server error", e) from e


@router.put("/{exam_title}/questions/{question_id}")
async def update_question(
    exam_title: str,
    question_id: str,
    question: Optional[str] = Form(None),
    options: Optional[str] = Form(None),
    correctAnswer: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    """
    Replace a question's text, options and answer
    """
    try:
        return await question_service.update_question(
            store,
            settings,
            exam_title,
            question_id,
            question,
            options,
            correctAnswer,
            await _read_image(image),
        )
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error updating question")
        raise upstream_failure("Internal server error", e) from e


@router.delete("/{exam_title}/questions/{question_id}")
async def delete_question(
    exam_title: str,
    question_id: str,
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    try:
        return await question_service.delete_question(store, settings, exam_title, question_id)
    except Exception as e:
        logger.exception("Error deleting question")
        raise upstream_failure("Internal server error", e) from e


@router.post("/{exam_title}/date-time")
async def set_exam_date_time(
    exam_title: str,
    request: ExamScheduleRequest,
    document_store: DocumentStore = Depends(get_document_store),
    key_tree_store: KeyTreeStore = Depends(get_key_tree_store),
    settings: Settings = Depends(get_settings),
):
    """
    Save the exam's date, 12-hour start/end times, marks and price
    """
    try:
        return await schedule_service.set_exam_schedule(
            document_store, key_tree_store, settings, exam_title, request
        )
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error saving exam details")
        raise upstream_failure("Failed to save exam details", e) from e


@router.get("/{exam_title}/date-time")
async def get_exam_date_time(
    exam_title: str,
    key_tree_store: KeyTreeStore = Depends(get_key_tree_store),
    settings: Settings = Depends(get_settings),
):
    try:
        return await schedule_service.get_exam_schedule(key_tree_store, settings, exam_title)
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error fetching exam date and time")
        raise upstream_failure("Failed to fetch exam date and time", e) from e
