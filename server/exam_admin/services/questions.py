"""
Question management for an exam.

Questions live in ``{exams}/{examTitle}/{questions}`` and carry a 1-based
``order`` assigned once at creation. Deleting a question never renumbers
the others, so orders may have gaps.
"""
import base64
import json
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from exam_admin.config import Settings
from exam_admin.errors import ValidationError
from exam_admin.stores import DocumentStore, join_path

logger = logging.getLogger(__name__)


class QuestionImage:
    """Uploaded image bytes with their MIME type."""

    def __init__(self, content: bytes, content_type: Optional[str]):
        self.content = content
        self.content_type = content_type or "application/octet-stream"

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.content).decode("utf-8")
        return f"data:{self.content_type};base64,{encoded}"


def _questions_path(settings: Settings, exam_title: str) -> str:
    return join_path(settings.exams_collection, exam_title, settings.questions_collection)


def parse_question_fields(
    question: Optional[str],
    options: Optional[str],
    correct_answer: Optional[str],
) -> Tuple[List[Any], int]:
    """
    Validate raw form fields and return (options, correct_answer).

    ``options`` must be a JSON array with exactly four entries and
    ``correct_answer`` an integer.
    """
    if not question or not options or correct_answer is None:
        raise ValidationError("Missing required fields")

    try:
        parsed_options = json.loads(options)
    except (TypeError, ValueError):
        raise ValidationError("Invalid options or correct answer")

    try:
        parsed_correct = int(str(correct_answer).strip())
    except ValueError:
        raise ValidationError("Invalid options or correct answer")

    if not isinstance(parsed_options, list) or len(parsed_options) != 4:
        raise ValidationError("Invalid options or correct answer")

    return parsed_options, parsed_correct


def _check_image(image: Optional[QuestionImage], settings: Settings) -> None:
    if image is not None and len(image.content) > settings.max_upload_size_bytes:
        raise ValidationError(f"Image exceeds the {settings.max_upload_size_mb} MB upload limit")


async def add_question(
    store: DocumentStore,
    settings: Settings,
    exam_title: str,
    question: Optional[str],
    options: Optional[str],
    correct_answer: Optional[str],
    image: Optional[QuestionImage] = None,
) -> Dict[str, Any]:
    """Append a question to an exam and return its id and order."""
    if not exam_title:
        raise ValidationError("Missing required fields")
    parsed_options, parsed_correct = parse_question_fields(question, options, correct_answer)
    _check_image(image, settings)

    collection = _questions_path(settings, exam_title)

    # Count then write: concurrent adds to one exam can be given the same order
    existing = await store.list_documents(collection)
    next_order = len(existing) + 1

    question_data = {
        "question": question,
        "options": parsed_options,
        "correctAnswer": parsed_correct,
        "order": next_order,
        "timestamp": int(time.time() * 1000),
    }
    if image is not None:
        question_data["image"] = image.to_data_uri()

    question_id = await store.add_document(collection, question_data)
    logger.info(f"✅ Question {question_id} added to '{exam_title}' (order {next_order})")

    return {
        "message": "Question added successfully",
        "questionId": question_id,
        "order": next_order,
    }


async def update_question(
    store: DocumentStore,
    settings: Settings,
    exam_title: str,
    question_id: str,
    question: Optional[str],
    options: Optional[str],
    correct_answer: Optional[str],
    image: Optional[QuestionImage] = None,
) -> Dict[str, Any]:
    """Replace a question's text, options and answer. The image is only
    replaced when a new one is supplied; ``order`` is never touched."""
    if not exam_title or not question_id:
        raise ValidationError("Missing required fields")
    parsed_options, parsed_correct = parse_question_fields(question, options, correct_answer)
    _check_image(image, settings)

    update_data = {
        "question": question,
        "options": parsed_options,
        "correctAnswer": parsed_correct,
    }
    if image is not None:
        update_data["image"] = image.to_data_uri()

    await store.update_document(join_path(_questions_path(settings, exam_title), question_id), update_data)
    return {"message": "Question updated successfully"}


async def delete_question(store: DocumentStore, settings: Settings, exam_title: str, question_id: str) -> Dict[str, Any]:
    await store.delete_document(join_path(_questions_path(settings, exam_title), question_id))
    return {"message": "Question deleted successfully"}


async def list_questions(store: DocumentStore, settings: Settings, exam_title: str) -> List[Dict[str, Any]]:
    """Questions of an exam in ascending order."""
    docs = await store.list_documents(_questions_path(settings, exam_title), order_by="order")
    return [doc.to_dict() for doc in docs]
