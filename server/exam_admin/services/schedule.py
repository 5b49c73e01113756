"""
Exam date/time scheduling.

The schedule is written twice: flat under the key-tree store for fast
lookup by title, and as a ``dateTime`` map merged into the exam document
so exam listings and the results job can read it next to the questions.
"""
import logging
import re
from typing import Any, Dict

from exam_admin.config import Settings
from exam_admin.errors import NotFoundError, ValidationError
from exam_admin.schemas import ExamScheduleRequest
from exam_admin.stores import SERVER_TIMESTAMP, DocumentStore, KeyTreeStore, join_path

logger = logging.getLogger(__name__)

# 12-hour clock, e.g. "1:45 PM", "09:05am"
TIME_PATTERN = re.compile(r"(0?[1-9]|1[0-2]):[0-5][0-9]\s?(AM|PM)", re.IGNORECASE)


def is_valid_time(value: str) -> bool:
    return bool(value) and TIME_PATTERN.fullmatch(value) is not None


def validate_schedule(exam_title: str, schedule: ExamScheduleRequest) -> None:
    if (
        not exam_title
        or not schedule.date
        or not schedule.startTime
        or not schedule.endTime
        or schedule.marks is None
        or schedule.price is None
    ):
        raise ValidationError(
            "Missing required fields. Please provide date, startTime, endTime, marks, and price."
        )

    if not is_valid_time(schedule.startTime) or not is_valid_time(schedule.endTime):
        raise ValidationError(
            "Invalid time format. Please provide time in 12-hour format (e.g., 1:45 PM)."
        )


async def set_exam_schedule(
    document_store: DocumentStore,
    key_tree_store: KeyTreeStore,
    settings: Settings,
    exam_title: str,
    schedule: ExamScheduleRequest,
) -> Dict[str, Any]:
    validate_schedule(exam_title, schedule)

    payload = {
        "date": schedule.date,
        "startTime": schedule.startTime,
        "endTime": schedule.endTime,
        "marks": schedule.marks,
        "price": schedule.price,
    }

    await key_tree_store.set(
        join_path(settings.schedule_root, exam_title),
        {**payload, "updatedAt": SERVER_TIMESTAMP},
    )
    await document_store.set_document(
        join_path(settings.exams_collection, exam_title),
        {"dateTime": {**payload, "updatedAt": SERVER_TIMESTAMP}},
        merge=True,
    )
    logger.info(f"📅 Schedule saved for '{exam_title}': {schedule.date} {schedule.startTime}-{schedule.endTime}")

    return {
        "message": "Exam details saved successfully",
        "data": {"examTitle": exam_title, **payload},
    }


async def get_exam_schedule(key_tree_store: KeyTreeStore, settings: Settings, exam_title: str) -> Dict[str, Any]:
    data = await key_tree_store.get(join_path(settings.schedule_root, exam_title))
    if not data:
        raise NotFoundError("Exam date and time not found")
    return {"examTitle": exam_title, **data}
