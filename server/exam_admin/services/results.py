"""
Exam results.

Today's results are computed by joining the exam's questions against each
candidate's answers on ``order``, then written to the key-tree store under
``{results}/{examId}/{candidateId}``, replacing any earlier computation.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from exam_admin.config import Settings
from exam_admin.errors import NotFoundError
from exam_admin.schemas import ExamDetails, ExamResult, ExamResultsGroup, ResultsMetadata
from exam_admin.stores import DocumentStore, KeyTreeStore, join_path

logger = logging.getLogger(__name__)


def _same_answer(given: Any, expected: Any) -> bool:
    # Booleans never match an option index, even though True == 1
    if isinstance(given, bool) or isinstance(expected, bool):
        return type(given) is type(expected) and given == expected
    return given == expected


def score_candidate(
    registration_number: str,
    candidate: Dict[str, Any],
    questions: List[Dict[str, Any]],
    answers: List[Dict[str, Any]],
) -> ExamResult:
    """
    Score one candidate.

    For each question the first answer with the same ``order`` is used. A
    missing or skipped answer counts as skipped, a matching option index as
    correct, anything else as wrong.
    """
    correct = 0
    skipped = 0

    for question in questions:
        candidate_answer = next(
            (a for a in answers if a.get("order") == question.get("order")),
            None,
        )
        if candidate_answer is None or candidate_answer.get("skipped"):
            skipped += 1
        elif _same_answer(candidate_answer.get("answer"), question.get("correctAnswer")):
            correct += 1

    total = len(questions)
    return ExamResult(
        registrationNumber=registration_number,
        candidateName=candidate.get("candidateName", candidate.get("name")),
        phone=candidate.get("phone"),
        totalQuestions=total,
        correctAnswers=correct,
        skippedQuestions=skipped,
        wrongAnswers=total - (correct + skipped),
    )


async def find_exam_for_date(document_store: DocumentStore, settings: Settings, day: str):
    """First exam document scheduled on ``day``, or None."""
    for exam in await document_store.list_documents(settings.exams_collection):
        date_time = exam.data.get("dateTime") or {}
        if date_time.get("date") == day:
            return exam
    return None


async def compute_today_results(
    document_store: DocumentStore,
    key_tree_store: KeyTreeStore,
    settings: Settings,
    today: Optional[str] = None,
) -> Dict[str, Any]:
    """Score every candidate of today's exam and persist the results."""
    today = today or datetime.now().strftime("%Y-%m-%d")

    exam = await find_exam_for_date(document_store, settings, today)
    if exam is None:
        raise NotFoundError("No exam found for today")

    date_time = exam.data.get("dateTime") or {}
    question_docs = await document_store.list_documents(
        join_path(exam.path, settings.questions_collection), order_by="order"
    )
    questions = [doc.to_dict() for doc in question_docs]

    candidates = await document_store.where_equals(settings.candidates_collection, "exam", exam.id)
    logger.info(f"🧮 Scoring {len(candidates)} candidates for '{exam.id}' ({len(questions)} questions)")

    results: List[ExamResult] = []
    for candidate in candidates:
        answer_docs = await document_store.list_documents(
            join_path(candidate.path, settings.answers_collection)
        )
        answers = [doc.to_dict() for doc in answer_docs]

        result = score_candidate(candidate.id, candidate.data, questions, answers)
        results.append(result)

        await key_tree_store.set(
            join_path(settings.results_root, exam.id, candidate.id),
            {**result.model_dump(), "timestamp": datetime.now().isoformat()},
        )

    details = ExamDetails(
        examName=exam.id,
        date=date_time.get("date"),
        startTime=date_time.get("startTime"),
        endTime=date_time.get("endTime"),
        totalMarks=date_time.get("marks"),
    )

    return {
        "success": True,
        "examDetails": details.model_dump(),
        "results": [r.model_dump() for r in results],
    }


async def get_all_results(key_tree_store: KeyTreeStore, settings: Settings) -> Dict[str, Any]:
    """Read back the persisted results tree grouped by exam."""
    results_data = await key_tree_store.get(settings.results_root)

    if not results_data:
        return {
            "success": True,
            "message": "No exam results found",
            "data": {},
        }

    groups = [
        ExamResultsGroup(
            examId=exam_id,
            candidates=[
                {"registrationId": registration_id, **candidate_data}
                for registration_id, candidate_data in (exam_data or {}).items()
            ],
        )
        for exam_id, exam_data in results_data.items()
    ]
    metadata = ResultsMetadata(
        totalExams=len(groups),
        totalCandidates=sum(len(group.candidates) for group in groups),
    )

    return {
        "success": True,
        "message": "Exam results fetched successfully",
        "data": [group.model_dump() for group in groups],
        "metadata": metadata.model_dump(),
    }
