from typing import Any, Dict, List

from exam_admin.config import Settings
from exam_admin.stores import DocumentStore, join_path


async def list_exams(store: DocumentStore, settings: Settings) -> List[Dict[str, Any]]:
    """Every exam document with its questions attached."""
    exams = []
    for exam in await store.list_documents(settings.exams_collection):
        questions = await store.list_documents(join_path(exam.path, settings.questions_collection))
        exams.append({
            **exam.to_dict(),
            "examDetails": exam.data,
            "questions": [q.to_dict() for q in questions],
        })
    return exams
