from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


# Schedule Schemas
class ExamScheduleRequest(BaseModel):
    """Date/time window for an exam. Presence is checked by the service so
    missing fields produce the same 400 message as malformed ones."""
    date: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    marks: Optional[Any] = None
    price: Optional[Any] = None


# Key-tree record Schemas
class NotificationRequest(BaseModel):
    message: Optional[str] = None
    createdAt: Optional[Any] = None


class SyllabusRequest(BaseModel):
    examTitle: Optional[str] = None
    syllabusLink: Optional[str] = None


class ExamQARequest(BaseModel):
    examTitle: Optional[str] = None
    qaLink: Optional[str] = None


# Result Schemas
class ExamResult(BaseModel):
    """Scored summary of one candidate for one exam."""
    registrationNumber: str
    candidateName: Optional[Any] = None
    phone: Optional[Any] = None
    totalQuestions: int = Field(ge=0)
    correctAnswers: int = Field(ge=0)
    skippedQuestions: int = Field(ge=0)
    wrongAnswers: int = Field(ge=0)


class ExamDetails(BaseModel):
    examName: str
    date: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    totalMarks: Optional[Any] = None


class TodayResultsResponse(BaseModel):
    success: bool = True
    examDetails: ExamDetails
    results: List[ExamResult]


class ExamResultsGroup(BaseModel):
    examId: str
    candidates: List[Dict[str, Any]]


class ResultsMetadata(BaseModel):
    totalExams: int
    totalCandidates: int
