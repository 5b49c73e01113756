from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application configuration settings"""

    # Application
    app_name: str = "Exam Admin Backend"
    debug: bool = False
    api_version: str = "v1"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5555

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # Store backend: "firebase" or "memory"
    store_backend: str = "firebase"

    # Firebase
    firebase_credentials_path: Optional[str] = None
    firebase_database_url: Optional[str] = None
    firebase_project_id: Optional[str] = None

    # File Upload
    max_upload_size_mb: int = 5

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    # Document store collections
    exams_collection: str = "Exams"
    questions_collection: str = "Questions"
    candidates_collection: str = "candidates"
    answers_collection: str = "answers"
    concerns_collection: str = "concerns"

    # Bulk delete walks this collection. The legacy data uses a different
    # casing than the one read by the candidate list and results endpoints.
    candidates_purge_collection: str = "Candidates"
    purge_answers_collection: str = "SubCollection"
    purge_answers_document: str = "answers"

    # Key-tree store roots
    schedule_root: str = "ExamDateTime"
    notifications_root: str = "Notifications"
    syllabus_root: str = "Syllabus"
    exam_qa_root: str = "ExamQA"
    results_root: str = "Results"
    admin_login_path: str = "Adminlogin"

    # Record versions stamped on key-tree records
    syllabus_version: str = "3.11.174"
    exam_qa_version: str = "1.0.0"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
