import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from exam_admin.config import Settings, settings as default_settings
from exam_admin.database import init_db
from exam_admin.errors import ExamAdminError
from exam_admin.routes import admin, candidates, concerns, exam_qa, exams, notifications, results, syllabus
from exam_admin.stores import DocumentStore, KeyTreeStore

logger = logging.getLogger("exam_admin")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ExamAdminError)
    async def exam_admin_error_handler(request: Request, exc: ExamAdminError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc)},
        )


def create_app(
    settings: Optional[Settings] = None,
    document_store: Optional[DocumentStore] = None,
    key_tree_store: Optional[KeyTreeStore] = None,
) -> FastAPI:
    """Build the API. Stores passed in are used as-is instead of being
    created from settings at startup."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.document_store = document_store
    app.state.key_tree_store = key_tree_store

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize store clients on startup"""
        init_db(app, settings)
        logger.info(f"🚀 {settings.app_name} is starting...")
        logger.info(f"🗄️ Store backend: {settings.store_backend}")

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": f"{settings.app_name} is running successfully!",
            "version": settings.api_version,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    app.include_router(exams.router, prefix="/api/exams")
    app.include_router(results.router, prefix="/api")
    app.include_router(notifications.router, prefix="/api/notifications")
    app.include_router(syllabus.router, prefix="/api/syllabus")
    app.include_router(exam_qa.router, prefix="/api/exam-qa")
    app.include_router(concerns.router, prefix="/api/concerns")
    app.include_router(candidates.router, prefix="/api/candidates")
    app.include_router(admin.router, prefix="/api/admin")

    return app


configure_logging(default_settings)

app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
