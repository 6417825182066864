from fastapi import FastAPI
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import httpx
import uvicorn

from interview_questions.core.config import Settings, get_settings
from interview_questions.core.database import Database
from interview_questions.core.errors import ServiceError
from interview_questions.core.logging import setup_logging
from interview_questions.middleware.logging_middleware import LoggingMiddleware
from interview_questions.controllers import (
    functions_controller,
    question_controller,
    template_controller,
    voice_response_controller,
)
from interview_questions.sao.openai_sao import OpenAISAO
from interview_questions.services.custom_question_service import CustomQuestionService
from interview_questions.services.question_service import question_service
from interview_questions.services.speech_service import SpeechService

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    openai_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logger = setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup", environment=settings.environment)
        db: Database = app.state.database
        try:
            await db.create_all()
            if settings.seed_lookups:
                async with db.session() as session:
                    added = await question_service.seed_lookups(session)
                logger.info("Lookup tables ready", added=added)
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

        if not settings.has_openai_credentials:
            logger.warning("OPENAI_API_KEY is not set; speech functions will report a configuration error")

        yield

        logger.info("Application shutdown")
        try:
            await db.close()
            logger.info("Database connections closed")
        except Exception as e:
            logger.error("Error during shutdown", error=str(e))

    app = FastAPI(
        title="Interview Question Generator API",
        description="Question retrieval, templates and speech proxy functions",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.environment == "local" else None,
        redoc_url="/redoc" if settings.environment == "local" else None,
    )

    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    sao = OpenAISAO(settings, transport=openai_transport)
    app.state.speech_service = SpeechService(settings, sao)
    app.state.custom_question_service = CustomQuestionService(settings)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    app.include_router(question_controller.router, prefix=settings.api_prefix)
    app.include_router(template_controller.router, prefix=settings.api_prefix)
    app.include_router(voice_response_controller.router, prefix=settings.api_prefix)
    app.include_router(functions_controller.router, prefix=settings.functions_prefix)

    @app.get("/")
    async def root():
        return {
            "message": "Interview Question Generator API is running",
            "version": "1.0.0",
            "environment": settings.environment,
            "docs_url": "/docs" if settings.environment == "local" else "Documentation disabled in production"
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "environment": settings.environment,
            "speech_configured": settings.has_openai_credentials,
        }

    @app.exception_handler(ServiceError)
    async def service_error_handler(request, exc: ServiceError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Request failed",
            code=exc.code,
            status_code=exc.status_code,
            error=exc.message,
            path=request.url.path,
            method=request.method
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg", "Invalid request")
        logger.warning("Request validation failed", path=request.url.path, error=message)
        return JSONResponse(
            status_code=400,
            content={"error": message, "code": "validation_error"}
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc: HTTPException):
        logger.warning(
            "HTTP Exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
            method=request.method
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail), "code": "http_error"}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        logger.error(
            "Unhandled Exception",
            error=str(exc),
            path=request.url.path,
            method=request.method
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": "internal_error"}
        )

    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "interview_questions.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "local",
        log_config=None
    )


if __name__ == "__main__":
    run()
