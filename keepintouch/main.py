"""Application entrypoint for the relationship tracking service."""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from keepintouch.api.v1 import router as api_v1_router
from keepintouch.core.clock import Clock, SystemClock
from keepintouch.core.config import Settings, get_settings
from keepintouch.core.db import AsyncSessionLocal, engine
from keepintouch.core.errors import (EmptyCategory, KeepInTouchError, NoActionToUndo,
                                     NotFound, StorageFailure)
from keepintouch.core.logging import configure_logging
from keepintouch.models import Base
from keepintouch.services.document_store import DocumentStore, SqlDocumentStore
from keepintouch.services.person_store import PersonStore
from keepintouch.services.sample_data import sample_people

logger = logging.getLogger(__name__)

ERROR_CODE_MAP: dict[int, str] = {
    404: "RESOURCE_NOT_FOUND",
    422: "VALIDATION_ERROR",
}

DOMAIN_STATUS_MAP: dict[type[KeepInTouchError], int] = {
    NotFound: 404,
    EmptyCategory: 404,
    NoActionToUndo: 409,
    StorageFailure: 503,
}


def create_app(
    *, clock: Clock | None = None, documents: DocumentStore | None = None
) -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    configure_logging(settings)

    application = FastAPI(title="Keep In Touch", version=settings.version)
    application.state.person_store = PersonStore(
        documents or SqlDocumentStore(AsyncSessionLocal),
        key=settings.storage_key,
        clock=clock or SystemClock(),
    )

    _configure_cors(application, settings)
    _configure_exception_handlers(application)

    application.include_router(api_v1_router, prefix="/api/v1")

    @application.on_event("startup")
    async def _on_startup() -> None:  # pragma: no cover - exercised via uvicorn
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        if settings.seed_sample_data:
            store: PersonStore = application.state.person_store
            await store.seed(sample_people(store.clock.today()))

    return application


def _configure_cors(application: FastAPI, settings: Settings) -> None:
    if not settings.cors_origins:
        return

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _configure_exception_handlers(application: FastAPI) -> None:
    application.add_exception_handler(KeepInTouchError, _domain_exception_handler)
    application.add_exception_handler(HTTPException, _http_exception_handler)
    application.add_exception_handler(RequestValidationError, _validation_exception_handler)
    application.add_exception_handler(Exception, _unhandled_exception_handler)


async def _domain_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, KeepInTouchError)
    status_code = DOMAIN_STATUS_MAP.get(type(exc), 400)
    if isinstance(exc, StorageFailure):
        logger.error("Storage failure", exc_info=exc)
    return _error_response(exc.code, str(exc), status_code)


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, HTTPException)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    code = ERROR_CODE_MAP.get(exc.status_code, f"HTTP_{exc.status_code}")
    return _error_response(code, message, exc.status_code)


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    logger.info("Validation error", extra={"errors": exc.errors()})
    return _error_response("VALIDATION_ERROR", "Validation error", status_code=422)


async def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled application error")
    return _error_response("INTERNAL_SERVER_ERROR", "Internal server error", status_code=500)


def _error_response(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, "message": message}})


app = create_app()
