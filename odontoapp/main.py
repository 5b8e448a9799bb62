"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from odontoapp.api.v1.router import api_router
from odontoapp.config import Settings, settings
from odontoapp.core.document_store import (
    DocumentStore,
    FirestoreDocumentStore,
    MemoryDocumentStore,
)
from odontoapp.core.exceptions import AppException
from odontoapp.core.firebase import get_firestore_client, initialize_firebase, reset_firebase
from odontoapp.core.identity import create_identity_provider
from odontoapp.core.redis_client import SessionSlot, close_redis_connection, get_redis_client
from odontoapp.core.sql_store import SqlDocumentStore
from odontoapp.database import create_document_engine, init_document_table
from odontoapp.middleware.error_handler import (
    app_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from odontoapp.middleware.logging import LoggingMiddleware, configure_logging
from odontoapp.runtime import build_runtime

# Configure logging
configure_logging()
logger = structlog.get_logger()


async def create_document_store(config: Settings) -> DocumentStore:
    """
    Create the document store selected by ``DOCUMENT_STORE_BACKEND``.

    Raises:
        RuntimeError: If the sql backend has no ``DATABASE_URL``
    """
    if config.document_store_backend == "memory":
        logger.warning("document_store_in_memory", note="Documents are lost on restart")
        return MemoryDocumentStore()

    if config.document_store_backend == "sql":
        if not config.database_url:
            raise RuntimeError("DATABASE_URL is required for the sql document store")

        engine = create_document_engine(config.database_url)
        await init_document_table(engine)
        return SqlDocumentStore(engine)

    initialize_firebase(config.firebase_credentials_path, config.firebase_config_json)
    return FirestoreDocumentStore(get_firestore_client())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Creates the session runtime on startup and releases it on shutdown.
    """
    # Startup
    logger.info(
        "application_startup",
        environment=settings.environment,
        document_store=settings.document_store_backend,
    )

    store = await create_document_store(settings)
    logger.info("document_store_ready", backend=settings.document_store_backend)

    identity = create_identity_provider(
        settings.firebase_auth_url,
        settings.firebase_api_key,
        timeout=settings.identity_timeout_seconds,
    )
    if not settings.firebase_api_key:
        logger.warning(
            "firebase_api_key_missing",
            note="Sign-up and sign-in will fail. Set FIREBASE_API_KEY env var.",
        )

    slot = SessionSlot(get_redis_client(), settings.session_slot_key)
    app.state.runtime = build_runtime(store, identity, slot=slot)

    yield

    # Shutdown
    logger.info("application_shutdown")

    await app.state.runtime.close()
    logger.info("runtime_closed")

    close_redis_connection()
    logger.info("redis_connection_closed")

    if settings.document_store_backend == "firestore":
        reset_firebase()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Patient app runtime: appointments, clinics, alerts and daily hygiene checklist",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# Add exception handlers
app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, general_exception_handler)  # type: ignore[arg-type]

# Include API router
app.include_router(api_router, prefix=settings.api_v1_prefix)

# Setup Prometheus instrumentation
Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=False,
    should_instrument_requests_inprogress=True,
    excluded_handlers=["/docs", "/redoc", "/openapi.json"],
    inprogress_name="http_requests_inprogress",
    inprogress_labels=True,
).instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """
    Root endpoint.

    Returns:
        Welcome message
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "odontoapp.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
