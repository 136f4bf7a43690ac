"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance:
1. Logging initialization
2. Router registration
3. Middleware (security headers, audit logging, CORS)
4. Exception handlers mapping errors to JSON responses
5. Startup: create tables, optionally seed campus data

Run with: uvicorn src.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src import __version__
from src.core.config import get_settings
from src.core.logging_config import setup_logging, get_logger
from src.core.exceptions import CampusAssistantException, RateLimitExceeded
from src.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from src.api.routes import chat_router, conversations_router, health_router


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create tables, seed campus data if enabled
    - Shutdown: dispose the connection pool
    """
    from src.database import get_database, init_tables, seed_database

    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"LLM configured: {settings.has_llm()} (groq={settings.groq_model}, gemini={settings.gemini_model})")
    logger.info(f"Rate Limit: {settings.rate_limit_per_minute} req/min")

    init_tables()

    if settings.seed_on_startup:
        try:
            counts = seed_database()
            logger.info(f"Seeded campus data: {counts}")
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Failed to seed campus data: {e}")

    yield

    logger.info(f"Shutting down {settings.app_name}")
    get_database().close()


app = FastAPI(
    title="Campus Assistant API",
    description="""
    A campus help-desk chatbot.

    Questions are classified by keyword, answered from the college
    database (staff, fees, rooms, knowledge base) and phrased by a
    hosted LLM. Conversations are stored and can be continued.
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration (Order matters!)
# ============================================================

app.add_middleware(SecurityHeadersMiddleware)

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware)
    logger.info("Audit logging middleware enabled")

if settings.is_development():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.warning("CORS configured for development (all origins allowed)")


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers={"Retry-After": str(exc.retry_after)}
    )


@app.exception_handler(CampusAssistantException)
async def campus_exception_handler(request: Request, exc: CampusAssistantException):
    """Handle all custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), not 422."""
    logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": "Invalid request body",
            "details": str(exc.errors()) if settings.is_development() else None,
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    Detailed error information is only included in development mode.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "Internal server error",
            "details": str(exc) if settings.is_development() else None,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(chat_router)
app.include_router(conversations_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "message": "Campus Assistant API",
        "version": __version__,
        "documentation": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development()
    )
