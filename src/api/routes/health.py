"""
Health Check Routes - Liveness and readiness probes.
"""
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src import __version__
from src.core.config import get_settings
from src.core.logging_config import get_logger
from src.database.connection import get_database
from src.models.chat import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns 200 OK while the API process is up. Does not touch the database."
)
async def health_check() -> HealthResponse:
    logger.debug("Health check requested")

    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.utcnow()
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    description="Checks database connectivity. Returns 503 when the database is unreachable."
)
async def readiness_check():
    """
    Verify the service can handle chat requests.

    A missing LLM key does not fail readiness: the assistant still
    answers, with the canned not-configured message.
    """
    logger.debug("Readiness check requested")

    db_ok = get_database().check_connection()

    health = HealthResponse(
        status="ready" if db_ok else "unavailable",
        version=__version__,
        database="ok" if db_ok else "unreachable",
        llm_configured=get_settings().has_llm(),
        timestamp=datetime.utcnow()
    )

    if not db_ok:
        return JSONResponse(status_code=503, content=health.model_dump(mode="json"))
    return health
