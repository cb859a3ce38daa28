"""Main FastAPI application for DocuMind.

Entry point for the application. Configures:
- FastAPI app with settings
- CORS middleware
- Exception handlers
- Route registration
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_app_config, get_cors_config, get_settings, setup_logging
from dependencies import get_conversation_controller
from responses import ResponseCode, error_dict
from router import router as api_router
from services import IngestionStatus

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the process-wide conversation up front and release it on shutdown.

    Constructing the controller at startup surfaces a bad provider setup
    before the first upload instead of on it.
    """
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info(
        "Starting DocuMind (%s) with %s/%s",
        settings.environment,
        settings.llm_provider,
        settings.llm_model,
    )

    try:
        conversation = get_conversation_controller()
    except Exception as e:
        logger.error("Could not build conversation: %s", e)
        raise

    logger.info(
        "Accepting sources: %s (DOCX %s, %d blocked host(s))",
        ", ".join(t.__name__ for t in conversation.aggregator.source_types),
        "parsed" if settings.parse_docx else "placeholder",
        len(settings.blocked_host_list),
    )
    if settings.transcript_timeout is None:
        logger.warning("Transcript retrieval has no timeout")

    yield

    if conversation.status is IngestionStatus.PROCESSING or conversation.is_bot_replying:
        logger.warning("Shutting down with work in flight (%s)", conversation.status.value)
    await conversation.answer_generator.llm.aclose()
    logger.info("DocuMind stopped")


# Create FastAPI app with lifespan
app_config = get_app_config()
app = FastAPI(lifespan=lifespan, **app_config)

# Add CORS middleware
cors_config = get_cors_config()
app.add_middleware(CORSMiddleware, **cors_config)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests for tracing."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle Pydantic validation errors."""
    request_id = getattr(request.state, "request_id", None)

    first_error = exc.errors()[0] if exc.errors() else {}
    field_name = first_error.get("loc", ["unknown"])[-1]

    error_response = error_dict(
        code=ResponseCode.VALIDATION_ERROR,
        custom_message=f"Validation failed for field '{field_name}'",
        error_details={
            "validation_errors": [
                {"loc": list(e.get("loc", [])), "msg": e.get("msg", "")}
                for e in exc.errors()
            ]
        },
        request_id=request_id,
    )

    return JSONResponse(status_code=422, content=error_response)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle HTTP exceptions."""
    request_id = getattr(request.state, "request_id", None)

    if isinstance(exc.detail, dict) and "code" in exc.detail:
        return JSONResponse(status_code=exc.status_code, content=exc.detail)

    code_map = {
        404: ResponseCode.NOT_FOUND,
        405: ResponseCode.VALIDATION_ERROR,
        413: ResponseCode.FILE_TOO_LARGE,
    }

    response_code = code_map.get(exc.status_code, ResponseCode.INTERNAL_ERROR)

    error_response = error_dict(
        code=response_code,
        custom_message=str(exc.detail),
        request_id=request_id,
    )

    return JSONResponse(status_code=exc.status_code, content=error_response)


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unhandled exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.exception("Unhandled exception: %s", exc)

    error_response = error_dict(
        code=ResponseCode.INTERNAL_ERROR,
        custom_message="An unexpected error occurred",
        error_details={"exception_type": type(exc).__name__},
        request_id=request_id,
    )

    return JSONResponse(status_code=500, content=error_response)


# =============================================================================
# Routes
# =============================================================================

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - shows API info."""
    return {
        "name": "DocuMind",
        "description": "Grounded Q&A over uploaded documents and links",
        "docs": "/api/docs",
        "health": "/api/health",
    }


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
