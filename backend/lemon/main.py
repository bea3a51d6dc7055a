"""
Lemon Backend - Main FastAPI Application
"""

import logging
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lemon import __version__
from lemon.config import get_settings
from lemon.errors import LemonError
from lemon.models.schemas import ErrorResponse, HealthCheck

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize the first validation problem as 'field: message'."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Lemon Travel API",
        description="AI travel planning: chat, multi-city routes and itineraries",
        version=__version__,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(LemonError)
    async def lemon_error_handler(_request: Request, exc: LemonError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        detail = _describe_validation_error(exc)
        logger.info(f"Rejected {request.method} {request.url.path}: {detail}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": detail},
        )

    # Register routers
    from lemon.routers import chat, plan

    error_responses = {
        code: {"model": ErrorResponse} for code in (400, 429, 500)
    }
    app.include_router(chat.router, tags=["chat"], responses=error_responses)
    app.include_router(plan.router, tags=["plan"], responses=error_responses)

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        """Health check endpoint."""
        return HealthCheck(
            status="healthy",
            service=settings.service_name,
            timestamp=datetime.utcnow(),
        )

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "lemon.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
