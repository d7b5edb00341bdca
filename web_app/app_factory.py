"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api import api_router
from .web import web_router
from .middleware import log_requests


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic validation errors into one readable message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Malformed request"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 422 with a descriptive message."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": f"Malformed request: {_describe_validation_errors(exc)}"},
    )


def create_app(
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Service instance (may be set later in lifespan)
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Shorten URLs and redirect short links to their targets",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    app.middleware("http")(log_requests)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Redirect"])

    return app
