"""API routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    HealthResponse,
    ErrorResponse,
)
from shortener.errors import MalformedError, RequestTimeoutError, InternalError
from ..links import short_link_for

router = APIRouter()


@router.post(
    "/",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        408: {"model": ErrorResponse, "description": "Request timed out"},
        422: {"model": ErrorResponse, "description": "Malformed request"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Shorten a URL. Shortening the same URL again returns the same short link.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    try:
        short_code = await service.shorten(body.url)
    except MalformedError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except RequestTimeoutError as e:
        raise HTTPException(
            status_code=status.HTTP_408_REQUEST_TIMEOUT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    return ShortenResponse(url=short_link_for(request, short_code, config))


@router.get(
    "/api/health",
    response_model=HealthResponse,
    responses={
        503: {"model": HealthResponse, "description": "Service unhealthy"},
    },
    summary="Health check",
    description="Check if the service and its store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    body = HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
    if not health["overall"]:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(mode="json"),
        )
    return body
