"""Redirect routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import Response

from shortener.errors import NotFoundError, RequestTimeoutError, InternalError

router = APIRouter()


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    try:
        original_url = await service.resolve(short_code)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
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

    # Location carries the stored URL byte for byte, without re-quoting.
    return Response(status_code=status.HTTP_302_FOUND, headers={"location": original_url})
