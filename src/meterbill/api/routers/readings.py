"""Meter reading routes."""

from fastapi import APIRouter, Query, Response, status

from meterbill.api.config import get_settings
from meterbill.api.dependencies import CacheService, CurrentToken, RepositoryService
from meterbill.api.models.reading import ReadingCreate, ReadingResponse
from meterbill.api.services.cache import profiles_key

router = APIRouter(prefix="/readings", tags=["Readings"])


@router.get("", response_model=list[ReadingResponse])
async def list_readings(
    token: CurrentToken,
    repository: RepositoryService,
    profile_id: int = Query(..., description="Profile to list readings for"),
    limit: int | None = Query(None, ge=1, le=100, description="Maximum readings returned"),
) -> list[ReadingResponse]:
    """List a profile's readings, newest first.

    Parameters
    ----------
    token : TokenData
        Authenticated user
    repository : Repository
        Data access
    profile_id : int
        Profile to list readings for
    limit : int | None
        Maximum readings returned, by default ``READINGS_PAGE_SIZE``

    Returns
    -------
    list[ReadingResponse]
        Readings ordered by date, newest first

    Examples
    --------
    ```bash
    curl -X GET "http://localhost:8000/readings?profile_id=1" \\
        -H "Authorization: Bearer YOUR_TOKEN"
    ```
    """
    return await repository.list_readings(
        token.user_id, profile_id, limit or get_settings().READINGS_PAGE_SIZE
    )


@router.post("", response_model=ReadingResponse, status_code=status.HTTP_201_CREATED)
async def create_reading(
    request: ReadingCreate,
    token: CurrentToken,
    repository: RepositoryService,
    cache: CacheService,
) -> ReadingResponse:
    """Record a reading; consumption is ``current - previous``.

    Raises
    ------
    InvalidReadingError
        400 if the current reading is below the previous one
    ProfileNotFoundError
        404 if the profile does not belong to the user

    Examples
    --------
    ```bash
    curl -X POST "http://localhost:8000/readings" \\
        -H "Authorization: Bearer YOUR_TOKEN" \\
        -H "Content-Type: application/json" \\
        -d '{"profile_id": 1, "date": "2025-06-01", "previous": 1520, "current": 1768.5}'
    ```
    """
    reading = await repository.add_reading(token.user_id, request)
    cache.invalidate(profiles_key(token.user_id))
    return reading


@router.delete("/{reading_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reading(
    reading_id: int,
    token: CurrentToken,
    repository: RepositoryService,
    cache: CacheService,
) -> Response:
    """Delete a reading.

    Raises
    ------
    ReadingNotFoundError
        404 if the reading does not exist or belongs to another user
    """
    await repository.delete_reading(token.user_id, reading_id)
    cache.invalidate(profiles_key(token.user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
