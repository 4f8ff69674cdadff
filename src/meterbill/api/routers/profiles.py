"""Metering profile routes."""

from fastapi import APIRouter, HTTPException, Response, status

from meterbill.api.config import get_settings
from meterbill.api.dependencies import CacheService, CurrentToken, RepositoryService
from meterbill.api.models.billing import BillResponse
from meterbill.api.models.profile import InitialReadingUpdate, ProfileCreate, ProfileResponse
from meterbill.api.services.cache import profiles_key
from meterbill.config.constants import CURRENCY
from meterbill.services.billing import calculate_bill_breakdown

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(
    token: CurrentToken, repository: RepositoryService, cache: CacheService
) -> list[ProfileResponse]:
    """List the user's profiles with their latest consumption and expected bill.

    Examples
    --------
    ```bash
    curl -X GET "http://localhost:8000/profiles" \\
        -H "Authorization: Bearer YOUR_TOKEN"
    ```
    """
    cache_key = profiles_key(token.user_id)
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    profiles = await repository.list_profiles(token.user_id)
    cache.set(cache_key, profiles, ttl_disk=get_settings().CACHE_TTL_PROFILES)
    return profiles


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    request: ProfileCreate,
    token: CurrentToken,
    repository: RepositoryService,
    cache: CacheService,
) -> ProfileResponse:
    """Create a profile for a tenant and meter.

    Examples
    --------
    ```bash
    curl -X POST "http://localhost:8000/profiles" \\
        -H "Authorization: Bearer YOUR_TOKEN" \\
        -H "Content-Type: application/json" \\
        -d '{"tenant_name": "Ground floor", "meter_number": "04-12345"}'
    ```
    """
    profile = await repository.create_profile(token.user_id, request)
    cache.invalidate(profiles_key(token.user_id))
    return profile


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: int, token: CurrentToken, repository: RepositoryService
) -> ProfileResponse:
    """Get one profile.

    Raises
    ------
    ProfileNotFoundError
        404 if the profile does not exist or belongs to another user
    """
    return await repository.get_profile(token.user_id, profile_id)


@router.put("/{profile_id}", response_model=ProfileResponse)
async def update_profile(
    profile_id: int,
    request: ProfileCreate,
    token: CurrentToken,
    repository: RepositoryService,
    cache: CacheService,
) -> ProfileResponse:
    """Replace a profile's tenant, meter, initial reading and tariff class."""
    profile = await repository.update_profile(token.user_id, profile_id, request)
    cache.invalidate(profiles_key(token.user_id))
    return profile


@router.patch("/{profile_id}/initial-reading", response_model=ProfileResponse)
async def set_initial_reading(
    profile_id: int,
    request: InitialReadingUpdate,
    token: CurrentToken,
    repository: RepositoryService,
    cache: CacheService,
) -> ProfileResponse:
    """Set the meter reading the profile started from."""
    profile = await repository.set_initial_reading(
        token.user_id, profile_id, request.initial_reading
    )
    cache.invalidate(profiles_key(token.user_id))
    return profile


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_profile(
    profile_id: int,
    token: CurrentToken,
    repository: RepositoryService,
    cache: CacheService,
) -> Response:
    """Delete a profile and all of its readings."""
    await repository.delete_profile(token.user_id, profile_id)
    cache.invalidate(profiles_key(token.user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{profile_id}/bill", response_model=BillResponse)
async def get_profile_bill(
    profile_id: int, token: CurrentToken, repository: RepositoryService
) -> BillResponse:
    """Itemised bill for the profile's most recent reading.

    The profile's own tariff class selects the schedule.

    Raises
    ------
    HTTPException
        404 if the profile has no readings yet
    """
    profile = await repository.get_profile(token.user_id, profile_id)
    reading = await repository.latest_reading(token.user_id, profile_id)
    if reading is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Profile {profile_id} has no readings",
        )

    bill = calculate_bill_breakdown(reading.consumption, profile.tariff_class)
    return BillResponse.from_breakdown(bill, CURRENCY)
