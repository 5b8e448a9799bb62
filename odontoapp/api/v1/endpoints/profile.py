"""Patient profile and daily checklist endpoints."""

from fastapi import APIRouter, status

from odontoapp.dependencies import Profile
from odontoapp.schemas.profile import ActivityField, ProfileResponse
from odontoapp.services.profile_service import ProfileService

router = APIRouter()


def _profile_response(service: ProfileService) -> ProfileResponse:
    return ProfileResponse(
        profile=service.profile,
        activities=service.activities,
        date=service.day.isoformat() if service.day else "",
        all_done=service.activities.all_done,
    )


@router.get(
    "/",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Load profile and today's checklist",
)
async def get_profile(service: Profile) -> ProfileResponse:
    await service.load()
    return _profile_response(service)


@router.post(
    "/activities/{field}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Check a daily activity",
)
async def check_activity(field: ActivityField, service: Profile) -> ProfileResponse:
    """
    Mark a checklist item done and award its points.

    Checking an item that is already done changes nothing.
    """
    await service.check(field)
    return _profile_response(service)
