"""Clinic search endpoints."""

from fastapi import APIRouter, Query, status

from odontoapp.dependencies import Clinics
from odontoapp.schemas.clinics import Clinic, ClinicListResponse
from odontoapp.services.clinic_service import ClinicService

router = APIRouter()


def _list_response(service: ClinicService, items: list[Clinic], search: str) -> ClinicListResponse:
    return ClinicListResponse(
        items=items,
        total=len(items),
        search=search,
        using_fallback=service.mirror.using_fallback,
        source=service.source,
    )


@router.get(
    "/",
    response_model=ClinicListResponse,
    status_code=status.HTTP_200_OK,
    summary="Load clinics",
)
async def list_clinics(service: Clinics) -> ClinicListResponse:
    """
    Load the best-rated clinics.

    Falls back to the reference clinics when the store has none or fails.
    """
    items = await service.load()
    return _list_response(service, items, "")


@router.get(
    "/search",
    response_model=ClinicListResponse,
    status_code=status.HTTP_200_OK,
    summary="Search loaded clinics",
)
async def search_clinics(
    service: Clinics,
    q: str = Query("", max_length=100, description="Name, neighbourhood or city"),
) -> ClinicListResponse:
    """Filter the loaded clinics without querying the store again."""
    items = await service.search(q)
    return _list_response(service, items, q)
