"""Appointment endpoints."""

from fastapi import APIRouter, status

from odontoapp.dependencies import Appointments
from odontoapp.schemas.appointments import (
    Appointment,
    AppointmentListResponse,
    AppointmentSelection,
    CalendarResponse,
    Dentist,
)
from odontoapp.services.appointment_service import AppointmentService

router = APIRouter()


def _list_response(service: AppointmentService) -> AppointmentListResponse:
    items = service.appointments
    return AppointmentListResponse(
        items=items,
        total=len(items),
        marked_dates=service.marked_dates(),
        patient_name=service.patient_name,
    )


@router.get(
    "/",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    summary="Load appointments",
)
async def list_appointments(service: Appointments) -> AppointmentListResponse:
    """
    Load the signed-in patient's appointments.

    Args:
        service: Appointments screen

    Returns:
        Appointments in store order with calendar marks
    """
    await service.load()
    return _list_response(service)


@router.get(
    "/providers",
    response_model=list[Dentist],
    status_code=status.HTTP_200_OK,
    summary="List dentists",
)
async def list_providers() -> list[Dentist]:
    """Dentists that can be picked when booking."""
    return AppointmentService.list_dentists()


@router.get(
    "/calendar",
    response_model=CalendarResponse,
    status_code=status.HTTP_200_OK,
    summary="Calendar marks",
)
async def get_calendar(service: Appointments) -> CalendarResponse:
    """Days with an appointment, from the loaded list."""
    return CalendarResponse(marked_dates=service.marked_dates())


@router.post(
    "/",
    response_model=Appointment,
    status_code=status.HTTP_201_CREATED,
    summary="Book appointment",
)
async def book_appointment(data: AppointmentSelection, service: Appointments) -> Appointment:
    """
    Book an appointment on the selected day with the selected dentist.

    Args:
        data: Selected day and dentist
        service: Appointments screen

    Returns:
        Created appointment
    """
    return await service.book(data)


@router.put(
    "/{appointment_id}",
    response_model=Appointment,
    status_code=status.HTTP_200_OK,
    summary="Reschedule appointment",
)
async def reschedule_appointment(
    appointment_id: str,
    data: AppointmentSelection,
    service: Appointments,
) -> Appointment:
    """
    Move an appointment to another day or dentist.

    Args:
        appointment_id: Appointment ID
        data: New day and dentist
        service: Appointments screen

    Returns:
        Updated appointment
    """
    return await service.reschedule(appointment_id, data)


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel appointment",
)
async def cancel_appointment(appointment_id: str, service: Appointments) -> None:
    """
    Cancel an appointment.

    Args:
        appointment_id: Appointment ID
        service: Appointments screen
    """
    await service.cancel(appointment_id)
