"""Tests for the appointments screen and endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from odontoapp.core.document_store import APPOINTMENTS
from odontoapp.core.exceptions import (
    NotFoundException,
    RemoteCallException,
    UnauthorizedException,
    ValidationException,
)
from odontoapp.schemas.appointments import AppointmentSelection

# ============================================================================
# Service Tests
# ============================================================================


@pytest.mark.asyncio
async def test_load_lists_only_active_patient_appointments(signed_runtime):
    """Test load skips other patients and cancelled appointments."""
    service = signed_runtime.appointments

    appointments = await service.load()

    assert [appointment.id for appointment in appointments] == ["consulta-1"]
    assert service.patient_name == "Joana Lima"
    assert service.marked_dates() == ["2025-05-10"]


@pytest.mark.asyncio
async def test_load_requires_session(runtime):
    with pytest.raises(UnauthorizedException):
        await runtime.appointments.load()


@pytest.mark.asyncio
async def test_book_appointment(signed_runtime, store, patient):
    """Test booking 2025-05-20 with dentist 2 creates a scheduled appointment."""
    service = signed_runtime.appointments
    await service.load()

    appointment = await service.book(AppointmentSelection(date="2025-05-20", provider_id=2))

    assert appointment.status == "Agendada"
    assert appointment.nome_dentista == "Dr. Carlos Pereira"
    assert appointment.nome_paciente == "Joana Lima"
    assert appointment.data_consulta == "2025-05-20T14:00:00"
    assert [item.id for item in service.appointments] == ["consulta-1", appointment.id]
    assert service.marked_dates() == ["2025-05-10", "2025-05-20"]

    stored = await store.get(APPOINTMENTS, appointment.id)
    assert stored["id_Paciente"] == patient.id
    assert stored["id_Dentista"] == 2


@pytest.mark.asyncio
async def test_book_without_selection_sends_nothing(signed_runtime, store):
    store.add = AsyncMock()

    with pytest.raises(ValidationException):
        await signed_runtime.appointments.book(AppointmentSelection(date="2025-05-20"))

    store.add.assert_not_called()


@pytest.mark.asyncio
async def test_book_unknown_dentist_uses_placeholder_name(signed_runtime):
    appointment = await signed_runtime.appointments.book(
        AppointmentSelection(date="2025-06-01", provider_id=9)
    )

    assert appointment.nome_dentista == "Dentista ID: 9"


@pytest.mark.asyncio
async def test_failed_booking_leaves_list_unchanged(signed_runtime, store):
    service = signed_runtime.appointments
    await service.load()
    store.add = AsyncMock(side_effect=RemoteCallException("offline", operation="add"))

    with pytest.raises(RemoteCallException):
        await service.book(AppointmentSelection(date="2025-05-20", provider_id=2))

    assert [item.id for item in service.appointments] == ["consulta-1"]


@pytest.mark.asyncio
async def test_reschedule_appointment(signed_runtime, store):
    """Test rescheduling patches date and dentist in place."""
    service = signed_runtime.appointments
    await service.load()

    appointment = await service.reschedule(
        "consulta-1", AppointmentSelection(date="2025-06-02", provider_id=3)
    )

    assert appointment.data_consulta == "2025-06-02T14:00:00"
    assert appointment.nome_dentista == "Dra. Maria Oliveira"
    assert appointment.data_atualizacao is not None
    assert (await store.get(APPOINTMENTS, "consulta-1"))["id_Dentista"] == 3


@pytest.mark.asyncio
async def test_reschedule_unknown_appointment(signed_runtime, store):
    service = signed_runtime.appointments
    await service.load()
    store.update = AsyncMock()

    with pytest.raises(NotFoundException):
        await service.reschedule(
            "consulta-outro", AppointmentSelection(date="2025-06-02", provider_id=1)
        )

    store.update.assert_not_called()


@pytest.mark.asyncio
async def test_cancel_marks_document_and_drops_entry(signed_runtime, store):
    """Test cancelling keeps the document but marks it cancelled."""
    service = signed_runtime.appointments
    await service.load()

    await service.cancel("consulta-1")

    assert service.appointments == []
    stored = await store.get(APPOINTMENTS, "consulta-1")
    assert stored["status"] == "Cancelada"
    assert "dataCancelamento" in stored

    # A reload does not bring it back
    assert await service.load() == []


@pytest.mark.asyncio
async def test_failed_cancel_keeps_entry(signed_runtime, store):
    service = signed_runtime.appointments
    await service.load()
    store.update = AsyncMock(side_effect=RemoteCallException("offline", operation="update"))

    with pytest.raises(RemoteCallException):
        await service.cancel("consulta-1")

    assert [item.id for item in service.appointments] == ["consulta-1"]


# ============================================================================
# Endpoint Tests
# ============================================================================


@pytest.mark.asyncio
async def test_list_providers(client: AsyncClient):
    response = await client.get("/api/v1/appointments/providers")

    assert response.status_code == 200
    assert [dentist["id"] for dentist in response.json()] == [1, 2, 3]


@pytest.mark.asyncio
async def test_list_appointments_requires_session(client: AsyncClient):
    response = await client.get("/api/v1/appointments/")

    assert response.status_code == 401
    assert response.json()["message"] == "Usuário não autenticado"


@pytest.mark.asyncio
async def test_appointment_endpoints_flow(signed_client: AsyncClient):
    """Test load, book, reschedule and cancel through the API."""
    response = await signed_client.get("/api/v1/appointments/")
    assert response.status_code == 200
    assert response.json()["total"] == 1

    response = await signed_client.post(
        "/api/v1/appointments/", json={"date": "2025-05-20", "provider_id": 2}
    )
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "Agendada"
    assert created["nomeDentista"] == "Dr. Carlos Pereira"

    response = await signed_client.put(
        f"/api/v1/appointments/{created['id']}", json={"date": "2025-05-21", "provider_id": 1}
    )
    assert response.status_code == 200
    assert response.json()["nomeDentista"] == "Dra. Ana Souza"

    response = await signed_client.get("/api/v1/appointments/calendar")
    assert response.json()["marked_dates"] == ["2025-05-10", "2025-05-21"]

    response = await signed_client.delete(f"/api/v1/appointments/{created['id']}")
    assert response.status_code == 204

    response = await signed_client.get("/api/v1/appointments/")
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_book_validation_error(signed_client: AsyncClient):
    response = await signed_client.post("/api/v1/appointments/", json={"date": "2025-05-20"})

    assert response.status_code == 422
    assert response.json()["message"] == "Por favor, selecione uma data e um dentista"


@pytest.mark.asyncio
async def test_query_uses_single_equality_filter(signed_runtime, store, patient):
    """Test cancelled appointments are dropped locally, not by the query."""
    store.query = AsyncMock(wraps=store.query)

    appointments = await signed_runtime.appointments.load()

    store.query.assert_awaited_once()
    assert store.query.await_args.kwargs["filters"] == [("id_Paciente", "==", patient.id)]
    assert [appointment.id for appointment in appointments] == ["consulta-1"]
