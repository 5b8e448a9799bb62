"""Appointments screen: booking, rescheduling and cancelling consultations."""

from datetime import UTC, datetime
from typing import Any

import structlog

from odontoapp.core.document_store import APPOINTMENTS, USERS, DocumentStore
from odontoapp.core.exceptions import NotFoundException, RemoteCallException
from odontoapp.core.mirror import RemoteMirroredList
from odontoapp.core.session import SessionStore
from odontoapp.core.validation import validate_appointment_selection
from odontoapp.reference_data import DENTISTS, dentist_name
from odontoapp.schemas.appointments import (
    Appointment,
    AppointmentSelection,
    AppointmentStatus,
    Dentist,
)

logger = structlog.get_logger(__name__)

# Every booking is made for the same afternoon slot
APPOINTMENT_TIME = "14:00:00"
DEFAULT_PATIENT_NAME = "Paciente"


def to_appointment(key: str, data: dict[str, Any]) -> Appointment:
    """Map a ``consultas`` document to an appointment."""
    return Appointment.model_validate({**data, "id": key})


def is_active(appointment: Appointment) -> bool:
    return appointment.status != AppointmentStatus.CANCELLED.value


class AppointmentService:
    """Mirror of the signed-in patient's ``consultas`` documents."""

    def __init__(self, store: DocumentStore, session: SessionStore):
        """Initialize service with the document store and the session."""
        self.store = store
        self.session = session
        self.mirror: RemoteMirroredList[Appointment] | None = None
        self.patient_name: str | None = None

    def _mirror_for(self, patient_id: str) -> RemoteMirroredList[Appointment]:
        if self.mirror is None or self.mirror.filters[0][2] != patient_id:
            self.mirror = RemoteMirroredList(
                self.store,
                APPOINTMENTS,
                to_appointment,
                # One equality filter; cancelled entries are dropped locally
                filters=[("id_Paciente", "==", patient_id)],
                keep=is_active,
            )
        return self.mirror

    def reset(self) -> None:
        """Forget the mirrored appointments."""
        self.mirror = None
        self.patient_name = None

    @staticmethod
    def list_dentists() -> list[Dentist]:
        """Static dentist provider table."""
        return [Dentist.model_validate(dentist) for dentist in DENTISTS]

    async def _load_patient_name(self, patient_id: str) -> None:
        try:
            data = await self.store.get(USERS, patient_id)
        except RemoteCallException as e:
            # Bookings fall back to the default name
            logger.warning("patient_name_load_failed", user_id=patient_id, error=str(e))
            return
        if data and data.get("nome"):
            self.patient_name = data["nome"]

    async def load(self) -> list[Appointment]:
        """
        Load the patient's active appointments.

        Raises:
            UnauthorizedException: If nobody is signed in
            RemoteCallException: If the read fails; the previous list is kept
        """
        user = self.session.require_user()
        mirror = self._mirror_for(user.id)
        appointments = await mirror.load()
        await self._load_patient_name(user.id)
        return appointments

    @property
    def appointments(self) -> list[Appointment]:
        return self.mirror.items if self.mirror else []

    def marked_dates(self) -> list[str]:
        """Distinct calendar days that have an appointment, sorted."""
        return sorted({appointment.calendar_date for appointment in self.appointments})

    async def book(self, selection: AppointmentSelection) -> Appointment:
        """
        Create a new appointment for the signed-in patient.

        Raises:
            ValidationException: If no date or dentist is selected (nothing is sent)
            UnauthorizedException: If nobody is signed in
            RemoteCallException: If the write fails; the list is unchanged
        """
        day = validate_appointment_selection(selection.date, selection.provider_id)
        user = self.session.require_user()
        mirror = self._mirror_for(user.id)

        payload = {
            "dataConsulta": f"{day.isoformat()}T{APPOINTMENT_TIME}",
            "id_Paciente": user.id,
            "id_Dentista": selection.provider_id,
            "status": AppointmentStatus.SCHEDULED.value,
            "nomePaciente": self.patient_name or DEFAULT_PATIENT_NAME,
            "nomeDentista": dentist_name(selection.provider_id),
            "dataCriacao": datetime.now(UTC).isoformat(),
        }
        appointment = await mirror.create(payload)
        logger.info("appointment_booked", appointment_id=appointment.id, user_id=user.id)
        return appointment

    def _require_mirrored(self, appointment_id: str) -> RemoteMirroredList[Appointment]:
        user = self.session.require_user()
        mirror = self._mirror_for(user.id)
        if appointment_id not in mirror:
            raise NotFoundException("Consulta não encontrada")
        return mirror

    async def reschedule(self, appointment_id: str, selection: AppointmentSelection) -> Appointment:
        """
        Move an appointment to another day and/or dentist.

        Raises:
            ValidationException: If no date or dentist is selected
            NotFoundException: If the appointment is not in the list (nothing is sent)
            RemoteCallException: If the write fails; the list is unchanged
        """
        day = validate_appointment_selection(selection.date, selection.provider_id)
        mirror = self._require_mirrored(appointment_id)

        patch = {
            "dataConsulta": f"{day.isoformat()}T{APPOINTMENT_TIME}",
            "id_Dentista": selection.provider_id,
            "nomeDentista": dentist_name(selection.provider_id),
            "dataAtualizacao": datetime.now(UTC).isoformat(),
        }
        appointment = await mirror.update(appointment_id, patch)
        if appointment is None:
            raise NotFoundException("Consulta não encontrada")
        logger.info("appointment_rescheduled", appointment_id=appointment_id)
        return appointment

    async def cancel(self, appointment_id: str) -> None:
        """
        Cancel an appointment.

        The stored document is marked ``Cancelada`` and only then removed
        from the list, so the list never drifts from the store.

        Raises:
            NotFoundException: If the appointment is not in the list (nothing is sent)
            RemoteCallException: If the write fails; the list is unchanged
        """
        mirror = self._require_mirrored(appointment_id)
        await mirror.update(
            appointment_id,
            {
                "status": AppointmentStatus.CANCELLED.value,
                "dataCancelamento": datetime.now(UTC).isoformat(),
            },
        )
        mirror.remove_local(appointment_id)
        logger.info("appointment_cancelled", appointment_id=appointment_id)
