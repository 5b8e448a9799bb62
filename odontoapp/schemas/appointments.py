"""Appointment schemas for request/response validation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AppointmentStatus(str, Enum):
    """Appointment status values stored in ``consultas`` documents."""

    SCHEDULED = "Agendada"
    CANCELLED = "Cancelada"


class Appointment(BaseModel):
    """One ``consultas`` document as mirrored by the appointments screen."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    data_consulta: str = Field(..., alias="dataConsulta")
    id_paciente: str = Field(..., alias="id_Paciente")
    id_dentista: int = Field(..., alias="id_Dentista")
    status: str = AppointmentStatus.SCHEDULED.value
    nome_paciente: str | None = Field(None, alias="nomePaciente")
    nome_dentista: str | None = Field(None, alias="nomeDentista")
    data_criacao: str | None = Field(None, alias="dataCriacao")
    data_atualizacao: str | None = Field(None, alias="dataAtualizacao")

    @property
    def calendar_date(self) -> str:
        """Calendar day of the appointment (YYYY-MM-DD)."""
        return self.data_consulta.split("T")[0]


class AppointmentSelection(BaseModel):
    """Date and dentist picked in the booking or rescheduling modal."""

    date: str | None = Field(None, description="Calendar day, YYYY-MM-DD")
    provider_id: int | None = Field(None, description="Dentist id from the provider table")


class Dentist(BaseModel):
    """Entry of the static dentist provider table."""

    id: int
    nome: str
    cro: str
    especialidade: str
    telefone: str


class AppointmentListResponse(BaseModel):
    """Appointments screen state."""

    items: list[Appointment]
    total: int
    marked_dates: list[str]
    patient_name: str | None = None


class CalendarResponse(BaseModel):
    """Calendar marks derived from the mirrored appointments."""

    marked_dates: list[str]
