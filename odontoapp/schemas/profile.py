"""Patient profile and daily activity schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActivityField(str, Enum):
    """Daily hygiene checklist flags."""

    BRUSHED_AFTER_BREAKFAST = "escovouCafe"
    BRUSHED_AFTER_LUNCH = "escovouAlmoco"
    BRUSHED_AFTER_DINNER = "escovouJantar"
    BOOKED_CHECKUP = "marcouAvaliacao"
    HAD_CLEANING = "realizouLimpeza"


ACTIVITY_POINTS = {
    ActivityField.BRUSHED_AFTER_BREAKFAST: 1,
    ActivityField.BRUSHED_AFTER_LUNCH: 1,
    ActivityField.BRUSHED_AFTER_DINNER: 1,
    ActivityField.BOOKED_CHECKUP: 2,
    ActivityField.HAD_CLEANING: 3,
}

ACTIVITY_LABELS = {
    ActivityField.BRUSHED_AFTER_BREAKFAST: "Escovou após o café",
    ActivityField.BRUSHED_AFTER_LUNCH: "Escovou após o almoço",
    ActivityField.BRUSHED_AFTER_DINNER: "Escovou após o jantar",
    ActivityField.BOOKED_CHECKUP: "Marcou uma avaliação",
    ActivityField.HAD_CLEANING: "Realizou limpeza dental",
}


class DailyActivity(BaseModel):
    """Checklist for one account on one calendar day."""

    model_config = ConfigDict(populate_by_name=True)

    escovou_cafe: bool = Field(False, alias="escovouCafe")
    escovou_almoco: bool = Field(False, alias="escovouAlmoco")
    escovou_jantar: bool = Field(False, alias="escovouJantar")
    marcou_avaliacao: bool = Field(False, alias="marcouAvaliacao")
    realizou_limpeza: bool = Field(False, alias="realizouLimpeza")

    def is_done(self, field: ActivityField) -> bool:
        return bool(self.model_dump(by_alias=True)[field.value])

    @property
    def all_done(self) -> bool:
        return all(self.model_dump().values())


class PatientProfile(BaseModel):
    """Profile data shown above the checklist."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    nome: str = ""
    pontos: int = 0
    ultima_consulta: str | None = Field(None, alias="ultimaConsulta")
    telefone: str | None = None


class ProfileResponse(BaseModel):
    """Profile screen state."""

    profile: PatientProfile
    activities: DailyActivity
    date: str
    all_done: bool
    labels: dict[str, str] = Field(
        default_factory=lambda: {field.value: label for field, label in ACTIVITY_LABELS.items()}
    )
