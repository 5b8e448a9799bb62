"""Clinic schemas for response validation."""

from pydantic import BaseModel, Field


class Clinic(BaseModel):
    """Read-only clinic reference document."""

    id: str
    nome: str
    endereco: str = ""
    bairro: str = ""
    cidade: str = ""
    telefone: str = ""
    avaliacao: float = Field(0.0, ge=0, le=5)
    convenios: list[str] = Field(default_factory=list, description="Covered dental plans")
    especialidades: list[str] = Field(default_factory=list)


class ClinicListResponse(BaseModel):
    """Clinic search screen state."""

    items: list[Clinic]
    total: int
    search: str = ""
    using_fallback: bool = False
    source: str = Field("clinicas", description="Collection or fallback source name")
