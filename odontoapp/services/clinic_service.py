"""Clinic search screen."""

from typing import Any

from odontoapp.core.document_store import CLINICS, DocumentStore
from odontoapp.core.mirror import FallbackSource, RemoteMirroredList
from odontoapp.reference_data import CLINIC_FALLBACK
from odontoapp.schemas.clinics import Clinic


def to_clinic(key: str, data: dict[str, Any]) -> Clinic:
    """Map a ``clinicas`` document to a clinic."""
    return Clinic.model_validate({**data, "id": key})


class ClinicService:
    """Best-rated clinics, with the reference list when the store has none."""

    # Top clinics by rating shown on the search screen
    CLINIC_LIST_LIMIT = 20

    def __init__(self, store: DocumentStore, fallback: FallbackSource = CLINIC_FALLBACK):
        """Initialize service with the document store and a fallback source."""
        self.mirror: RemoteMirroredList[Clinic] = RemoteMirroredList(
            store,
            CLINICS,
            to_clinic,
            order_by=[("avaliacao", "desc")],
            limit=self.CLINIC_LIST_LIMIT,
            fallback=fallback,
        )

    def reset(self) -> None:
        self.mirror.clear()

    @property
    def source(self) -> str:
        if self.mirror.using_fallback and self.mirror.fallback is not None:
            return self.mirror.fallback.name
        return CLINICS

    async def load(self) -> list[Clinic]:
        """Load clinics, falling back to the reference list on empty or failed reads."""
        return await self.mirror.load()

    async def search(self, text: str = "") -> list[Clinic]:
        """
        Filter the loaded clinics by name, neighbourhood or city.

        Matching is a case-insensitive substring test; an empty text returns
        every clinic. Loads first if the screen has not loaded yet.
        """
        if not self.mirror.loaded:
            await self.load()

        needle = text.strip().lower()
        clinics = self.mirror.items
        if not needle:
            return clinics

        return [
            clinic
            for clinic in clinics
            if needle in clinic.nome.lower()
            or needle in clinic.bairro.lower()
            or needle in clinic.cidade.lower()
        ]
