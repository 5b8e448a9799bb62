"""Script to prepare the configured document store.

Creates the documents table for the sql backend and seeds the reference
clinics into ``clinicas`` when the collection is empty.
"""

import asyncio

from odontoapp.config import settings
from odontoapp.core.document_store import CLINICS
from odontoapp.main import create_document_store
from odontoapp.reference_data import REFERENCE_CLINICS


async def init_db(seed_clinics: bool = True) -> None:
    """Initialize the store and optionally seed clinics."""
    store = await create_document_store(settings)

    try:
        if settings.document_store_backend == "sql":
            print("✓ Documents table ready")

        if seed_clinics and not await store.query(CLINICS, limit=1):
            for clinic in REFERENCE_CLINICS:
                data = {key: value for key, value in clinic.items() if key != "id"}
                await store.set(CLINICS, clinic["id"], data)
            print(f"✓ Seeded {len(REFERENCE_CLINICS)} clinics")
        else:
            print("• Clinics already present, nothing seeded")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(init_db())
