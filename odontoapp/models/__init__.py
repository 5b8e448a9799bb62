"""Database models."""

from odontoapp.models.documents import documents, metadata

__all__ = [
    "documents",
    "metadata",
]
