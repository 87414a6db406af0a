"""
Excepciones relacionadas con la capa de persistencia.
"""
from app.shared.exceptions.base import AppException


class StorageReadException(AppException):
    """Excepción cuando no se puede leer la colección espejada."""

    def __init__(self, message: str = "Failed to fetch data"):
        super().__init__(
            message=message,
            status_code=500,
            error_code="STORAGE_READ_ERROR",
        )
