"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import ResourceDocumentDTO, SyncResultDTO, SyncStatusDTO

__all__ = [
    "ResourceDocumentDTO",
    "SyncResultDTO",
    "SyncStatusDTO",
]
