"""
DTOs relacionados con la sincronizacion blockchain -> base de datos.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.shared.constants.sync_constants import SyncStatus


class ResourceDocumentDTO(BaseModel):
    """Documento espejado tal como lo expone la API."""

    type: str = Field(..., description="Tipo Move del recurso")
    data: Any = Field(None, description="Payload del recurso")


class SyncResultDTO(BaseModel):
    """Resultado de un ciclo de sincronizacion."""

    status: SyncStatus = Field(..., description="Estado final del ciclo")
    upserted: int = Field(0, description="Upserts emitidos en el ciclo")
    started_at: datetime = Field(..., description="Inicio del ciclo")
    finished_at: Optional[datetime] = Field(None, description="Fin del ciclo")
    error: Optional[str] = Field(None, description="Causa si el ciclo no fue exitoso")


class SyncStatusDTO(BaseModel):
    """Estado del sincronizador para el dashboard."""

    account: str
    interval_seconds: int
    running: bool
    next_run_at: Optional[datetime] = None
    last_result: Optional[SyncResultDTO] = None
