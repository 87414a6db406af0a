"""
Dependencias para inyeccion de casos de uso.
"""
from typing import Optional

from fastapi import Request

from app.application.use_cases.sync_use_cases import BlockchainSyncUseCases
from app.core.config import Settings
from app.infrastructure.scheduler.sync_scheduler import SyncScheduler


def get_sync_use_cases(request: Request) -> BlockchainSyncUseCases:
    """
    Dependencia para obtener el sincronizador creado en el arranque.

    Returns:
        BlockchainSyncUseCases: Instancia compartida del sincronizador
    """
    return request.app.state.sync_use_cases


def get_sync_scheduler(request: Request) -> Optional[SyncScheduler]:
    """Scheduler activo, o None si la sincronizacion periodica esta deshabilitada."""
    return getattr(request.app.state, "sync_scheduler", None)


def get_app_settings(request: Request) -> Settings:
    """Configuracion con la que se construyo la aplicacion."""
    return request.app.state.settings
