"""
Endpoints para la sincronizacion blockchain -> base de datos.
Permite disparar un ciclo manual y consultar el estado desde el dashboard.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from loguru import logger

from app.application.dto.sync_dto import SyncResultDTO, SyncStatusDTO
from app.application.use_cases.sync_use_cases import BlockchainSyncUseCases
from app.api.v1.dependencies.use_case_deps import get_app_settings, get_sync_scheduler, get_sync_use_cases
from app.core.config import Settings
from app.infrastructure.scheduler.sync_scheduler import SyncScheduler


router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post(
    "",
    response_model=SyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Ejecutar un ciclo de sincronizacion"
)
async def trigger_sync(
    sync_use_cases: BlockchainSyncUseCases = Depends(get_sync_use_cases),
) -> SyncResultDTO:
    """
    Ejecuta un ciclo ahora, respetando el limite de un ciclo a la vez.

    Returns:
        SyncResultDTO con el estado del ciclo (``busy`` si habia otro en curso)
    """
    logger.info("Iniciando sincronizacion manual desde API")
    return await sync_use_cases.sync_blockchain()


@router.get("/status", response_model=SyncStatusDTO, summary="Estado de la sincronizacion")
async def get_sync_status(
    sync_use_cases: BlockchainSyncUseCases = Depends(get_sync_use_cases),
    scheduler: Optional[SyncScheduler] = Depends(get_sync_scheduler),
    config: Settings = Depends(get_app_settings),
) -> SyncStatusDTO:
    return SyncStatusDTO(
        account=config.APTOS_ACCOUNT,
        interval_seconds=config.SYNC_INTERVAL_SECONDS,
        running=sync_use_cases.running,
        next_run_at=scheduler.next_run_time if scheduler else None,
        last_result=sync_use_cases.last_result,
    )
