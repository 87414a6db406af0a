"""
Scheduler del ciclo de sincronizacion.

Usa APScheduler sobre el mismo event loop que atiende la API:
- Primera ejecucion inmediata al arrancar
- Luego cada ``interval_seconds``
- ``max_instances=1`` + ``coalesce``: nunca dos ciclos solapados
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from app.application.use_cases.sync_use_cases import BlockchainSyncUseCases
from app.shared.constants.sync_constants import SYNC_JOB_ID


class SyncScheduler:
    """
    Ejecuta ``BlockchainSyncUseCases.sync_blockchain`` periodicamente.

    Los errores de un ciclo se loguean y no detienen el timer.
    """

    def __init__(
        self,
        sync_use_cases: BlockchainSyncUseCases,
        *,
        interval_seconds: int = 60,
        scheduler: Optional[AsyncIOScheduler] = None,
    ) -> None:
        self._sync = sync_use_cases
        self.interval_seconds = interval_seconds
        self.scheduler = scheduler or AsyncIOScheduler(timezone=timezone.utc)

    async def run_cycle(self) -> None:
        """Job del scheduler: un ciclo, sin propagar errores."""
        try:
            await self._sync.sync_blockchain()
        except Exception as e:
            logger.exception(f"Ciclo de sincronizacion fallido: {e!r}")

    def start(self) -> None:
        """Registra el job y arranca el scheduler (requiere event loop activo)."""
        self.scheduler.add_job(
            self.run_cycle,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=SYNC_JOB_ID,
            name="Sincronizacion blockchain",
            next_run_time=datetime.now(timezone.utc),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(
            f"Scheduler iniciado: sync cada {self.interval_seconds}s "
            f"(primera ejecucion inmediata)"
        )

    @property
    def next_run_time(self) -> Optional[datetime]:
        job = self.scheduler.get_job(SYNC_JOB_ID)
        return getattr(job, "next_run_time", None)

    async def shutdown(self) -> None:
        """
        Detiene el scheduler y espera a que el ciclo en curso termine.

        APScheduler cancela el job en ejecucion; el lock del sincronizador
        se libera cuando la cancelacion (y su rollback) se completa.
        """
        if not self.scheduler.running:
            return
        self.scheduler.shutdown(wait=False)
        # APScheduler >= 3.11 aplica el shutdown via call_soon_threadsafe
        await asyncio.sleep(0)
        await self._sync.wait_idle()
        logger.info("Scheduler detenido")
