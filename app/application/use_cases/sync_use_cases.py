"""
Casos de uso para sincronizar recursos on-chain hacia la base de datos.

Ciclo (resumen):
- Lee los recursos de la cuenta desde el full node (una sola vez)
- Si la lectura falla, el ciclo se omite y la coleccion queda intacta
- Si no, UPSERT por ``type`` en el orden recibido, todo en una transaccion

Un solo ciclo a la vez: si el timer dispara mientras otro sigue en curso,
la nueva invocacion retorna ``busy`` sin leer ni escribir.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from app.application.dto.sync_dto import SyncResultDTO
from app.infrastructure.database.session import Database
from app.infrastructure.external.aptos.client import AptosClient
from app.infrastructure.repositories.resource_repository import ResourceRepository
from app.shared.constants.sync_constants import SyncStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BlockchainSyncUseCases:
    """
    Orquestador del espejo blockchain -> base de datos.

    Recibe el cliente del nodo y el handle de base de datos ya construidos
    en el arranque.
    """

    def __init__(self, *, client: AptosClient, database: Database) -> None:
        self._client = client
        self._db = database
        self._lock = asyncio.Lock()
        self._last_result: Optional[SyncResultDTO] = None

    @property
    def running(self) -> bool:
        return self._lock.locked()

    @property
    def last_result(self) -> Optional[SyncResultDTO]:
        return self._last_result

    async def sync_blockchain(self) -> SyncResultDTO:
        """
        Ejecuta un ciclo completo de sincronizacion.

        Returns:
            SyncResultDTO: Resultado del ciclo

        Raises:
            Exception: Errores de escritura en la base (tras rollback)
        """
        if self._lock.locked():
            logger.warning("Sync ya está corriendo. Se omite esta invocación.")
            return SyncResultDTO(
                status=SyncStatus.BUSY,
                started_at=_utc_now(),
                finished_at=_utc_now(),
            )

        async with self._lock:
            return await self._run_cycle()

    async def wait_idle(self) -> None:
        """Espera a que termine (o se cancele) el ciclo en curso, si lo hay."""
        if self._lock.locked():
            logger.info("Esperando a que termine el ciclo de sincronizacion en curso...")
        async with self._lock:
            pass

    async def _run_cycle(self) -> SyncResultDTO:
        started_at = _utc_now()

        fetched = await self._client.fetch()
        if not fetched.succeeded:
            logger.warning(f"Lectura al nodo fallida, ciclo omitido: {fetched.error}")
            return self._record(SyncResultDTO(
                status=SyncStatus.SKIPPED,
                started_at=started_at,
                finished_at=_utc_now(),
                error=fetched.error,
            ))

        try:
            async with self._db.session() as session:
                upserted = await ResourceRepository(session).upsert_many(fetched.resources)
        except Exception as e:
            logger.error(f"Error escribiendo recursos en la base: {e!r}")
            self._record(SyncResultDTO(
                status=SyncStatus.FAILED,
                started_at=started_at,
                finished_at=_utc_now(),
                error=type(e).__name__,
            ))
            raise

        logger.info(f"Datos blockchain sincronizados. upserts={upserted}")
        return self._record(SyncResultDTO(
            status=SyncStatus.SUCCESS,
            upserted=upserted,
            started_at=started_at,
            finished_at=_utc_now(),
        ))

    def _record(self, result: SyncResultDTO) -> SyncResultDTO:
        self._last_result = result
        return result
