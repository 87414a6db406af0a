"""
Repositorio para la colección espejada de recursos on-chain.
"""
from typing import Any, Dict, Iterable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from app.infrastructure.database.models import BlockchainResourceModel
from app.infrastructure.external.aptos.types import Resource


class ResourceRepository:
    """
    Gestiona la tabla blockchain_resources.

    No hace commit: la transacción la controla quien abre la sesión.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert(self, resource: Resource) -> bool:
        """
        Reemplaza el documento con el mismo ``type`` o inserta uno nuevo.

        Returns:
            bool: True si se insertó, False si se actualizó
        """
        existing = await self.db.get(BlockchainResourceModel, resource.type)

        if existing:
            existing.data = resource.data
            inserted = False
        else:
            self.db.add(BlockchainResourceModel(type=resource.type, data=resource.data))
            inserted = True

        await self.db.flush()
        return inserted

    async def upsert_many(self, resources: Iterable[Resource]) -> int:
        """
        Upsert secuencial, en el orden recibido.

        Returns:
            int: Cantidad de upserts emitidos
        """
        count = 0
        inserted = 0
        for resource in resources:
            if await self.upsert(resource):
                inserted += 1
            count += 1
        logger.debug(f"Upserts emitidos: {count} (nuevos: {inserted})")
        return count

    async def get_all(self) -> List[Dict[str, Any]]:
        """
        Obtiene todos los documentos, ordenados por tipo.
        """
        query = select(BlockchainResourceModel).order_by(BlockchainResourceModel.type)
        result = await self.db.execute(query)
        return [row.to_document() for row in result.scalars().all()]

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(BlockchainResourceModel))
        return int(result.scalar_one())
