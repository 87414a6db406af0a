"""
Dependencias para inyección de repositorios.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.session import get_db
from app.infrastructure.repositories.resource_repository import ResourceRepository


async def get_resource_repository(
    session: AsyncSession = Depends(get_db)
) -> ResourceRepository:
    """
    Dependencia para obtener el repositorio de recursos.

    Args:
        session: Sesión de base de datos

    Returns:
        ResourceRepository: Instancia del repositorio de recursos
    """
    return ResourceRepository(session)
