"""
Endpoint de lectura de la coleccion espejada.
Pass-through: no transforma los documentos.
"""
from typing import List

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.application.dto.sync_dto import ResourceDocumentDTO
from app.api.v1.dependencies.repository_deps import get_resource_repository
from app.infrastructure.repositories.resource_repository import ResourceRepository
from app.shared.exceptions.storage import StorageReadException


router = APIRouter(prefix="/data", tags=["Data"])


@router.get("", response_model=List[ResourceDocumentDTO], summary="Recursos espejados")
async def get_data(
    repository: ResourceRepository = Depends(get_resource_repository),
) -> List[ResourceDocumentDTO]:
    """
    Retorna todos los documentos de la coleccion como arreglo JSON.
    """
    try:
        docs = await repository.get_all()
    except SQLAlchemyError as e:
        logger.error(f"Error leyendo recursos: {e!r}")
        raise StorageReadException() from e
    return [ResourceDocumentDTO(**doc) for doc in docs]
