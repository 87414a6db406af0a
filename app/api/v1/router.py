"""
Router principal de la API.
Agrupa los endpoints de datos y sincronizacion.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import data, sync


# Router principal (se monta bajo /api)
api_router = APIRouter()

# Incluir routers de endpoints especificos
api_router.include_router(data.router)
api_router.include_router(sync.router)
