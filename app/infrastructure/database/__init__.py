"""
Configuración de base de datos.

Importa todos los modelos para que se registren con Base
antes de crear las tablas.
"""
from app.infrastructure.database.models import BlockchainResourceModel
from app.infrastructure.database.session import Base, Database

__all__ = ["Base", "BlockchainResourceModel", "Database"]
