"""
Casos de uso de la aplicacion.
"""
from .sync_use_cases import BlockchainSyncUseCases

__all__ = ["BlockchainSyncUseCases"]
