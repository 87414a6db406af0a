"""
Lectura de recursos on-chain desde un full node Aptos.

Este paquete solo lee: la persistencia y el scheduling viven en la capa
de aplicación (``BlockchainSyncUseCases``).
"""
from .client import AptosClient
from .types import FetchResult, MalformedResponseError, Resource, parse_resources

__all__ = [
    "AptosClient",
    "FetchResult",
    "MalformedResponseError",
    "Resource",
    "parse_resources",
]
