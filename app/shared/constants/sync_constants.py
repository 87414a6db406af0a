"""
Constantes relacionadas con la sincronizacion de recursos on-chain.
"""
from enum import Enum


class SyncStatus(str, Enum):
    """Estados posibles de un ciclo de sincronizacion."""
    SUCCESS = "success"
    SKIPPED = "skipped"  # la lectura al nodo fallo, la coleccion no se toca
    BUSY = "busy"  # ya habia un ciclo en curso
    FAILED = "failed"  # fallo de escritura en la base


SYNC_JOB_ID = "blockchain_sync"
