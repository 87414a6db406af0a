"""
CLI: un ciclo de sincronizacion blockchain -> base de datos, sin levantar el API.

Util para poblar la base antes del primer arranque o desde un cron externo.
Lee la misma configuracion que el servidor (variables de entorno / .env).

Ejecución:
  python scripts/sync_once.py
  python scripts/sync_once.py --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from app.application.use_cases.sync_use_cases import BlockchainSyncUseCases
from app.core.config import settings
from app.infrastructure.database.session import Database
from app.infrastructure.external.aptos.client import AptosClient
from app.shared.constants.sync_constants import SyncStatus


async def _run(dry_run: bool) -> int:
    client = AptosClient(base_url=settings.APTOS_NODE_URL, account=settings.APTOS_ACCOUNT)
    try:
        if dry_run:
            result = await client.fetch()
            if not result.succeeded:
                logger.error(f"Lectura fallida: {result.error}")
                return 1
            for resource in result.resources:
                print(resource.type)
            logger.info(f"Dry run: {len(result.resources)} recurso(s), nada escrito")
            return 0

        database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
        try:
            await database.init()
            result = await BlockchainSyncUseCases(client=client, database=database).sync_blockchain()
        finally:
            await database.close()
    finally:
        await client.aclose()

    logger.info(f"Sync terminado: status={result.status.value}, upserts={result.upserted}")
    return 0 if result.status == SyncStatus.SUCCESS else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Sincroniza una vez los recursos de la cuenta Aptos.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Solo lee el nodo e imprime los tipos de recurso (no escribe en la base).",
    )
    args = parser.parse_args()
    return asyncio.run(_run(args.dry_run))


if __name__ == "__main__":
    raise SystemExit(main())
