"""
Ciclo de vida de la aplicacion (arranque y cierre).

Construye los recursos compartidos una sola vez y los deja en ``app.state``:
- ``db``: handle de base de datos
- ``aptos_client``: cliente del full node
- ``sync_use_cases``: sincronizador
- ``sync_scheduler``: scheduler periodico (si SYNC_ENABLED)
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from loguru import logger

from app.application.use_cases.sync_use_cases import BlockchainSyncUseCases
from app.core.config import Settings, settings as default_settings
from app.infrastructure.database.session import Database
from app.infrastructure.external.aptos.client import AptosClient
from app.infrastructure.scheduler.sync_scheduler import SyncScheduler


def build_lifespan(config: Settings = default_settings):
    """
    Construye el lifespan de FastAPI para la configuracion dada.

    Args:
        config: Configuracion de la aplicacion

    Returns:
        Callable: Context manager asincrono de ciclo de vida
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await startup(app, config)
        try:
            yield
        finally:
            await shutdown(app)

    return lifespan


async def startup(app: FastAPI, config: Settings) -> None:
    """Inicializa recursos al inicio de la aplicacion."""
    try:
        logger.info(f"Iniciando {config.APP_NAME} v{config.APP_VERSION}")
        logger.info(f"Entorno: {config.ENVIRONMENT}")

        # Configurar logging adicional
        app.state.log_sink_id = logger.add(
            config.LOG_FILE,
            rotation="500 MB",
            retention="10 days",
            level=config.LOG_LEVEL
        )

        # Conexion a base de datos (crea tablas si no existen)
        database = Database(
            config.DATABASE_URL,
            echo=config.DEBUG,
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_MAX_OVERFLOW,
        )
        await database.init()
        app.state.db = database
        logger.info("Base de datos inicializada")

        client = AptosClient(base_url=config.APTOS_NODE_URL, account=config.APTOS_ACCOUNT)
        app.state.aptos_client = client
        app.state.sync_use_cases = BlockchainSyncUseCases(client=client, database=database)

        if config.SYNC_ENABLED:
            scheduler = SyncScheduler(
                app.state.sync_use_cases,
                interval_seconds=config.SYNC_INTERVAL_SECONDS,
            )
            scheduler.start()
            app.state.sync_scheduler = scheduler
        else:
            app.state.sync_scheduler = None
            logger.warning("CONFIG: SYNC_ENABLED=false - la sincronizacion periodica no correra")

        logger.success("Aplicacion iniciada correctamente")
        _print_available_urls(config)

    except Exception as e:
        logger.error(f"Error durante startup: {e}")
        logger.exception("Detalle del error:")
        raise


def _print_available_urls(config: Settings) -> None:
    """Imprime las URLs disponibles de la aplicacion."""
    access_host = "localhost" if config.HOST == "0.0.0.0" else config.HOST
    base_url = f"http://{access_host}:{config.PORT}"

    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info(f"<cyan>  Dashboard:   {base_url}/</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Datos:       {base_url}/api/data</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Health:      {base_url}/health</cyan>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")


async def shutdown(app: FastAPI) -> None:
    """Libera recursos al cerrar la aplicacion."""
    logger.info("Cerrando aplicacion...")

    scheduler = getattr(app.state, "sync_scheduler", None)
    if scheduler is not None:
        await scheduler.shutdown()

    # Un POST /api/sync puede seguir en curso: no cerrar cliente ni engine debajo
    sync_use_cases = getattr(app.state, "sync_use_cases", None)
    if sync_use_cases is not None:
        await sync_use_cases.wait_idle()

    client = getattr(app.state, "aptos_client", None)
    if client is not None:
        await client.aclose()
        logger.info("Cliente del nodo cerrado")

    database = getattr(app.state, "db", None)
    if database is not None:
        await database.close()
        logger.info("Conexiones de base de datos cerradas")

    logger.success("Aplicacion cerrada correctamente")

    sink_id = getattr(app.state, "log_sink_id", None)
    if sink_id is not None:
        logger.remove(sink_id)
