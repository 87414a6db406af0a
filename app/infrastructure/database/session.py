"""
Gestión de la conexión a base de datos.

La conexión no vive como estado global del módulo: se construye un
``Database`` durante el arranque y se inyecta en el sincronizador y en la
capa API (ver ``app.core.events``).
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool


# Base para modelos de SQLAlchemy
Base = declarative_base()


def _create_engine_args(url: str, *, echo: bool = False, pool_size: int = 5, max_overflow: int = 10) -> dict:
    """
    Construye los argumentos del engine segun el tipo de base de datos.
    PostgreSQL usa pool de conexiones, SQLite no lo soporta.
    """
    args = {
        "echo": echo,
        "future": True,
    }

    # Configuracion de pool solo para PostgreSQL
    if "postgresql" in url:
        args.update({
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_pre_ping": True,  # Verifica conexion antes de usar
        })
    # SQLite en memoria: una sola conexion compartida o cada sesion ve una base vacia
    elif url.startswith("sqlite") and ":memory:" in url:
        args.update({
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        })

    return args


class Database:
    """
    Handle de la base de datos: engine + session factory.

    Se crea una vez al inicio del proceso y se mantiene abierto
    hasta el shutdown.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            **_create_engine_args(url, echo=echo, pool_size=pool_size, max_overflow=max_overflow),
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Sesión transaccional: commit al salir, rollback si hay excepción.

        Yields:
            AsyncSession: Sesión de base de datos
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def init(self) -> None:
        """Inicializa la base de datos creando todas las tablas."""
        # Registrar modelos en Base.metadata antes de crear tablas
        from app.infrastructure.database import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Cierra las conexiones de la base de datos."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Obtiene el handle de base de datos creado en el arranque."""
    return request.app.state.db


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Generador de sesiones de base de datos.
    Para usar como dependencia en FastAPI.

    Yields:
        AsyncSession: Sesión de base de datos
    """
    async with get_database(request).session() as session:
        yield session
