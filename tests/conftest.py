"""
Configuración de fixtures para pytest.
"""
from typing import AsyncGenerator, Callable
from unittest.mock import AsyncMock

import httpx
import pytest

from app.core.config import Settings
from app.infrastructure.database.session import Database
from app.infrastructure.external.aptos.client import AptosClient
from app.infrastructure.external.aptos.types import FetchResult


# URL de base de datos de prueba
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_NODE_URL = "https://node.test/v1"
TEST_ACCOUNT = "0xabc"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Configuracion aislada: sin scheduler, base en memoria, logs en tmp."""
    return Settings(
        DATABASE_URL=TEST_DATABASE_URL,
        APTOS_NODE_URL=TEST_NODE_URL,
        APTOS_ACCOUNT=TEST_ACCOUNT,
        SYNC_ENABLED=False,
        LOG_FILE=str(tmp_path / "app.log"),
    )


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """
    Handle de base de datos en memoria, con tablas creadas.
    Se descarta al terminar cada test.
    """
    db = Database(TEST_DATABASE_URL)
    await db.init()
    yield db
    await db.close()


@pytest.fixture
def fake_client() -> AsyncMock:
    """Cliente del nodo mockeado; por defecto la cuenta no tiene recursos."""
    client = AsyncMock(spec=AptosClient)
    client.fetch.return_value = FetchResult.ok([])
    return client


@pytest.fixture
def make_aptos_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], AptosClient]:
    """Construye un AptosClient real sobre httpx.MockTransport."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> AptosClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AptosClient(base_url=TEST_NODE_URL, account=TEST_ACCOUNT, client=http_client)

    return _make
