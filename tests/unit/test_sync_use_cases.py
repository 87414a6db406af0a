"""
Tests unitarios para BlockchainSyncUseCases.

Verifican el contrato del ciclo de sincronizacion:
- Un documento por tipo, con el ultimo valor sincronizado.
- Idempotencia entre ciclos con el mismo resultado del nodo.
- Una lectura fallida no toca la coleccion ni propaga errores.
- Nunca dos ciclos a la vez.
"""
from __future__ import annotations

import asyncio
from unittest.mock import patch

import httpx
import pytest

from app.application.use_cases.sync_use_cases import BlockchainSyncUseCases
from app.infrastructure.external.aptos.types import FetchResult, Resource
from app.infrastructure.repositories.resource_repository import ResourceRepository
from app.shared.constants.sync_constants import SyncStatus


def _coin_store(value: str) -> Resource:
    return Resource(type="0x1::coin::CoinStore", data={"value": value})


async def _collection(database) -> list[dict]:
    async with database.session() as session:
        return await ResourceRepository(session).get_all()


class TestBlockchainSyncUseCases:
    """Tests para el ciclo de sincronizacion."""

    @pytest.fixture
    def use_cases(self, fake_client, database) -> BlockchainSyncUseCases:
        return BlockchainSyncUseCases(client=fake_client, database=database)

    # =========================================================================
    # Upsert por tipo
    # =========================================================================

    @pytest.mark.asyncio
    async def test_coin_store_scenario_updates_same_document(self, use_cases, fake_client, database):
        """Primer sync inserta, segundo sync reemplaza data.value sin duplicar."""
        fake_client.fetch.return_value = FetchResult.ok([_coin_store("100")])
        first = await use_cases.sync_blockchain()

        assert first.status == SyncStatus.SUCCESS
        assert await _collection(database) == [
            {"type": "0x1::coin::CoinStore", "data": {"value": "100"}}
        ]

        fake_client.fetch.return_value = FetchResult.ok([_coin_store("150")])
        await use_cases.sync_blockchain()

        docs = await _collection(database)
        assert len(docs) == 1
        assert docs[0]["data"]["value"] == "150"

    @pytest.mark.asyncio
    async def test_one_document_per_distinct_type(self, use_cases, fake_client, database):
        fake_client.fetch.return_value = FetchResult.ok([
            Resource(type="0x1::account::Account", data={"sequence_number": "0"}),
            _coin_store("10"),
            Resource(type="0x1::account::Account", data={"sequence_number": "1"}),
        ])

        result = await use_cases.sync_blockchain()

        assert result.upserted == 3
        assert await _collection(database) == [
            {"type": "0x1::account::Account", "data": {"sequence_number": "1"}},
            {"type": "0x1::coin::CoinStore", "data": {"value": "10"}},
        ]

    @pytest.mark.asyncio
    async def test_second_run_with_same_fetch_is_idempotent(self, use_cases, fake_client, database):
        fake_client.fetch.return_value = FetchResult.ok([
            _coin_store("100"),
            Resource(type="0x1::account::Account", data={"sequence_number": "7"}),
        ])

        await use_cases.sync_blockchain()
        after_first = await _collection(database)
        await use_cases.sync_blockchain()

        assert await _collection(database) == after_first

    @pytest.mark.asyncio
    async def test_stale_types_are_kept(self, use_cases, fake_client, database):
        fake_client.fetch.return_value = FetchResult.ok([_coin_store("1"), Resource(type="0x1::old::Gone", data={})])
        await use_cases.sync_blockchain()

        fake_client.fetch.return_value = FetchResult.ok([_coin_store("2")])
        await use_cases.sync_blockchain()

        types = [doc["type"] for doc in await _collection(database)]
        assert types == ["0x1::coin::CoinStore", "0x1::old::Gone"]

    # =========================================================================
    # Fallos
    # =========================================================================

    @pytest.mark.asyncio
    async def test_unreachable_node_leaves_collection_untouched(self, database, make_aptos_client):
        """Nodo inalcanzable: el ciclo termina sin excepcion y sin upserts."""
        async with database.session() as session:
            await ResourceRepository(session).upsert(_coin_store("100"))

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        use_cases = BlockchainSyncUseCases(client=make_aptos_client(handler), database=database)

        with patch.object(ResourceRepository, "upsert_many") as mock_upsert:
            result = await use_cases.sync_blockchain()

        mock_upsert.assert_not_called()
        assert result.status == SyncStatus.SKIPPED
        assert result.upserted == 0
        assert result.error is not None
        assert await _collection(database) == [
            {"type": "0x1::coin::CoinStore", "data": {"value": "100"}}
        ]

    @pytest.mark.asyncio
    async def test_empty_account_is_a_successful_cycle(self, use_cases, fake_client):
        fake_client.fetch.return_value = FetchResult.ok([])

        result = await use_cases.sync_blockchain()

        assert result.status == SyncStatus.SUCCESS
        assert result.upserted == 0

    @pytest.mark.asyncio
    async def test_write_failure_rolls_back_whole_cycle_and_raises(self, use_cases, fake_client, database):
        fake_client.fetch.return_value = FetchResult.ok([_coin_store("100")])
        await use_cases.sync_blockchain()

        fake_client.fetch.return_value = FetchResult.ok([
            _coin_store("999"),
            Resource(type="0x1::account::Account", data={}),
        ])
        original_upsert = ResourceRepository.upsert
        calls = 0

        async def failing_upsert(self, resource):
            nonlocal calls
            calls += 1
            if calls == 2:
                raise RuntimeError("disk full")
            return await original_upsert(self, resource)

        with patch.object(ResourceRepository, "upsert", failing_upsert):
            with pytest.raises(RuntimeError):
                await use_cases.sync_blockchain()

        assert use_cases.last_result.status == SyncStatus.FAILED
        assert use_cases.last_result.error == "RuntimeError"
        assert await _collection(database) == [
            {"type": "0x1::coin::CoinStore", "data": {"value": "100"}}
        ]

    # =========================================================================
    # Un ciclo a la vez
    # =========================================================================

    @pytest.mark.asyncio
    async def test_overlapping_invocation_returns_busy(self, use_cases, fake_client):
        release = asyncio.Event()

        async def slow_fetch():
            await release.wait()
            return FetchResult.ok([_coin_store("1")])

        fake_client.fetch.side_effect = slow_fetch

        first = asyncio.create_task(use_cases.sync_blockchain())
        await asyncio.sleep(0)
        assert use_cases.running is True

        second = await use_cases.sync_blockchain()
        release.set()
        first_result = await first

        assert second.status == SyncStatus.BUSY
        assert first_result.status == SyncStatus.SUCCESS
        assert fake_client.fetch.await_count == 1
        assert use_cases.running is False

    @pytest.mark.asyncio
    async def test_last_result_tracks_latest_cycle(self, use_cases, fake_client):
        assert use_cases.last_result is None

        fake_client.fetch.return_value = FetchResult.failed("HTTP 502")
        await use_cases.sync_blockchain()
        assert use_cases.last_result.status == SyncStatus.SKIPPED

        fake_client.fetch.return_value = FetchResult.ok([_coin_store("5")])
        await use_cases.sync_blockchain()
        assert use_cases.last_result.status == SyncStatus.SUCCESS
        assert use_cases.last_result.finished_at >= use_cases.last_result.started_at

    @pytest.mark.asyncio
    async def test_wait_idle_blocks_until_cycle_in_progress_finishes(self, use_cases, fake_client):
        release = asyncio.Event()

        async def slow_fetch():
            await release.wait()
            return FetchResult.ok([_coin_store("1")])

        fake_client.fetch.side_effect = slow_fetch

        cycle = asyncio.create_task(use_cases.sync_blockchain())
        await asyncio.sleep(0)
        waiter = asyncio.create_task(use_cases.wait_idle())
        await asyncio.sleep(0)
        assert waiter.done() is False

        release.set()
        await waiter

        assert cycle.done() is True
        assert (await cycle).status == SyncStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_deeply_nested_body_skips_cycle(self, database, make_aptos_client):
        depth = 100_000
        client = make_aptos_client(lambda request: httpx.Response(200, text="[" * depth + "]" * depth))
        use_cases = BlockchainSyncUseCases(client=client, database=database)

        result = await use_cases.sync_blockchain()

        assert result.status == SyncStatus.SKIPPED
        assert use_cases.last_result is result
        assert await _collection(database) == []
