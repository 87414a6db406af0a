"""
Cliente mínimo de la API REST de un full node Aptos.

Un solo request por invocación, sin reintentos: si la lectura falla,
el siguiente ciclo de sincronización lo vuelve a intentar.
"""

from __future__ import annotations

from typing import Optional

import httpx
from loguru import logger

from .types import FetchResult, Resource, parse_resources


class AptosClient:
    """
    Cliente HTTP de lectura de recursos para una cuenta fija.

    Importante:
    - Nunca propaga errores: cualquier fallo se loguea y se devuelve como
      ``FetchResult.failed``.
    - Usa el timeout por defecto del transporte (httpx).
    """

    def __init__(
        self,
        *,
        base_url: str,
        account: str,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._account = account
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    @property
    def resources_url(self) -> str:
        return f"{self._base_url}/accounts/{self._account}/resources"

    async def fetch(self) -> FetchResult:
        """
        Lee los recursos de la cuenta.

        Returns:
            FetchResult: ok con la lista (posiblemente vacía) o failed con la causa
        """
        url = self.resources_url
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            resources = parse_resources(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(f"Error obteniendo recursos: el nodo respondió {e.response.status_code}")
            return FetchResult.failed(f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Error obteniendo recursos de {url}: {e!r}")
            return FetchResult.failed(f"{type(e).__name__}: {e}")
        except (ValueError, RecursionError) as e:
            # JSONDecodeError, MalformedResponseError o JSON anidado demasiado profundo
            logger.error(f"Respuesta de recursos inválida: {type(e).__name__}: {e}")
            return FetchResult.failed(f"Respuesta inválida: {e}")

        logger.debug(f"Recursos obtenidos: {len(resources)} para {self._account}")
        return FetchResult.ok(resources)

    async def fetch_resources(self) -> list[Resource]:
        """Lista de recursos, o lista vacía ante cualquier fallo."""
        result = await self.fetch()
        return result.resources

    async def aclose(self) -> None:
        """Cierra el cliente HTTP si fue creado aquí."""
        if self._owns_client:
            await self._client.aclose()
