"""Async client for a Confluent-style schema registry."""

import asyncio
import logging
from typing import Optional, Union

import httpx

from .config import RegistryConfig
from .exceptions import ClientClosedError
from .responses import (
    CONTENT_TYPE,
    boolean_field,
    check_status,
    integer_field,
    json_object,
    schema_payload,
    string_field,
    string_list,
)
from .schema_client import (
    deadline_exceeded,
    default_limits,
    default_timeout,
    map_request_error,
)

logger = logging.getLogger(__name__)


class AsyncRegistryClient:
    """Async client for interacting with a schema registry.

    Mirrors RegistryClient on top of ``httpx.AsyncClient``. Concurrent
    coroutines may share one instance.
    """

    def __init__(self, config: RegistryConfig, http_client: Optional[httpx.AsyncClient] = None):
        """Initialize the async registry client.

        Args:
            config: Configuration for the registry connection
            http_client: Optional caller-owned ``httpx.AsyncClient``. It is used
                as-is and never closed by this client.
        """
        self.config = config
        self._owns_client = http_client is None
        self._client: Optional[httpx.AsyncClient] = http_client

    async def __aenter__(self) -> "AsyncRegistryClient":
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=default_timeout(self.config),
                limits=default_limits(self.config),
            )
        elif self._client.is_closed:
            raise ClientClosedError("The supplied HTTP client has been closed")
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it.

        A later call opens a fresh connection pool.
        """
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    aclose = close

    def configuration(self) -> RegistryConfig:
        return self.config

    async def _request(self, method: str, path: str, schema: Optional[str] = None) -> httpx.Response:
        client = self._ensure_client()
        url = self.config.url(path)
        kwargs = {}
        if schema is not None:
            kwargs = {
                "content": schema_payload(schema),
                "headers": {"Content-Type": CONTENT_TYPE},
            }

        try:
            # The whole exchange, body included, must finish within config.timeout
            response = await asyncio.wait_for(
                client.request(method, url, **kwargs), timeout=self.config.timeout
            )
        except asyncio.TimeoutError as e:
            raise deadline_exceeded(self.config, method, url) from e
        except httpx.RequestError as e:
            raise map_request_error(e, method, url) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        check_status(response)
        return response

    async def schema_by_id(self, schema_id: int) -> str:
        """Fetch a schema by its registry id."""
        response = await self._request("GET", f"/schemas/ids/{schema_id}")
        return string_field(json_object(response), "schema")

    async def register_subject_version(self, subject: str, schema: str) -> int:
        """Register a schema under a subject and return the assigned id."""
        response = await self._request("POST", f"/subjects/{subject}/versions", schema)
        return integer_field(json_object(response), "id")

    async def schema_is_compatible_with_subject_version(
        self, subject: str, schema: str, version: Union[str, int]
    ) -> bool:
        """Check a candidate schema against an existing subject version."""
        path = f"/compatibility/subjects/{subject}/versions/{version}"
        response = await self._request("POST", path, schema)
        return boolean_field(json_object(response), "is_compatible")

    async def subjects(self) -> list[str]:
        response = await self._request("GET", "/subjects")
        return string_list(response)
