"""Blocking client for a Confluent-style schema registry."""

import logging
import threading
import time
from typing import Optional, Union

import httpx

from .config import RegistryConfig
from .exceptions import ClientClosedError, RegistryTimeoutError, TransportError
from .responses import (
    CONTENT_TYPE,
    boolean_field,
    buffered_response,
    check_status,
    integer_field,
    json_object,
    schema_payload,
    string_field,
    string_list,
)

logger = logging.getLogger(__name__)


def default_timeout(config: RegistryConfig) -> httpx.Timeout:
    """Per-operation timeouts for the default transport.

    The read bound covers the wait for response headers. The overall request
    deadline is enforced by the clients themselves.
    """
    return httpx.Timeout(config.timeout, read=config.response_header_timeout)


def default_limits(config: RegistryConfig) -> httpx.Limits:
    return httpx.Limits(max_keepalive_connections=config.max_idle_connections)


def map_request_error(e: httpx.RequestError, method: str, url: str) -> TransportError:
    """Translate an httpx request failure into the schemareg error hierarchy."""
    if isinstance(e, httpx.TimeoutException):
        return RegistryTimeoutError(f"Timed out on {method} {url}: {e}", e)
    return TransportError(f"Request error on {method} {url}: {e}", e)


def deadline_exceeded(config: RegistryConfig, method: str, url: str) -> RegistryTimeoutError:
    return RegistryTimeoutError(
        f"Timed out on {method} {url}: no complete response within {config.timeout}s"
    )


class RegistryClient:
    """Blocking client for interacting with a schema registry.

    Each method issues exactly one HTTP request and blocks until the registry
    answers or ``config.timeout`` elapses. Nothing is retried or cached, and
    the client keeps no per-call state, so one instance can be shared between
    threads.
    """

    def __init__(self, config: RegistryConfig, http_client: Optional[httpx.Client] = None):
        """Initialize the registry client.

        Args:
            config: Configuration for the registry connection
            http_client: Optional caller-owned httpx client. When omitted, a client
                with bounded idle connections and short timeouts is created on
                first use and closed by ``close()``.
        """
        self.config = config
        self._owns_client = http_client is None
        self._client: Optional[httpx.Client] = http_client
        self._lock = threading.Lock()

    def __enter__(self) -> "RegistryClient":
        self._ensure_client()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _ensure_client(self) -> httpx.Client:
        """Ensure HTTP client is initialized."""
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    timeout=default_timeout(self.config),
                    limits=default_limits(self.config),
                )
            elif self._client.is_closed:
                raise ClientClosedError("The supplied HTTP client has been closed")
            return self._client

    def close(self) -> None:
        """Close the HTTP client if this instance created it.

        A later call opens a fresh connection pool.
        """
        with self._lock:
            if self._owns_client and self._client is not None:
                self._client.close()
                self._client = None

    def configuration(self) -> RegistryConfig:
        return self.config

    def _request(self, method: str, path: str, schema: Optional[str] = None) -> httpx.Response:
        client = self._ensure_client()
        url = self.config.url(path)
        kwargs = {}
        if schema is not None:
            kwargs = {
                "content": schema_payload(schema),
                "headers": {"Content-Type": CONTENT_TYPE},
            }

        deadline = time.monotonic() + self.config.timeout
        try:
            with client.stream(method, url, **kwargs) as streamed:
                body = bytearray()
                for chunk in streamed.iter_bytes():
                    if time.monotonic() > deadline:
                        raise deadline_exceeded(self.config, method, url)
                    body.extend(chunk)
                if time.monotonic() > deadline:
                    raise deadline_exceeded(self.config, method, url)
        except httpx.RequestError as e:
            raise map_request_error(e, method, url) from e

        response = buffered_response(streamed, bytes(body))
        logger.debug("%s %s -> %d", method, url, response.status_code)
        check_status(response)
        return response

    def schema_by_id(self, schema_id: int) -> str:
        """Fetch a schema by its registry id.

        Args:
            schema_id: Id assigned by the registry

        Returns:
            Schema document as a string

        Raises:
            ResponseCodeError: If the registry does not answer 200
            DecodingError: If the body is not JSON or lacks a string ``schema`` field
            TransportError: For connection failures and timeouts
        """
        response = self._request("GET", f"/schemas/ids/{schema_id}")
        return string_field(json_object(response), "schema")

    def register_subject_version(self, subject: str, schema: str) -> int:
        """Register a schema under a subject and return the id the registry assigned.

        Args:
            subject: Subject name, used in the URL as given
            schema: Schema document as a string

        Returns:
            Schema id

        Raises:
            ResponseCodeError: If the registry does not answer 200
            DecodingError: If the body is not JSON or lacks a numeric ``id`` field
            TransportError: For connection failures and timeouts
        """
        response = self._request("POST", f"/subjects/{subject}/versions", schema)
        return integer_field(json_object(response), "id")

    def schema_is_compatible_with_subject_version(
        self, subject: str, schema: str, version: Union[str, int]
    ) -> bool:
        """Check a candidate schema against an existing subject version.

        Args:
            subject: Subject name, used in the URL as given
            schema: Candidate schema document
            version: Version number or ``"latest"``, used in the URL as given

        Returns:
            True if the registry reports the schema as compatible
        """
        path = f"/compatibility/subjects/{subject}/versions/{version}"
        response = self._request("POST", path, schema)
        return boolean_field(json_object(response), "is_compatible")

    def subjects(self) -> list[str]:
        """List the registry's subjects in the order it returns them."""
        return string_list(self._request("GET", "/subjects"))
