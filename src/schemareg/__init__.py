"""schemareg: blocking and async clients for Confluent-style schema registries."""

from .schema_client import RegistryClient
from .async_client import AsyncRegistryClient
from .config import RegistryConfig
from .protocol import AsyncSchemaRegistry, SchemaRegistry
from .exceptions import (
    SchemaRegistryError,
    TransportError,
    RegistryTimeoutError,
    ResponseCodeError,
    DecodingError,
    FieldTypeError,
    ClientClosedError,
)

__all__ = [
    "RegistryClient",
    "AsyncRegistryClient",
    "RegistryConfig",
    "SchemaRegistry",
    "AsyncSchemaRegistry",
    "SchemaRegistryError",
    "TransportError",
    "RegistryTimeoutError",
    "ResponseCodeError",
    "DecodingError",
    "FieldTypeError",
    "ClientClosedError",
    "new_client",
]

__version__ = "0.1.0"


def new_client(config: RegistryConfig) -> RegistryClient:
    """Convenience function to create a RegistryClient with the default transport.

    Args:
        config: Configuration for the registry connection

    Returns:
        Configured RegistryClient instance

    Note:
        The returned client owns its HTTP connection pool and should be closed
        when done. Consider using it as a context manager.
    """
    return RegistryClient(config)
