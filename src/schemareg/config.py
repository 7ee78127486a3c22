"""Configuration classes for the schemareg client."""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_HOST = "http://localhost:8081"


@dataclass(frozen=True)
class RegistryConfig:
    """Configuration for a schema registry client.

    Args:
        host: Base URL of the registry, including scheme (e.g. ``http://registry:8081``).
            A bare hostname is accepted together with ``port``.
        port: Optional port, appended to the host when the host does not name one
        timeout: Overall deadline in seconds for one request, response body included
        response_header_timeout: Seconds to wait for the registry to start responding
        max_idle_connections: Maximum number of idle keep-alive connections kept in the pool
    """
    host: str = DEFAULT_HOST
    port: Optional[int] = None
    timeout: float = 5.0
    response_header_timeout: float = 2.0
    max_idle_connections: int = 5

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host must not be empty")
        if self.port is not None and self.port <= 0:
            raise ValueError(f"port must be positive, got {self.port}")
        if self.timeout <= 0 or self.response_header_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.max_idle_connections < 0:
            raise ValueError("max_idle_connections must not be negative")

    @property
    def base_url(self) -> str:
        """Base URL every request path is appended to, without a trailing slash."""
        host = self.host.rstrip("/")
        if "://" not in host:
            host = f"http://{host}"
        if self.port is not None:
            authority = host.split("://", 1)[1].split("/", 1)[0]
            # A trailing ":<digits>" means the host already names its port
            if not authority.rpartition(":")[2].isdigit():
                scheme, rest = host.split("://", 1)
                hostname, slash, path = rest.partition("/")
                host = f"{scheme}://{hostname}:{self.port}{slash}{path}"
        return host

    def url(self, path: str) -> str:
        """Append ``path`` unmodified to the base URL."""
        return f"{self.base_url}{path}"

    @classmethod
    def from_env(cls, prefix: str = "SCHEMA_REGISTRY_") -> "RegistryConfig":
        """Build a configuration from environment variables.

        Reads ``{prefix}URL``, ``{prefix}PORT`` and ``{prefix}TIMEOUT``; unset
        variables fall back to the dataclass defaults.
        """
        host = os.getenv(f"{prefix}URL", DEFAULT_HOST)
        port = os.getenv(f"{prefix}PORT")
        timeout = os.getenv(f"{prefix}TIMEOUT")

        kwargs = {"host": host}
        if port:
            kwargs["port"] = int(port)
        if timeout:
            kwargs["timeout"] = float(timeout)
        return cls(**kwargs)
