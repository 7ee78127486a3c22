"""Protocol definitions for schemareg."""

from typing import Protocol, Union, runtime_checkable

from .config import RegistryConfig


@runtime_checkable
class SchemaRegistry(Protocol):
    """
    Protocol for blocking schema registry clients.

    RegistryClient implements this protocol. Code that only needs to talk to a
    registry should depend on the protocol so a fake can stand in for tests.
    """

    def configuration(self) -> RegistryConfig:
        """Return the configuration the client was built with."""
        ...

    def schema_by_id(self, schema_id: int) -> str:
        """
        Fetch the schema registered under a numeric id.

        Args:
            schema_id: Registry-assigned schema id

        Returns:
            The schema document as an uninterpreted string

        Raises:
            ResponseCodeError: If the registry does not answer 200
            DecodingError: If the body is not a JSON object with a string ``schema``
            TransportError: If the request fails before a response arrives

        """
        ...

    def register_subject_version(self, subject: str, schema: str) -> int:
        """
        Register a schema as a new version of a subject.

        Args:
            subject: Subject name, interpolated into the URL unescaped
            schema: Schema document as a string

        Returns:
            The id the registry assigned to the schema

        """
        ...

    def schema_is_compatible_with_subject_version(
        self, subject: str, schema: str, version: Union[str, int]
    ) -> bool:
        """
        Ask the registry whether a schema is compatible with a subject version.

        Args:
            subject: Subject name
            schema: Candidate schema document
            version: Version number or ``"latest"``

        Returns:
            The registry's ``is_compatible`` verdict

        """
        ...

    def subjects(self) -> list[str]:
        """List subject names in the order the registry returns them."""
        ...


@runtime_checkable
class AsyncSchemaRegistry(Protocol):
    """
    Protocol for async schema registry clients.

    AsyncRegistryClient implements this protocol. Each coroutine has the same
    arguments, results and errors as its counterpart on SchemaRegistry.
    """

    def configuration(self) -> RegistryConfig:
        """Return the configuration the client was built with."""
        ...

    async def schema_by_id(self, schema_id: int) -> str:
        """
        Fetch the schema registered under a numeric id.

        See SchemaRegistry.schema_by_id.
        """
        ...

    async def register_subject_version(self, subject: str, schema: str) -> int:
        """
        Register a schema as a new version of a subject.

        Args:
            subject: Subject name, interpolated into the URL unescaped
            schema: Schema document as a string

        Returns:
            The id the registry assigned to the schema

        Raises:
            ResponseCodeError: If the registry does not answer 200
            DecodingError: If the body lacks a numeric ``id`` field
            TransportError: If the request fails or exceeds the configured timeout

        """
        ...

    async def schema_is_compatible_with_subject_version(
        self, subject: str, schema: str, version: Union[str, int]
    ) -> bool:
        """
        Ask the registry whether a schema is compatible with a subject version.

        See SchemaRegistry.schema_is_compatible_with_subject_version.
        """
        ...

    async def subjects(self) -> list[str]:
        """List subject names in the order the registry returns them."""
        ...
