"""Request payloads and response decoding shared by the registry clients."""

import json
from typing import Any

import httpx

from .exceptions import DecodingError, FieldTypeError, ResponseCodeError

CONTENT_TYPE = "application/vnd.schemaregistry.v1+json"


def schema_payload(schema: str) -> bytes:
    """Encode the ``{"schema": ...}`` body sent with every POST."""
    return json.dumps({"schema": schema}).encode("utf-8")


def check_status(response: httpx.Response) -> None:
    """Raise ResponseCodeError unless the registry answered exactly 200."""
    if response.status_code != 200:
        raise ResponseCodeError(response.status_code, response.text)


def _decode(response: httpx.Response) -> Any:
    try:
        return json.loads(response.content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodingError(f"Invalid JSON in registry response: {e}") from e


def json_object(response: httpx.Response) -> dict[str, Any]:
    """Decode the response body as a JSON object."""
    body = _decode(response)
    if not isinstance(body, dict):
        raise DecodingError(
            f"Expected a JSON object in registry response, got {type(body).__name__}"
        )
    return body


def string_list(response: httpx.Response) -> list[str]:
    """Decode the response body as a JSON array of strings, order preserved."""
    body = _decode(response)
    if not isinstance(body, list) or not all(isinstance(item, str) for item in body):
        raise DecodingError("Expected a JSON array of strings in registry response")
    return body


def string_field(body: dict[str, Any], field: str) -> str:
    if field not in body:
        raise FieldTypeError(field, "string")
    value = body[field]
    if not isinstance(value, str):
        raise FieldTypeError(field, "string", value)
    return value


def integer_field(body: dict[str, Any], field: str) -> int:
    """Extract a JSON number as an int.

    Booleans are rejected even though Python treats them as ints, and so are
    floats with a fractional part.
    """
    if field not in body:
        raise FieldTypeError(field, "number")
    value = body[field]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FieldTypeError(field, "number", value)
    if isinstance(value, float) and not value.is_integer():
        raise FieldTypeError(field, "integral number", value)
    return int(value)


def boolean_field(body: dict[str, Any], field: str) -> bool:
    if field not in body:
        raise FieldTypeError(field, "boolean")
    value = body[field]
    if not isinstance(value, bool):
        raise FieldTypeError(field, "boolean", value)
    return value


def buffered_response(response: httpx.Response, body: bytes) -> httpx.Response:
    """Rebuild a streamed response around its already-decoded body."""
    headers = {}
    if "Content-Type" in response.headers:
        headers["Content-Type"] = response.headers["Content-Type"]
    return httpx.Response(
        response.status_code,
        headers=headers,
        content=body,
        request=response.request,
    )
