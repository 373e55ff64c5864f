"""Type definitions for JSON-RPC payloads on the wire."""

from typing import Any


# Nested members stay Any; params and results are checked by the pydantic models
type JsonValue = str | int | float | bool | dict[str, Any] | list[Any] | None

# Decoded JSON object, as sent in a request body or returned by a node
type JsonObject = dict[str, JsonValue]

__all__ = ["JsonObject", "JsonValue"]
