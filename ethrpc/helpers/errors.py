"""Exception hierarchy raised by the JSON-RPC client."""

from typing import Any


class EthRpcError(Exception):
    """Base class for every error raised by ethrpc."""


class InvalidArgument(EthRpcError, ValueError):
    """Caller supplied a malformed block tag, filter, URL list or number."""


class InvalidNumericInput(InvalidArgument):
    """Value is neither a valid decimal nor a valid 0x-prefixed hex number."""


class NumericOverflowError(InvalidArgument, OverflowError):
    """Exact value does not fit the requested machine representation."""


class TransportError(EthRpcError):
    """Request never produced a usable JSON-RPC envelope.

    Covers connection failures, timeouts, non-2xx statuses and bodies that
    are not a JSON object.
    """

    def __init__(self, endpoint: str, cause: BaseException | str) -> None:
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(f"Transport error from {endpoint}: {cause}")


class AllEndpointsFailedError(EthRpcError):
    """Every endpoint of a failover strategy raised a TransportError."""

    def __init__(self, errors: list[TransportError] | tuple[TransportError, ...]) -> None:
        self.errors = tuple(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"All {len(self.errors)} endpoints failed: {details}")

    @property
    def endpoints(self) -> list[str]:
        """Endpoints in the order they were attempted."""
        return [error.endpoint for error in self.errors]


class RpcError(EthRpcError):
    """Node answered with a JSON-RPC error object."""

    def __init__(
        self,
        code: int,
        message: str,
        data: Any = None,
        method: str | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.data = data
        self.method = method
        prefix = f"{method} " if method else ""
        super().__init__(f"{prefix}RPC error {code}: {message}")


class MalformedResponse(EthRpcError):
    """Payload is missing mandatory fields or contradicts the JSON-RPC envelope."""

    def __init__(self, kind: str, detail: object) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"Malformed {kind}: {detail}")


__all__ = [
    "AllEndpointsFailedError",
    "EthRpcError",
    "InvalidArgument",
    "InvalidNumericInput",
    "MalformedResponse",
    "NumericOverflowError",
    "RpcError",
    "TransportError",
]
