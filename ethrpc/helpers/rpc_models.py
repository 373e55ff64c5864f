"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ethrpc.helpers.constants import JSON_RPC_VERSION


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: str = Field(default=JSON_RPC_VERSION, description="JSON-RPC version")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(
        default_factory=list, description="Method parameters"
    )
    id: int | str = Field(..., description="Request ID")


class JsonRpcErrorObject(BaseModel):
    """Error member of a JSON-RPC 2.0 response."""

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: Any = Field(default=None, description="Optional node specific details")


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response envelope.

    Exactly one of ``result`` and ``error`` must be present. A present
    ``result`` may be ``null``, which nodes use for unknown blocks and
    transactions.
    """

    jsonrpc: str | None = Field(default=None, description="JSON-RPC version")
    id: int | str | None = Field(default=None, description="Request ID")
    result: Any = Field(default=None, description="Call result")
    error: JsonRpcErrorObject | None = Field(default=None, description="Call error")

    @model_validator(mode="after")
    def check_result_xor_error(self) -> Self:
        """Reject envelopes carrying both or neither of result and error."""
        has_result = "result" in self.model_fields_set
        has_error = self.error is not None
        if has_result and has_error:
            msg = "response contains both result and error"
            raise ValueError(msg)
        if not has_result and not has_error:
            msg = "response contains neither result nor error"
            raise ValueError(msg)
        return self


__all__ = [
    "JsonRpcErrorObject",
    "JsonRpcRequest",
    "JsonRpcResponse",
]
