"""JSON-RPC envelope and tool descriptor models.

Inbound shapes are validated leniently: unknown keys are kept so that
backend-specific metadata survives the round trip through the bridge.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mcp_http_bridge.constants import JSONRPC_VERSION

RequestId = Union[int, str]


class ToolDescriptor(BaseModel):
    """A tool as advertised by a backend.

    Only ``name`` and ``description`` are interpreted; every other field
    (``inputSchema``, ``annotations``, ...) is carried along untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(..., min_length=1)
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_dict(self) -> Dict[str, Any]:
        """Return the descriptor as a plain dict, extension fields included."""
        return self.model_dump()


class RpcRequest(BaseModel):
    """Outbound JSON-RPC request envelope."""

    model_config = ConfigDict(frozen=True)

    method: str
    id: RequestId
    params: Optional[Dict[str, Any]] = None
    jsonrpc: str = JSONRPC_VERSION

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the wire; ``params`` is omitted when unset."""
        payload: Dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "id": self.id,
        }
        if self.params is not None:
            payload["params"] = self.params
        return payload


class RpcError(BaseModel):
    """The ``error`` member of a JSON-RPC response."""

    model_config = ConfigDict(extra="allow", frozen=True)

    code: Any = None
    message: str = ""
    data: Any = None

    @field_validator("message", mode="before")
    @classmethod
    def _message_as_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        try:
            return json.dumps(v)
        except (TypeError, ValueError):
            return str(v)


class RpcResponse(BaseModel):
    """Inbound JSON-RPC response envelope."""

    model_config = ConfigDict(extra="allow", frozen=True)

    jsonrpc: str = JSONRPC_VERSION
    id: Optional[RequestId] = None
    result: Any = None
    error: Optional[RpcError] = None

    @field_validator("error", mode="before")
    @classmethod
    def _coerce_error(cls, v: Any) -> Any:
        """Accept a bare string where an error object is expected."""
        if isinstance(v, str):
            return {"message": v}
        return v

    @property
    def is_error(self) -> bool:
        return self.error is not None
