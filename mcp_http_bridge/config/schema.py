"""Pydantic configuration model for MCP HTTP Bridge.

The configuration is built once at startup and never mutated; the
gateway client, aggregator and router all receive the same instance.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mcp_http_bridge.constants import (
    DEFAULT_CLIENT_NAME,
    DEFAULT_ENDPOINT_PATTERN,
    DEFAULT_GATEWAY_URL,
    NAME_DELIMITER,
    SERVER_TOKEN,
)


class BridgeConfig(BaseModel):
    """Gateway address, backend registry and request identity."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    gateway_url: str = Field(
        default=DEFAULT_GATEWAY_URL,
        min_length=1,
        description="Base URL of the HTTP gateway. Trailing slashes are stripped.",
    )
    servers: Tuple[str, ...] = Field(
        ...,
        description="Backend server names, in the order their tools are listed.",
    )
    client_name: str = Field(
        default=DEFAULT_CLIENT_NAME,
        min_length=1,
        description="Sent to the gateway in the X-Client-Name header.",
    )
    auth_token: Optional[str] = Field(
        default=None,
        description="Bearer token for authenticated gateways.",
    )
    endpoint_pattern: str = Field(
        default=DEFAULT_ENDPOINT_PATTERN,
        description="Endpoint path; '{server}' is replaced by the backend name.",
    )
    request_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="HTTP timeout in seconds. Unset uses the HTTP client default.",
    )

    @field_validator("gateway_url", mode="before")
    @classmethod
    def _strip_gateway_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("servers", mode="before")
    @classmethod
    def _split_servers(cls, v: Any) -> Any:
        """Accept ``"a, b,c"`` or a list; trim, drop blanks and duplicates."""
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, (list, tuple)):
            return v
        names: List[str] = []
        for item in v:
            name = str(item).strip()
            if name and name not in names:
                names.append(name)
        return tuple(names)

    @field_validator("servers")
    @classmethod
    def _check_servers(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("at least one server name is required")
        bad = [name for name in v if NAME_DELIMITER in name]
        if bad:
            raise ValueError(
                f"server names must not contain '{NAME_DELIMITER}' "
                f"(tool names are routed as server{NAME_DELIMITER}tool): {', '.join(bad)}"
            )
        return v

    @field_validator("auth_token", mode="before")
    @classmethod
    def _empty_token_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("endpoint_pattern")
    @classmethod
    def _check_pattern(cls, v: str) -> str:
        count = v.count(SERVER_TOKEN)
        if count != 1:
            raise ValueError(
                f"endpoint pattern must contain '{SERVER_TOKEN}' exactly once (found {count})"
            )
        return v

    def build_url(self, svr_name: str) -> str:
        """Full endpoint URL for *svr_name*."""
        return f"{self.gateway_url}{self.endpoint_pattern.replace(SERVER_TOKEN, svr_name)}"
