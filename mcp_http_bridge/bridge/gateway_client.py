"""HTTP gateway client.

One :class:`GatewayClient` talks to every backend: the backend name only
selects the endpoint path.  Each call is a single POST of a JSON-RPC
envelope; REST-style ``{"detail": "..."}`` bodies (typical of FastAPI
backends) are turned into JSON-RPC error envelopes so callers only ever
see one response shape.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from mcp_http_bridge.bridge.models import RpcRequest, RpcResponse
from mcp_http_bridge.config.schema import BridgeConfig
from mcp_http_bridge.constants import (
    CLIENT_NAME_HEADER,
    ERROR_BODY_PREVIEW_CHARS,
    JSONRPC_VERSION,
    REST_ERROR_CODE,
    SERVER_NAME,
    SERVER_VERSION,
)
from mcp_http_bridge.errors import MalformedResponseError, TransportError

logger = logging.getLogger(__name__)


def build_headers(config: BridgeConfig) -> Dict[str, str]:
    """Headers sent with every gateway request."""
    headers = {
        "Content-Type": "application/json",
        "User-Agent": f"{SERVER_NAME}/{SERVER_VERSION}",
        CLIENT_NAME_HEADER: config.client_name,
    }
    if config.auth_token:
        headers["Authorization"] = f"Bearer {config.auth_token}"
    return headers


def normalize_response(body: Dict[str, Any], request_id: Any) -> Dict[str, Any]:
    """Map a REST-style ``detail`` error onto a JSON-RPC error envelope.

    Bodies without a ``detail`` are returned unchanged.
    """
    detail = body.get("detail")
    if not detail:
        return body
    message = detail if isinstance(detail, str) else json.dumps(detail)
    return {
        "jsonrpc": JSONRPC_VERSION,
        "error": {"code": REST_ERROR_CODE, "message": message},
        "id": request_id,
    }


class GatewayClient:
    """Async client for the MCP HTTP gateway.

    Parameters
    ----------
    config:
        The bridge configuration (base URL, endpoint pattern, identity).
    transport:
        Optional ``httpx`` transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        config: BridgeConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ── lifecycle ───────────────────────────────────────────────────

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs: Dict[str, Any] = {
                "headers": build_headers(self._config),
                "transport": self._transport,
            }
            if self._config.request_timeout is not None:
                kwargs["timeout"] = self._config.request_timeout
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GatewayClient:
        self._ensure_client()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ── public API ──────────────────────────────────────────────────

    def build_url(self, svr_name: str) -> str:
        return self._config.build_url(svr_name)

    async def send(self, svr_name: str, request: RpcRequest) -> RpcResponse:
        """POST *request* to *svr_name*'s endpoint and return the response envelope.

        Raises:
            TransportError: The request failed or returned a non-2xx status.
            MalformedResponseError: The body is not a JSON object envelope.
        """
        url = self.build_url(svr_name)
        client = self._ensure_client()
        logger.debug("[%s] POST %s method=%s id=%s", svr_name, url, request.method, request.id)

        try:
            resp = await client.post(url, json=request.to_payload())
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request to {url} failed: {str(exc) or type(exc).__name__}",
                svr_name=svr_name,
                orig_exc=exc,
            ) from exc

        if not resp.is_success:
            preview = resp.text[:ERROR_BODY_PREVIEW_CHARS]
            raise TransportError(
                f"HTTP {resp.status_code}: {preview}",
                svr_name=svr_name,
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"Response from {url} is not valid JSON: {exc}",
                svr_name=svr_name,
                orig_exc=exc,
            ) from exc

        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"Response from {url} is not a JSON object (got {type(body).__name__}).",
                svr_name=svr_name,
            )

        body = normalize_response(body, request.id)
        try:
            return RpcResponse.model_validate(body)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Response from {url} is not a JSON-RPC envelope: {exc}",
                svr_name=svr_name,
                orig_exc=exc,
            ) from exc
