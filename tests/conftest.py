"""Shared fixtures: a fake HTTP gateway backed by ``httpx.MockTransport``."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
import pytest

from mcp_http_bridge.bridge.gateway_client import GatewayClient
from mcp_http_bridge.config.schema import BridgeConfig

Reply = Union[Dict[str, Any], httpx.Response, Exception, Callable[[Dict[str, Any]], Any]]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeGateway:
    """Answers ``/mcp/{server}/tools/call`` requests from a per-server table.

    A reply may be a JSON body (dict), a ready ``httpx.Response``, an
    exception to raise, or a callable taking the request payload.
    """

    def __init__(self, replies: Optional[Dict[str, Reply]] = None) -> None:
        self.replies: Dict[str, Reply] = dict(replies or {})
        self.requests: List[httpx.Request] = []

    @staticmethod
    def server_of(request: httpx.Request) -> str:
        # /mcp/<server>/tools/call
        return request.url.path.split("/")[2]

    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def servers_called(self) -> List[str]:
        return [self.server_of(r) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        svr_name = self.server_of(request)
        reply = self.replies.get(svr_name)
        if reply is None:
            return httpx.Response(404, json={"detail": f"server '{svr_name}' not found"})
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        if callable(reply):
            reply = reply(json.loads(request.content))
            if isinstance(reply, httpx.Response):
                return reply
        return httpx.Response(200, json=reply)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def tools_reply(*names: str, **extra: Any) -> Dict[str, Any]:
    """A ``tools/list`` success envelope listing *names*."""
    tools = [{"name": n, "description": f"{n} tool", **extra} for n in names]
    return {"jsonrpc": "2.0", "id": 1, "result": {"tools": tools}}


@pytest.fixture
def make_config() -> Callable[..., BridgeConfig]:
    def _make(**kwargs: Any) -> BridgeConfig:
        kwargs.setdefault("gateway_url", "http://gw.test:9090")
        kwargs.setdefault("servers", ["alpha", "beta"])
        return BridgeConfig(**kwargs)

    return _make


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def make_client(gateway: FakeGateway) -> Callable[[BridgeConfig], GatewayClient]:
    def _make(config: BridgeConfig) -> GatewayClient:
        return GatewayClient(config, transport=gateway.transport())

    return _make
