"""Routing of namespaced tool calls to their backend server."""

import logging
from typing import Any, Dict, NamedTuple, Optional

from mcp_http_bridge.bridge.gateway_client import GatewayClient
from mcp_http_bridge.bridge.models import RpcRequest
from mcp_http_bridge.bridge.namespacing import split_name
from mcp_http_bridge.config.schema import BridgeConfig
from mcp_http_bridge.constants import GATEWAY_REQUEST_ID, TOOLS_CALL_METHOD
from mcp_http_bridge.errors import InvalidNameError, RemoteError, UnknownBackendError

logger = logging.getLogger(__name__)


class RoutedCall(NamedTuple):
    """A tool call resolved to its backend."""

    server: str
    tool: str
    arguments: Dict[str, Any]


class CallRouter:
    """Resolves ``{server}_{tool}`` names and forwards ``tools/call``."""

    def __init__(self, config: BridgeConfig, client: GatewayClient) -> None:
        self._config = config
        self._client = client

    def resolve(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> RoutedCall:
        """Split *name* on its first delimiter and check the server is configured.

        Raises:
            InvalidNameError: *name* has no server prefix.
            UnknownBackendError: The prefix is not a configured server.
        """
        parts = split_name(name)
        if parts is None:
            raise InvalidNameError(name)
        svr_name, tool_name = parts
        if svr_name not in self._config.servers:
            raise UnknownBackendError(svr_name, self._config.servers)
        return RoutedCall(svr_name, tool_name, arguments or {})

    async def invoke(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Call tool *name* on its backend and return the raw ``result``.

        Raises:
            InvalidNameError, UnknownBackendError: Before any network call.
            TransportError, MalformedResponseError: From the gateway client.
            RemoteError: The backend answered with an error.
        """
        call = self.resolve(name, arguments)
        logger.info("Routing '%s' -> %s/%s", name, call.server, call.tool)

        request = RpcRequest(
            method=TOOLS_CALL_METHOD,
            id=GATEWAY_REQUEST_ID,
            params={"name": call.tool, "arguments": call.arguments},
        )
        response = await self._client.send(call.server, request)

        if response.error is not None:
            logger.debug(
                "[%s] Tool '%s' returned error %s: %s",
                call.server,
                call.tool,
                response.error.code,
                response.error.message,
            )
            raise RemoteError(
                response.error.message,
                svr_name=call.server,
                code=response.error.code,
                data=response.error.data,
            )
        return response.result
