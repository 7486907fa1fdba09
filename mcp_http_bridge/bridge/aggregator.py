"""Tool discovery across all configured backend servers."""

import logging
from typing import Any, List

from pydantic import ValidationError

from mcp_http_bridge.bridge.gateway_client import GatewayClient
from mcp_http_bridge.bridge.models import RpcRequest, ToolDescriptor
from mcp_http_bridge.bridge.namespacing import namespace_tool
from mcp_http_bridge.config.schema import BridgeConfig
from mcp_http_bridge.constants import GATEWAY_REQUEST_ID, TOOLS_LIST_METHOD
from mcp_http_bridge.errors import BridgeBaseError

logger = logging.getLogger(__name__)


class CapabilityAggregator:
    """Lists the tools of every backend as one namespaced list.

    Backends are queried one after another in configuration order, and the
    output keeps that order (then each backend's own tool order).  A backend
    that fails is logged and skipped; it never fails the whole listing.
    """

    def __init__(self, config: BridgeConfig, client: GatewayClient) -> None:
        self._config = config
        self._client = client

    async def _list_server_tools(self, svr_name: str) -> List[ToolDescriptor]:
        """Fetch and namespace the tools of a single backend."""
        request = RpcRequest(method=TOOLS_LIST_METHOD, id=GATEWAY_REQUEST_ID)
        response = await self._client.send(svr_name, request)

        if response.error is not None:
            logger.error(
                "[%s] Failed to fetch tools: %s (code %s)",
                svr_name,
                response.error.message,
                response.error.code,
            )
            return []

        result = response.result
        orig_tools: Any = result.get("tools") if isinstance(result, dict) else None
        if not isinstance(orig_tools, list):
            logger.info("[%s] tools/list returned no tool list, treating as empty.", svr_name)
            return []

        tools: List[ToolDescriptor] = []
        for raw in orig_tools:
            if not isinstance(raw, dict):
                logger.warning("[%s] Found non-object tool entry, skipped: %r", svr_name, raw)
                continue
            try:
                tool = ToolDescriptor.model_validate(raw)
            except ValidationError as exc:
                logger.warning(
                    "[%s] Invalid tool entry skipped (%d error(s)): %r",
                    svr_name,
                    exc.error_count(),
                    raw,
                )
                continue
            tools.append(namespace_tool(svr_name, tool))
        return tools

    async def list_all(self) -> List[ToolDescriptor]:
        """Return the namespaced tools of all backends, in registry order."""
        all_tools: List[ToolDescriptor] = []
        for svr_name in self._config.servers:
            try:
                tools = await self._list_server_tools(svr_name)
            except BridgeBaseError as exc:
                logger.error("[%s] Failed to fetch tools: %s", svr_name, exc)
                continue
            except Exception:
                logger.exception("[%s] Unexpected error while fetching tools.", svr_name)
                continue

            logger.debug("[%s] Registered %d tool(s).", svr_name, len(tools))
            all_tools.extend(tools)

        logger.info(
            "Aggregated %d tool(s) from %d server(s).",
            len(all_tools),
            len(self._config.servers),
        )
        return all_tools
