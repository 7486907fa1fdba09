"""MCP handler functions - the bridge's boundary with the stdio MCP server.

Every failure is turned into a tool-level error result here: the MCP
client always receives a well-formed response it can show to its user.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from mcp import types as mcp_types
from mcp.server import Server as McpServer
from pydantic import ValidationError

from mcp_http_bridge.bridge.aggregator import CapabilityAggregator
from mcp_http_bridge.bridge.router import CallRouter

logger = logging.getLogger(__name__)

_DEFAULT_INPUT_SCHEMA: Dict[str, Any] = {"type": "object"}


def format_result(result: Any) -> str:
    """Render a tool result as text: strings verbatim, anything else as indented JSON."""
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, ensure_ascii=False)


def text_result(text: str, *, is_error: bool = False) -> mcp_types.CallToolResult:
    return mcp_types.CallToolResult(
        content=[mcp_types.TextContent(type="text", text=text)],
        isError=is_error,
    )


class BridgeAdapter:
    """Serves ``tools/list`` and ``tools/call`` from the aggregator and router."""

    def __init__(self, aggregator: CapabilityAggregator, router: CallRouter) -> None:
        self._aggregator = aggregator
        self._router = router

    async def list_tools(self) -> List[mcp_types.Tool]:
        """Aggregated tool list; an empty list rather than an error on failure."""
        try:
            descriptors = await self._aggregator.list_all()
        except Exception:
            logger.exception("Tool aggregation failed; returning an empty tool list.")
            return []

        tools: List[mcp_types.Tool] = []
        for descriptor in descriptors:
            data = descriptor.to_dict()
            if not isinstance(data.get("inputSchema"), dict):
                data["inputSchema"] = dict(_DEFAULT_INPUT_SCHEMA)
            try:
                tools.append(mcp_types.Tool.model_validate(data))
            except ValidationError as exc:
                logger.warning(
                    "Tool '%s' is not a valid MCP tool and was skipped: %s",
                    descriptor.name,
                    exc,
                )
        logger.info("Returning %d aggregated tools", len(tools))
        return tools

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> mcp_types.CallToolResult:
        """Route a tool call; failures become ``isError`` results."""
        try:
            result = await self._router.invoke(name, arguments or {})
        except Exception as exc:
            logger.error("Tool call '%s' failed: %s", name, exc)
            logger.debug("Tool call '%s' failure detail", name, exc_info=True)
            return text_result(f"Error: {exc}", is_error=True)
        return text_result(format_result(result))


def register_handlers(mcp_server: McpServer, adapter: BridgeAdapter) -> None:
    """Register the MCP protocol handlers on the server instance."""

    @mcp_server.list_tools()
    async def handle_list_tools() -> List[mcp_types.Tool]:
        logger.debug("Handling listTools request...")
        return await adapter.list_tools()

    # Not @call_tool(): that decorator lists every backend on a tool-cache miss.
    async def handle_call_tool(req: mcp_types.CallToolRequest) -> mcp_types.ServerResult:
        logger.debug("Handling callTool: name='%s'", req.params.name)
        result = await adapter.call_tool(req.params.name, req.params.arguments)
        return mcp_types.ServerResult(result)

    mcp_server.request_handlers[mcp_types.CallToolRequest] = handle_call_tool

    logger.debug("MCP protocol handlers registered on server instance.")
