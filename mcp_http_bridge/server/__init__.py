"""Server subpackage - MCP handlers and the stdio transport."""

from mcp_http_bridge.server.app import create_adapter, create_server
from mcp_http_bridge.server.handlers import BridgeAdapter, format_result

__all__ = [
    "BridgeAdapter",
    "create_adapter",
    "create_server",
    "format_result",
]
