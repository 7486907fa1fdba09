"""
MCP HTTP Bridge - aggregate MCP servers behind an HTTP gateway.

MCP HTTP Bridge speaks MCP over stdio to a single client and forwards
every request to backend MCP servers reachable through one HTTP gateway,
exposing their tools as one namespaced list (``{server}_{tool}``).
"""

from mcp_http_bridge.constants import SERVER_NAME, SERVER_VERSION

__version__ = SERVER_VERSION
__app_name__ = SERVER_NAME

__all__ = [
    "SERVER_NAME",
    "SERVER_VERSION",
    "__version__",
    "__app_name__",
]
