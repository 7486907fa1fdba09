"""MCP server instance factory."""

import logging

from mcp.server import Server as McpServer
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions

from mcp_http_bridge.bridge.aggregator import CapabilityAggregator
from mcp_http_bridge.bridge.gateway_client import GatewayClient
from mcp_http_bridge.bridge.router import CallRouter
from mcp_http_bridge.config.schema import BridgeConfig
from mcp_http_bridge.constants import SERVER_NAME, SERVER_VERSION
from mcp_http_bridge.server.handlers import BridgeAdapter, register_handlers

logger = logging.getLogger(__name__)


def create_adapter(config: BridgeConfig, client: GatewayClient) -> BridgeAdapter:
    """Wire the aggregator and router onto one shared gateway client."""
    return BridgeAdapter(
        CapabilityAggregator(config, client),
        CallRouter(config, client),
    )


def create_server(adapter: BridgeAdapter) -> McpServer:
    """Create the MCP server and register the bridge handlers."""
    mcp_server = McpServer(SERVER_NAME, version=SERVER_VERSION)
    register_handlers(mcp_server, adapter)
    logger.debug("MCP server instance '%s' created.", mcp_server.name)
    return mcp_server


def build_init_options(mcp_server: McpServer) -> InitializationOptions:
    """Initialization options advertised to the MCP client."""
    return InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=mcp_server.get_capabilities(NotificationOptions(), {}),
    )
