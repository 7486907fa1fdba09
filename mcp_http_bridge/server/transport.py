"""stdio transport handling for the MCP client connection."""

import logging

from mcp.server.stdio import stdio_server

from mcp_http_bridge.bridge.gateway_client import GatewayClient
from mcp_http_bridge.config.schema import BridgeConfig
from mcp_http_bridge.server.app import build_init_options, create_adapter, create_server

logger = logging.getLogger(__name__)


async def run_stdio(config: BridgeConfig) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    async with GatewayClient(config) as client:
        mcp_server = create_server(create_adapter(config, client))
        init_opts = build_init_options(mcp_server)

        async with stdio_server() as (read_stream, write_stream):
            logger.info("%s started", init_opts.server_name)
            logger.info("  Gateway: %s", config.gateway_url)
            logger.info("  Servers: %s", ", ".join(config.servers))
            logger.info("  Client:  %s", config.client_name)
            if config.auth_token:
                logger.info("  Auth:    Bearer token set")
            await mcp_server.run(read_stream, write_stream, init_opts)

    logger.info("stdio session closed.")
