"""Configuration loading and validation for MCP HTTP Bridge."""

from mcp_http_bridge.config.loader import expand_env_vars, load_bridge_config
from mcp_http_bridge.config.schema import BridgeConfig

__all__ = [
    "BridgeConfig",
    "expand_env_vars",
    "load_bridge_config",
]
