"""Bridge subpackage - gateway access, tool aggregation and call routing."""

from mcp_http_bridge.bridge.aggregator import CapabilityAggregator
from mcp_http_bridge.bridge.gateway_client import GatewayClient
from mcp_http_bridge.bridge.models import RpcError, RpcRequest, RpcResponse, ToolDescriptor
from mcp_http_bridge.bridge.router import CallRouter, RoutedCall

__all__ = [
    "CallRouter",
    "CapabilityAggregator",
    "GatewayClient",
    "RoutedCall",
    "RpcError",
    "RpcRequest",
    "RpcResponse",
    "ToolDescriptor",
]
