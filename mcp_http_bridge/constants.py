"""Shared constants for MCP HTTP Bridge."""

SERVER_NAME = "mcp-http-bridge"
SERVER_VERSION = "1.0.0"

# Gateway defaults
DEFAULT_GATEWAY_URL = "http://localhost:9090"
DEFAULT_CLIENT_NAME = "claude-desktop"
DEFAULT_ENDPOINT_PATTERN = "/mcp/{server}/tools/call"
SERVER_TOKEN = "{server}"

# Namespacing: "{server}_{tool}"
NAME_DELIMITER = "_"

# JSON-RPC envelope
JSONRPC_VERSION = "2.0"
TOOLS_LIST_METHOD = "tools/list"
TOOLS_CALL_METHOD = "tools/call"
GATEWAY_REQUEST_ID = 1
REST_ERROR_CODE = -32001  # code used for normalized {"detail": ...} errors

# HTTP
CLIENT_NAME_HEADER = "X-Client-Name"
ERROR_BODY_PREVIEW_CHARS = 200

# Environment variables
ENV_GATEWAY_URL = "MCP_GATEWAY_URL"
ENV_SERVERS = "MCP_SERVERS"
ENV_CLIENT_NAME = "MCP_CLIENT_NAME"
ENV_AUTH_TOKEN = "MCP_AUTH_TOKEN"
ENV_ENDPOINT_PATTERN = "MCP_ENDPOINT_PATTERN"
ENV_REQUEST_TIMEOUT = "MCP_REQUEST_TIMEOUT"
ENV_CONFIG_FILE = "MCP_BRIDGE_CONFIG"

# Logging defaults
LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"
