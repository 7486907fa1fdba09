"""Custom exception classes for MCP HTTP Bridge."""

from typing import Any, Optional, Sequence


class BridgeBaseError(Exception):
    """Base class for all custom exceptions in MCP HTTP Bridge."""

    pass


class ConfigurationError(BridgeBaseError):
    """Raised when loading or validating the bridge configuration fails."""

    pass


class TransportError(BridgeBaseError):
    """
    Raised when the gateway cannot be reached or answers with a
    non-success HTTP status.
    """

    def __init__(
        self,
        message: str,
        svr_name: Optional[str] = None,
        status_code: Optional[int] = None,
        orig_exc: Optional[Exception] = None,
    ):
        self.svr_name = svr_name
        self.status_code = status_code
        self.orig_exc = orig_exc
        super().__init__(message)


class MalformedResponseError(BridgeBaseError):
    """Raised when a gateway response body is not a JSON object."""

    def __init__(
        self,
        message: str,
        svr_name: Optional[str] = None,
        orig_exc: Optional[Exception] = None,
    ):
        self.svr_name = svr_name
        self.orig_exc = orig_exc
        super().__init__(message)


class InvalidNameError(BridgeBaseError):
    """Raised when a tool name carries no ``{server}_`` prefix."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Invalid tool name format: {tool_name} (expected: server_toolname)")


class UnknownBackendError(BridgeBaseError):
    """Raised when a tool name's prefix does not name a configured server."""

    def __init__(self, svr_name: str, available: Sequence[str]):
        self.svr_name = svr_name
        self.available = tuple(available)
        super().__init__(f"Unknown server: {svr_name}. Available: {', '.join(self.available)}")


class RemoteError(BridgeBaseError):
    """
    Raised when a backend answers with a JSON-RPC error object.

    The string form is the remote message, unchanged.
    """

    def __init__(
        self,
        message: str,
        svr_name: Optional[str] = None,
        code: Any = None,
        data: Any = None,
    ):
        self.message = message
        self.svr_name = svr_name
        self.code = code
        self.data = data
        super().__init__(message)
