"""CLI argument parsing and main entry point.

``mcp-http-bridge`` serves MCP on stdin/stdout; it is meant to be
launched by an MCP client (e.g. Claude Desktop) rather than by hand.
Configuration comes from ``MCP_*`` environment variables, an optional
YAML file, and the flags below (highest precedence).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from mcp_http_bridge.constants import (
    DEFAULT_LOG_LEVEL,
    ENV_CONFIG_FILE,
    ENV_SERVERS,
    SERVER_NAME,
    SERVER_VERSION,
)
from mcp_http_bridge.display.logging_config import secret_redaction_filter, setup_logging
from mcp_http_bridge.errors import ConfigurationError

module_logger = logging.getLogger(__name__)

_USAGE_EXAMPLE = f"Example: {ENV_SERVERS}=context7,memory,search {SERVER_NAME}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="Aggregate MCP servers behind an HTTP gateway into one stdio MCP server.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"YAML config file (default: ${ENV_CONFIG_FILE} if set).",
    )
    parser.add_argument("--gateway-url", default=None, help="Base URL of the HTTP gateway.")
    parser.add_argument(
        "--servers",
        default=None,
        help="Comma-separated list of server names to aggregate.",
    )
    parser.add_argument("--client-name", default=None, help="Value of the X-Client-Name header.")
    parser.add_argument(
        "--endpoint-pattern",
        default=None,
        help="Endpoint path containing '{server}', e.g. /mcp/{server}/tools/call.",
    )
    parser.add_argument(
        "--request-timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds for gateway requests.",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log level for stderr (and the log file).",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write logs to a timestamped file under logs/.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {SERVER_VERSION}",
    )
    return parser


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "gateway_url": args.gateway_url,
        "servers": args.servers,
        "client_name": args.client_name,
        "endpoint_pattern": args.endpoint_pattern,
        "request_timeout": args.request_timeout,
    }


def main(argv: Optional[List[str]] = None) -> None:
    """Console-script entry point."""
    args = build_parser().parse_args(argv)
    log_fpath, log_lvl = setup_logging(args.log_level, log_to_file=args.log_file)
    module_logger.debug(
        "---- %s v%s starting (log level: %s, log file: %s) ----",
        SERVER_NAME,
        SERVER_VERSION,
        log_lvl,
        log_fpath,
    )

    # Imported here so that --help/--version do not pay for the MCP SDK import.
    from mcp_http_bridge.config.loader import load_bridge_config
    from mcp_http_bridge.server.transport import run_stdio

    cfg_fpath = args.config or os.environ.get(ENV_CONFIG_FILE) or None
    try:
        config = load_bridge_config(cfg_fpath, overrides=_cli_overrides(args))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(_USAGE_EXAMPLE, file=sys.stderr)
        sys.exit(1)

    secret_redaction_filter.register(config.auth_token)

    try:
        asyncio.run(run_stdio(config))
    except KeyboardInterrupt:
        module_logger.info("Bridge interrupted")
        sys.exit(0)
    except Exception as exc:
        module_logger.critical("Fatal error: %s", exc, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
