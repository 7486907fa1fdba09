"""Tool name namespacing.

Every backend tool is exposed as ``{server}{delimiter}{tool}`` so that
tools from different servers can never collide.  Server names are known
to be delimiter-free (enforced by the config schema), which is why a
namespaced name is split on the *first* delimiter: tool names themselves
may contain it (``db_query_all`` -> ``db`` / ``query_all``).
"""

from __future__ import annotations

from typing import Optional, Tuple

from mcp_http_bridge.bridge.models import ToolDescriptor
from mcp_http_bridge.constants import NAME_DELIMITER


def namespaced_name(svr_name: str, tool_name: str, delimiter: str = NAME_DELIMITER) -> str:
    return f"{svr_name}{delimiter}{tool_name}"


def namespace_tool(
    svr_name: str,
    tool: ToolDescriptor,
    delimiter: str = NAME_DELIMITER,
) -> ToolDescriptor:
    """Return a copy of *tool* renamed and tagged for *svr_name*."""
    description = f"[{svr_name}] {tool.description}" if tool.description else f"[{svr_name}]"
    return tool.model_copy(
        update={
            "name": namespaced_name(svr_name, tool.name, delimiter),
            "description": description,
        }
    )


def split_name(name: str, delimiter: str = NAME_DELIMITER) -> Optional[Tuple[str, str]]:
    """Split *name* into ``(server, tool)`` at the first delimiter.

    Returns ``None`` when *name* contains no delimiter.
    """
    svr_name, sep, tool_name = name.partition(delimiter)
    if not sep:
        return None
    return svr_name, tool_name
