"""Tests for tool aggregation across backends."""

from __future__ import annotations

import logging

import httpx
import pytest
from conftest import tools_reply

from mcp_http_bridge.bridge.aggregator import CapabilityAggregator


def _names(tools):
    return [t.name for t in tools]


class TestListAll:
    @pytest.mark.anyio
    async def test_namespaced_in_registry_order(self, make_config, make_client, gateway) -> None:
        gateway.replies.update(
            {
                "alpha": tools_reply("read_file", "write_file"),
                "beta": tools_reply("search"),
                "gamma": tools_reply("store", "recall"),
            }
        )
        config = make_config(servers=["gamma", "alpha", "beta"])
        async with make_client(config) as client:
            tools = await CapabilityAggregator(config, client).list_all()

        assert _names(tools) == [
            "gamma_store",
            "gamma_recall",
            "alpha_read_file",
            "alpha_write_file",
            "beta_search",
        ]
        assert gateway.servers_called() == ["gamma", "alpha", "beta"]
        assert all(p == {"jsonrpc": "2.0", "method": "tools/list", "id": 1} for p in gateway.payloads())

    @pytest.mark.anyio
    async def test_description_prefixed(self, make_config, make_client, gateway) -> None:
        gateway.replies["alpha"] = tools_reply("read_file")
        config = make_config(servers=["alpha"])
        async with make_client(config) as client:
            (tool,) = await CapabilityAggregator(config, client).list_all()
        assert tool.description == "[alpha] read_file tool"

    @pytest.mark.anyio
    async def test_extra_fields_pass_through(self, make_config, make_client, gateway) -> None:
        schema = {"type": "object", "properties": {"path": {"type": "string"}}}
        gateway.replies["alpha"] = tools_reply(
            "read_file", inputSchema=schema, annotations={"readOnlyHint": True}
        )
        config = make_config(servers=["alpha"])
        async with make_client(config) as client:
            (tool,) = await CapabilityAggregator(config, client).list_all()

        data = tool.to_dict()
        assert data["name"] == "alpha_read_file"
        assert data["inputSchema"] == schema
        assert data["annotations"] == {"readOnlyHint": True}

    @pytest.mark.anyio
    async def test_failing_backend_is_skipped(self, make_config, make_client, gateway, caplog) -> None:
        gateway.replies.update(
            {
                "alpha": tools_reply("one"),
                "beta": httpx.ConnectError("connection refused"),
                "gamma": tools_reply("two"),
            }
        )
        config = make_config(servers=["alpha", "beta", "gamma"])
        with caplog.at_level(logging.ERROR, logger="mcp_http_bridge"):
            async with make_client(config) as client:
                tools = await CapabilityAggregator(config, client).list_all()

        assert _names(tools) == ["alpha_one", "gamma_two"]
        assert "[beta] Failed to fetch tools" in caplog.text

    @pytest.mark.anyio
    async def test_http_error_and_malformed_skipped(self, make_config, make_client, gateway) -> None:
        gateway.replies.update(
            {
                "alpha": httpx.Response(500, text="boom"),
                "beta": httpx.Response(200, text="not json"),
                "gamma": tools_reply("ok"),
            }
        )
        config = make_config(servers=["alpha", "beta", "gamma"])
        async with make_client(config) as client:
            tools = await CapabilityAggregator(config, client).list_all()
        assert _names(tools) == ["gamma_ok"]

    @pytest.mark.anyio
    async def test_all_backends_failing(self, make_config, make_client, gateway) -> None:
        config = make_config(servers=["alpha", "beta"])
        async with make_client(config) as client:
            tools = await CapabilityAggregator(config, client).list_all()
        assert tools == []
        assert gateway.servers_called() == ["alpha", "beta"]

    @pytest.mark.anyio
    async def test_error_envelope_contributes_nothing(self, make_config, make_client, gateway) -> None:
        gateway.replies.update(
            {
                "alpha": {"detail": "Unauthorized"},
                "beta": {"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "nope"}},
            }
        )
        config = make_config(servers=["alpha", "beta"])
        async with make_client(config) as client:
            assert await CapabilityAggregator(config, client).list_all() == []

    @pytest.mark.anyio
    async def test_empty_and_missing_tool_lists(self, make_config, make_client, gateway) -> None:
        gateway.replies.update(
            {
                "alpha": {"jsonrpc": "2.0", "id": 1, "result": {"tools": []}},
                "beta": {"jsonrpc": "2.0", "id": 1, "result": {}},
                "gamma": {"jsonrpc": "2.0", "id": 1},
            }
        )
        config = make_config(servers=["alpha", "beta", "gamma"])
        async with make_client(config) as client:
            assert await CapabilityAggregator(config, client).list_all() == []

    @pytest.mark.anyio
    async def test_invalid_entries_skipped(self, make_config, make_client, gateway) -> None:
        gateway.replies["alpha"] = {
            "jsonrpc": "2.0",
            "id": 1,
            "result": {"tools": [{"name": "good"}, "junk", {"description": "nameless"}, None]},
        }
        config = make_config(servers=["alpha"])
        async with make_client(config) as client:
            tools = await CapabilityAggregator(config, client).list_all()
        assert _names(tools) == ["alpha_good"]
        assert tools[0].description == "[alpha]"
