"""Tests for load_agent / list_agents."""

import pytest

from a2abridge.a2a.models import AgentCard
from a2abridge.bridge.facade import BridgeFacade


@pytest.mark.asyncio
async def test_static_tools_installed(facade, tool_registry):
    names = [t.name for t in tool_registry.list_tools()]
    assert names == ["load_agent", "list_agents"]
    load = tool_registry.list_tools()[0]
    required = load.input_schema()["required"]
    assert required == ["endpoint"]


@pytest.mark.asyncio
async def test_list_agents_empty(facade):
    assert await facade.list_agents() == "No agents are currently loaded."


@pytest.mark.asyncio
async def test_load_agent_installs_tools(network, facade, tool_registry):
    network.add("Helper Bot", "helper.test")

    result = await tool_registry.execute("load_agent", {"endpoint": "http://helper.test"})

    assert result.result == (
        "Successfully loaded agent: Helper Bot. New tools registered: "
        "HelperBot-sendMessage, HelperBot-getTask, HelperBot-cancelTask."
    )
    for name in ("HelperBot-sendMessage", "HelperBot-getTask", "HelperBot-cancelTask"):
        assert name in tool_registry


@pytest.mark.asyncio
async def test_load_agent_with_path_and_token(network, facade, tool_registry):
    peer = network.add("Alpha", "alpha.test")

    await tool_registry.execute("load_agent", {
        "endpoint": "http://alpha.test",
        "descriptorSubPath": "/agent.json",
        "token": "s3cret",
    })

    assert peer.requests[0].url.path == "/agent.json"
    assert peer.requests[0].headers["authorization"] == "Bearer s3cret"


@pytest.mark.asyncio
async def test_list_agents_in_load_order(network, facade):
    for name in ("Zulu", "Alpha", "Mike"):
        network.add(name, f"{name.lower()}.test")
        await facade.load_agent(f"http://{name.lower()}.test")

    assert await facade.list_agents() == (
        "- Zulu (http://zulu.test/a2a)\n"
        "- Alpha (http://alpha.test/a2a)\n"
        "- Mike (http://mike.test/a2a)"
    )


@pytest.mark.asyncio
async def test_list_agents_shows_load_endpoint_without_card_url(network, facade):
    peer = network.add("Alpha", "alpha.test")
    peer.card = AgentCard(name="Alpha")
    await facade.load_agent("http://alpha.test")

    assert await facade.list_agents() == "- Alpha (http://alpha.test)"


@pytest.mark.asyncio
async def test_duplicate_load_keeps_original_tools(network, facade, tool_registry):
    network.add("Alpha", "alpha.test")
    network.add("Alpha", "alpha-mirror.test")
    await facade.load_agent("http://alpha.test")
    before = [t.name for t in tool_registry.list_tools()]
    handler = tool_registry.get_handler("Alpha-sendMessage")

    result = await facade.load_agent("http://alpha-mirror.test")

    assert result.startswith("Failed to load agent from http://alpha-mirror.test:")
    assert "already loaded" in result
    assert [t.name for t in tool_registry.list_tools()] == before
    assert tool_registry.get_handler("Alpha-sendMessage") is handler

    reply = await tool_registry.execute("Alpha-sendMessage", {"message": "still there?"})
    assert "State:   working" in reply.result
    assert (await facade.list_agents()).count("Alpha") == 1


@pytest.mark.asyncio
async def test_load_unreachable(facade, tool_registry):
    result = await facade.load_agent("http://nowhere.test")
    assert result.startswith("Failed to load agent from http://nowhere.test:")
    assert len(tool_registry) == 2


@pytest.mark.asyncio
async def test_list_skips_unreachable_peer(network, facade):
    network.add("Alpha", "alpha.test")
    beta = network.add("Beta", "beta.test")
    await facade.load_agent("http://alpha.test")
    await facade.load_agent("http://beta.test")
    beta.down = True

    assert await facade.list_agents() == "- Alpha (http://alpha.test/a2a)"


@pytest.mark.asyncio
async def test_registrar_failure_reported(network, agents, tool_registry):
    class BrokenRegistrar:
        def register_operations_for(self, card):
            raise RuntimeError("table full")

    network.add("Alpha", "alpha.test")
    facade = BridgeFacade(agents, BrokenRegistrar())

    result = await facade.load_agent("http://alpha.test")
    assert result == "Failed to load agent from http://alpha.test: table full"
