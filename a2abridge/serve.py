"""Bridge process — wires the components and serves the host over stdio."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from a2abridge.a2a.registry import AgentConnectionRegistry
from a2abridge.bridge.config import AgentEntry
from a2abridge.bridge.facade import BridgeFacade
from a2abridge.bridge.registrar import OperationRegistrar
from a2abridge.config import BridgeSettings
from a2abridge.mcp.server import BridgeServer
from a2abridge.tools.registry import ToolRegistry

_logger = logging.getLogger(__name__)


@dataclass
class Bridge:
    agents: AgentConnectionRegistry
    tools: ToolRegistry
    registrar: OperationRegistrar
    facade: BridgeFacade


def build_bridge(settings: BridgeSettings, transport=None) -> Bridge:
    """Construct the long-lived components and install the static tools."""
    agents = AgentConnectionRegistry(timeout=settings.request_timeout, transport=transport)
    tools = ToolRegistry()
    registrar = OperationRegistrar(tools, agents)
    facade = BridgeFacade(agents, registrar)
    facade.register_tools(tools)
    return Bridge(agents=agents, tools=tools, registrar=registrar, facade=facade)


async def autoload(facade: BridgeFacade, entries: list[AgentEntry]) -> list[str]:
    """Load startup peers concurrently; failures are logged, not raised.

    Entries pointing at the same endpoint are collapsed. Different
    endpoints that turn out to be the same agent are rejected by the
    registry, so only the first one wins.
    """
    unique: dict[str, AgentEntry] = {}
    for entry in entries:
        if entry.key in unique:
            _logger.warning("Ignoring duplicate startup agent %s", entry.endpoint)
            continue
        unique[entry.key] = entry

    outcomes = await asyncio.gather(*(
        facade.load_agent(e.endpoint, e.descriptor_sub_path, e.access_token)
        for e in unique.values()
    ))
    for outcome in outcomes:
        _logger.info("Startup: %s", outcome)
    return list(outcomes)


async def main(settings: BridgeSettings, entries: list[AgentEntry]) -> None:
    bridge = build_bridge(settings)

    if entries:
        _logger.info("Auto-loading %d agents", len(entries))
        await autoload(bridge.facade, entries)

    server = BridgeServer(bridge.tools, name=settings.server_name)
    await server.run()
