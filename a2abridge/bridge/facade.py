"""Bridge façade — the two tools the host always sees.

load_agent  — fetch a peer's card and install its tools
list_agents — summarize every loaded peer
"""

from __future__ import annotations

import logging

from a2abridge.a2a.registry import AgentConnectionRegistry
from a2abridge.bridge.registrar import OperationRegistrar
from a2abridge.exceptions import one_line
from a2abridge.tools.registry import ToolRegistry
from a2abridge.tools.schema import ToolParameter, ToolSchema

_logger = logging.getLogger(__name__)


class BridgeFacade:
    def __init__(
        self,
        agents: AgentConnectionRegistry,
        registrar: OperationRegistrar,
    ) -> None:
        self._agents = agents
        self._registrar = registrar

    async def load_agent(
        self,
        endpoint: str,
        descriptor_sub_path: str | None = None,
        token: str | None = None,
    ) -> str:
        try:
            card = await self._agents.load(endpoint, descriptor_sub_path, token)
            installed = self._registrar.register_operations_for(card)
        except Exception as e:
            _logger.warning("Failed to load agent from %s: %s", endpoint, e)
            return f"Failed to load agent from {endpoint}: {one_line(e)}"

        return (
            f"Successfully loaded agent: {card.name}. "
            f"New tools registered: {', '.join(installed)}."
        )

    async def list_agents(self) -> str:
        try:
            listing = await self._agents.list()
        except Exception as e:
            _logger.warning("Failed to list agents: %s", e)
            return f"Failed to list agents: {one_line(e)}"

        if not listing:
            return "No agents are currently loaded."
        return "\n".join(f"- {card.name} ({endpoint})" for card, endpoint in listing)

    def register_tools(self, tools: ToolRegistry) -> None:
        """Install load_agent and list_agents into the tool table."""

        async def _load_agent(
            endpoint: str,
            descriptorSubPath: str | None = None,
            token: str | None = None,
        ) -> str:
            return await self.load_agent(endpoint, descriptorSubPath, token)

        tools.register(
            ToolSchema(
                name="load_agent",
                description=(
                    "Loads a remote A2A agent by fetching its agent card, "
                    "then registers tools to message it and manage its tasks."
                ),
                parameters=[
                    ToolParameter(name="endpoint", description="The URL of the A2A agent to load."),
                    ToolParameter(
                        name="descriptorSubPath",
                        description=(
                            "The path to the agent card endpoint, relative to the base URL. "
                            "Defaults to `/.well-known/agent-card.json`."
                        ),
                        required=False,
                    ),
                    ToolParameter(
                        name="token",
                        description="Bearer token sent with every request to this agent.",
                        required=False,
                    ),
                ],
            ),
            _load_agent,
        )
        tools.register(
            ToolSchema(
                name="list_agents",
                description="Lists every A2A agent loaded so far.",
            ),
            self.list_agents,
        )
