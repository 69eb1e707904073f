"""Operation Registrar — turns a loaded peer into three host tools.

For a card named "Helper Bot" it installs:
    HelperBot-sendMessage(message)
    HelperBot-getTask(taskId)
    HelperBot-cancelTask(taskId)

Each handler closes over the peer's name and always returns text:
remote errors and local failures are formatted, never raised.
"""

from __future__ import annotations

import logging

from a2abridge.a2a.models import A2AMessage, A2ATask, AgentCard, RemoteError
from a2abridge.a2a.registry import AgentConnectionRegistry
from a2abridge.a2a.text import extract_message_text, extract_task_text
from a2abridge.tools.registry import ToolRegistry
from a2abridge.tools.schema import ToolParameter, ToolSchema
from a2abridge.exceptions import one_line
from a2abridge.types import sanitize_name

_logger = logging.getLogger(__name__)

SEND_MESSAGE = "sendMessage"
GET_TASK = "getTask"
CANCEL_TASK = "cancelTask"


def operation_names(card: AgentCard) -> list[str]:
    prefix = sanitize_name(card.name)
    return [f"{prefix}-{op}" for op in (SEND_MESSAGE, GET_TASK, CANCEL_TASK)]


class OperationRegistrar:
    """Installs the per-peer tools into the host's tool table."""

    def __init__(self, tools: ToolRegistry, agents: AgentConnectionRegistry) -> None:
        self._tools = tools
        self._agents = agents

    def register_operations_for(self, card: AgentCard) -> list[str]:
        """Install send/get/cancel tools for a freshly loaded peer."""
        agent_name = card.name
        peer = sanitize_name(agent_name)
        send_name, get_name, cancel_name = operation_names(card)
        agents = self._agents

        # ── sendMessage ───────────────────────────────────────────────────
        async def _send_message(message: str) -> str:
            try:
                result = await agents.send_message(peer, message)
            except Exception as e:
                _logger.warning("sendMessage to %s failed: %s", agent_name, e)
                return f"Failed to send message to agent {agent_name}: {one_line(e)}"
            if isinstance(result, RemoteError):
                return f"Error from agent {agent_name} when sending message: {result.message}"
            if isinstance(result, A2AMessage):
                return extract_message_text(result)
            return extract_task_text(result)

        # ── getTask ───────────────────────────────────────────────────────
        async def _get_task(taskId: str) -> str:
            try:
                result = await agents.get_task(peer, taskId)
            except Exception as e:
                _logger.warning("getTask %s on %s failed: %s", taskId, agent_name, e)
                return f"Failed to get task {taskId} from agent {agent_name}: {one_line(e)}"
            return _render_task_result(result, agent_name, f"getting task {taskId}")

        # ── cancelTask ────────────────────────────────────────────────────
        async def _cancel_task(taskId: str) -> str:
            try:
                result = await agents.cancel_task(peer, taskId)
            except Exception as e:
                _logger.warning("cancelTask %s on %s failed: %s", taskId, agent_name, e)
                return f"Failed to cancel task {taskId} on agent {agent_name}: {one_line(e)}"
            return _render_task_result(result, agent_name, f"canceling task {taskId}")

        self._tools.register(
            ToolSchema(
                name=send_name,
                description=f"Sends a message to the {agent_name} agent.",
                parameters=[
                    ToolParameter(
                        name="message",
                        description="The text message to send to the agent.",
                    ),
                ],
            ),
            _send_message,
        )
        self._tools.register(
            ToolSchema(
                name=get_name,
                description=f"Retrieves a task from the {agent_name} agent.",
                parameters=[
                    ToolParameter(name="taskId", description="The ID of the task to query."),
                ],
            ),
            _get_task,
        )
        self._tools.register(
            ToolSchema(
                name=cancel_name,
                description=f"Cancels a task on the {agent_name} agent.",
                parameters=[
                    ToolParameter(name="taskId", description="The ID of the task to cancel."),
                ],
            ),
            _cancel_task,
        )

        installed = [send_name, get_name, cancel_name]
        _logger.info("Registered %d tools for agent '%s'", len(installed), agent_name)
        return installed


def _render_task_result(result: A2ATask | RemoteError, agent_name: str, action: str) -> str:
    if isinstance(result, RemoteError):
        return f"Error from agent {agent_name} when {action}: {result.message}"
    return extract_task_text(result)
