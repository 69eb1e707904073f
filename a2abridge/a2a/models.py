"""A2A protocol data models — follows the A2A v0.3 specification.

Covers Agent Cards, Messages, Tasks, JSON-RPC 2.0 wrappers and the
result unions a peer can answer with.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel, Field

from a2abridge.types import new_id


# ── Agent Card ────────────────────────────────────────────────


class AgentSkill(BaseModel):
    """A capability that an agent advertises."""

    id: str
    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)
    input_modes: list[str] = Field(
        default_factory=lambda: ["text/plain"],
        alias="inputModes",
    )
    output_modes: list[str] = Field(
        default_factory=lambda: ["text/plain"],
        alias="outputModes",
    )

    model_config = {"populate_by_name": True}


class AgentCapabilities(BaseModel):
    """Protocol features the agent supports."""

    streaming: bool = False
    push_notifications: bool = Field(default=False, alias="pushNotifications")
    state_transition_history: bool = Field(
        default=False, alias="stateTransitionHistory",
    )

    model_config = {"populate_by_name": True}


class AgentProvider(BaseModel):
    """Who provides this agent."""

    organization: str = ""
    url: str = ""


class AgentCard(BaseModel):
    """A2A Agent Card — the identity document of a peer.

    Fetched from /.well-known/agent-card.json (or a custom path) when
    the peer is loaded. ``url`` is the peer's JSON-RPC endpoint.
    """

    name: str
    description: str = ""
    url: str = ""
    version: str = "1.0.0"
    provider: AgentProvider | None = None
    capabilities: AgentCapabilities = Field(default_factory=AgentCapabilities)
    skills: list[AgentSkill] = Field(default_factory=list)
    default_input_modes: list[str] = Field(
        default_factory=lambda: ["text/plain"],
        alias="defaultInputModes",
    )
    default_output_modes: list[str] = Field(
        default_factory=lambda: ["text/plain"],
        alias="defaultOutputModes",
    )

    model_config = {"populate_by_name": True, "frozen": True}


# ── Messages & Parts ─────────────────────────────────────────


class A2APart(BaseModel):
    """Atomic content unit within a message."""

    kind: str = "text"  # "text" | "data" | "file"
    text: str | None = None
    data: dict[str, Any] | None = None
    file: dict[str, Any] | None = None  # {name?, mimeType?, uri? | bytes?}
    metadata: dict[str, Any] | None = None


class A2AMessage(BaseModel):
    """A single communication turn."""

    kind: str = "message"
    role: str = "user"  # "user" | "agent"
    parts: list[A2APart] = Field(default_factory=list)
    message_id: str = Field(default_factory=new_id, alias="messageId")
    task_id: str | None = Field(default=None, alias="taskId")
    context_id: str | None = Field(default=None, alias="contextId")

    model_config = {"populate_by_name": True}

    @classmethod
    def user_text(
        cls, text: str, task_id: str, context_id: str | None = None,
    ) -> A2AMessage:
        return cls(
            parts=[A2APart(text=text)],
            task_id=task_id,
            context_id=context_id,
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class A2AArtifact(BaseModel):
    """A tangible output produced by an agent."""

    artifact_id: str = Field(default_factory=new_id, alias="artifactId")
    name: str | None = None
    parts: list[A2APart] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


# ── Tasks ─────────────────────────────────────────────────────


class TaskState(str, Enum):
    """A2A task lifecycle states."""

    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    AUTH_REQUIRED = "auth-required"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"
    REJECTED = "rejected"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> TaskState:
        return cls.UNKNOWN


class TaskStatus(BaseModel):
    """Current status of a task."""

    state: TaskState = TaskState.UNKNOWN
    message: A2AMessage | None = None
    timestamp: str | None = None


class A2ATask(BaseModel):
    """A unit of work opened on a peer by a message exchange."""

    kind: str = "task"
    id: str
    context_id: str | None = Field(default=None, alias="contextId")
    status: TaskStatus = Field(default_factory=TaskStatus)
    history: list[A2AMessage] = Field(default_factory=list)
    artifacts: list[A2AArtifact] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


# ── Errors ────────────────────────────────────────────────────


class RemoteError(BaseModel):
    """Error object a peer put in its JSON-RPC response."""

    code: int | None = None
    message: str = ""
    data: Any = None


# A peer answers message/send with a message, a task, or an error;
# tasks/get and tasks/cancel with a task or an error.
ExchangeResult: TypeAlias = A2AMessage | A2ATask | RemoteError
TaskResult: TypeAlias = A2ATask | RemoteError


# ── JSON-RPC 2.0 ─────────────────────────────────────────────


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request."""

    jsonrpc: str = "2.0"
    id: int | str = Field(default_factory=new_id)
    method: str
    params: dict[str, Any] = Field(default_factory=dict)
