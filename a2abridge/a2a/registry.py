"""Agent Connection Registry — one connection per loaded peer.

Owns every connection along with its task ids and conversation
context. Other components only go through the methods below.

Usage:
    agents = AgentConnectionRegistry(timeout=30.0)
    card = await agents.load("https://helper.example.com", token="s3cret")
    result = await agents.send_message("HelperBot", "summarize this")
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from a2abridge.a2a.client import A2AClient
from a2abridge.a2a.models import (
    A2AMessage,
    A2ATask,
    AgentCard,
    ExchangeResult,
    RemoteError,
    TaskResult,
)
from a2abridge.exceptions import (
    AlreadyRegistered,
    DescriptorFetchFailed,
    NotRegistered,
    TaskNotFound,
)
from a2abridge.types import ContextId, PeerName, TaskId, new_id, sanitize_name

_logger = logging.getLogger(__name__)


@dataclass
class AgentConnection:
    """Live handle to one peer plus the state this process keeps for it."""

    name: PeerName
    card: AgentCard
    client: A2AClient
    context_id: ContextId | None = None
    task_ids: set[TaskId] = field(default_factory=set)
    exchange_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    cancel_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class AgentConnectionRegistry:
    """Registry of loaded peers, keyed by sanitized card name.

    Created once at process start and injected wherever peers are needed.
    Messages to one peer are serialized so the stored context token is
    never overwritten by a stale exchange; different peers run in parallel.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._connections: dict[PeerName, AgentConnection] = {}
        self._lock = asyncio.Lock()

    def __contains__(self, name: object) -> bool:
        return name in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def names(self) -> list[PeerName]:
        return list(self._connections)

    def get(self, name: PeerName) -> AgentConnection:
        conn = self._connections.get(name)
        if conn is None:
            raise NotRegistered(
                f"Agent '{name}' is not registered. Please run load_agent first."
            )
        return conn

    async def load(
        self,
        endpoint: str,
        card_path: str | None = None,
        token: str | None = None,
    ) -> AgentCard:
        """Fetch a peer's card and store a connection for it."""
        _logger.info("Loading agent from %s", endpoint)
        client = A2AClient(
            endpoint,
            card_path=card_path,
            token=token,
            timeout=self._timeout,
            transport=self._transport,
        )
        card = await client.get_card()
        name = sanitize_name(card.name)
        if not name:
            raise DescriptorFetchFailed(f"Agent card at {client.card_url} has no name")

        # The name is only known after the fetch, so the duplicate check
        # and the insert must happen together.
        async with self._lock:
            if name in self._connections:
                raise AlreadyRegistered(f"Agent '{card.name}' is already loaded")
            client.bind(card)
            self._connections[name] = AgentConnection(name=name, card=card, client=client)

        _logger.info("Registered A2A agent: %s at %s", card.name, client.rpc_url)
        return card

    async def list(self) -> list[tuple[AgentCard, str]]:
        """Re-fetch every loaded peer's card, in load order.

        Each card is paired with the endpoint its JSON-RPC calls go to.
        Peers that cannot be reached are left out of the result.
        """
        conns = list(self._connections.values())
        results = await asyncio.gather(
            *(c.client.get_card() for c in conns), return_exceptions=True,
        )
        listing: list[tuple[AgentCard, str]] = []
        for conn, result in zip(conns, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                _logger.warning("Skipping agent '%s' in listing: %s", conn.name, result)
                continue
            listing.append((result, conn.client.rpc_url))
        return listing

    async def send_message(self, name: PeerName, text: str) -> ExchangeResult:
        """Send one text turn to a peer under a freshly issued task id."""
        conn = self.get(name)
        async with conn.exchange_lock:
            task_id = new_id()
            conn.task_ids.add(task_id)
            message = A2AMessage.user_text(text, task_id=task_id, context_id=conn.context_id)
            result = await conn.client.send_message(message)

            if isinstance(result, RemoteError):
                _logger.warning("Agent '%s' returned error: %s", name, result.message)
                return result
            if isinstance(result, A2ATask) and result.id != task_id:
                conn.task_ids.add(result.id)
            if result.context_id:
                conn.context_id = result.context_id
            return result

    async def get_task(self, name: PeerName, task_id: TaskId) -> TaskResult:
        conn = self.get(name)
        self._check_owned(conn, task_id)
        return await conn.client.get_task(task_id)

    async def cancel_task(self, name: PeerName, task_id: TaskId) -> TaskResult:
        conn = self.get(name)
        async with conn.cancel_lock:
            self._check_owned(conn, task_id)
            result = await conn.client.cancel_task(task_id)
            if isinstance(result, A2ATask):
                conn.task_ids.discard(task_id)
                _logger.info("Canceled task %s on agent '%s'", task_id, name)
            return result

    @staticmethod
    def _check_owned(conn: AgentConnection, task_id: TaskId) -> None:
        if task_id not in conn.task_ids:
            raise TaskNotFound(
                f"Task '{task_id}' was not issued to agent '{conn.name}'"
            )
