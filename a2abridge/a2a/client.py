"""A2A Client — talks to one remote A2A agent over HTTP.

Follows the httpx-based async pattern: a short-lived AsyncClient per
request, JSON-RPC 2.0 over POST, agent card over GET.

Usage:
    client = A2AClient("https://remote-agent.example.com", token="s3cret")
    card = await client.get_card()
    result = await client.send_message(
        A2AMessage.user_text("analyze this data", task_id=new_id())
    )
    task = await client.get_task("f3a9...")
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from a2abridge.a2a.models import (
    A2AMessage,
    A2ATask,
    AgentCard,
    ExchangeResult,
    JsonRpcRequest,
    RemoteError,
    TaskResult,
)
from a2abridge.exceptions import DescriptorFetchFailed, RemoteProtocolError

_logger = logging.getLogger(__name__)

AGENT_CARD_WELL_KNOWN_PATH = "/.well-known/agent-card.json"


class A2AClient:
    """HTTP client bound to a single remote A2A agent."""

    def __init__(
        self,
        base_url: str,
        card_path: str | None = None,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._card_path = _normalize_path(card_path or AGENT_CARD_WELL_KNOWN_PATH)
        self._timeout = timeout
        self._transport = transport
        self._headers: dict[str, str] = {}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._rpc_url = self.base_url

    @property
    def card_url(self) -> str:
        return f"{self.base_url}{self._card_path}"

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    def bind(self, card: AgentCard) -> None:
        """Route JSON-RPC calls to the endpoint the card advertises."""
        if card.url:
            self._rpc_url = card.url

    async def get_card(self) -> AgentCard:
        """Fetch the agent's card."""
        try:
            async with self._http() as client:
                resp = await client.get(self.card_url)
                resp.raise_for_status()
                data = resp.json()
            return AgentCard(**data)
        except (httpx.HTTPError, ValueError, TypeError) as e:
            # ValidationError and JSONDecodeError are both ValueErrors
            raise DescriptorFetchFailed(
                f"Could not fetch agent card from {self.card_url}: {e}"
            ) from e

    async def send_message(self, message: A2AMessage) -> ExchangeResult:
        """Send a message; the peer answers with a message or a task."""
        rpc = JsonRpcRequest(
            method="message/send",
            params={"message": message.to_wire()},
        )
        return _parse_result(await self._rpc_call(rpc))

    async def get_task(self, task_id: str) -> TaskResult:
        """Poll the status of a remote task."""
        rpc = JsonRpcRequest(method="tasks/get", params={"id": task_id})
        return _parse_task_result(await self._rpc_call(rpc))

    async def cancel_task(self, task_id: str) -> TaskResult:
        """Cancel a remote task."""
        rpc = JsonRpcRequest(method="tasks/cancel", params={"id": task_id})
        return _parse_task_result(await self._rpc_call(rpc))

    async def _rpc_call(self, request: JsonRpcRequest) -> dict[str, Any]:
        """Execute a JSON-RPC call against the peer's endpoint."""
        _logger.debug("A2A %s -> %s", request.method, self._rpc_url)
        async with self._http() as client:
            resp = await client.post(self._rpc_url, json=request.model_dump())
            resp.raise_for_status()
            try:
                data = resp.json()
            except ValueError as e:
                raise RemoteProtocolError(
                    f"Response to {request.method} is not JSON: {e}"
                ) from e
        if not isinstance(data, dict):
            raise RemoteProtocolError(
                f"Response to {request.method} is not a JSON-RPC object"
            )
        return data

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )


def _normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def _parse_result(data: dict[str, Any]) -> ExchangeResult:
    """Turn a JSON-RPC response body into one of the result variants."""
    error = data.get("error")
    if error:
        if isinstance(error, dict):
            return RemoteError(
                code=error.get("code"),
                message=str(error.get("message", error)),
                data=error.get("data"),
            )
        return RemoteError(message=str(error))

    result = data.get("result")
    if not isinstance(result, dict):
        raise RemoteProtocolError("Response carries neither a result nor an error")

    kind = result.get("kind")
    try:
        if kind == "message":
            return A2AMessage(**result)
        if kind == "task" or "status" in result:
            return A2ATask(**result)
    except ValidationError as e:
        raise RemoteProtocolError(f"Malformed {kind or 'task'} in response: {e}") from e
    raise RemoteProtocolError(f"Unexpected result kind: {kind!r}")


def _parse_task_result(data: dict[str, Any]) -> TaskResult:
    result = _parse_result(data)
    if isinstance(result, A2AMessage):
        raise RemoteProtocolError("Expected a task but the peer answered with a message")
    return result
