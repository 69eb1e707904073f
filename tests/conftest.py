"""Shared test fixtures — fake A2A peers served through httpx.MockTransport."""

from __future__ import annotations

import httpx
import orjson
import pytest

from a2abridge.a2a.models import AgentCard, AgentSkill
from a2abridge.a2a.registry import AgentConnectionRegistry
from a2abridge.bridge.facade import BridgeFacade
from a2abridge.bridge.registrar import OperationRegistrar
from a2abridge.tools.registry import ToolRegistry


def _rpc(body: dict, result: dict | None = None, error: dict | None = None) -> httpx.Response:
    payload: dict = {"jsonrpc": "2.0", "id": body.get("id")}
    if error is not None:
        payload["error"] = error
    else:
        payload["result"] = result
    return httpx.Response(200, json=payload)


class FakePeer:
    """An in-memory A2A agent. Answers card fetches and JSON-RPC calls."""

    def __init__(self, name: str, host: str, reply_with: str = "task") -> None:
        self.host = host
        self.card = AgentCard(
            name=name,
            description=f"{name} test agent",
            url=f"http://{host}/a2a",
            skills=[AgentSkill(id="echo", name="Echo", tags=["test"])],
        )
        self.reply_with = reply_with  # "task" | "message"
        self.context_id = f"ctx-{host}"
        self.error: str | None = None
        self.down = False
        self.card_fetches = 0
        self.requests: list[httpx.Request] = []
        self.rpc_calls: list[dict] = []
        self.tasks: dict[str, dict] = {}

    @property
    def messages(self) -> list[dict]:
        return [c["params"]["message"] for c in self.rpc_calls if c["method"] == "message/send"]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("connection refused", request=request)

        if request.method == "GET":
            self.card_fetches += 1
            return httpx.Response(200, json=self.card.model_dump(by_alias=True, mode="json"))

        body = orjson.loads(request.content)
        self.rpc_calls.append(body)
        if self.error:
            return _rpc(body, error={"code": -32000, "message": self.error})

        params = body["params"]
        method = body["method"]
        if method == "message/send":
            msg = params["message"]
            text = msg["parts"][0]["text"]
            if self.reply_with == "message":
                return _rpc(body, result={
                    "kind": "message",
                    "role": "agent",
                    "messageId": "reply-1",
                    "contextId": self.context_id,
                    "parts": [{"kind": "text", "text": f"echo: {text}"}],
                })
            task = {
                "kind": "task",
                "id": msg["taskId"],
                "contextId": self.context_id,
                "status": {
                    "state": "working",
                    "message": {
                        "kind": "message",
                        "role": "agent",
                        "messageId": "status-1",
                        "parts": [{"kind": "text", "text": f"working on: {text}"}],
                    },
                },
            }
            self.tasks[task["id"]] = task
            return _rpc(body, result=task)

        task = self.tasks.get(params.get("id", ""))
        if task is None:
            return _rpc(body, error={"code": -32001, "message": "Task not found"})
        if method == "tasks/cancel":
            task["status"] = {"state": "canceled"}
        return _rpc(body, result=task)


class FakeNetwork:
    """Routes requests to FakePeers by host name."""

    def __init__(self) -> None:
        self.peers: dict[str, FakePeer] = {}

    def add(self, name: str, host: str, **kwargs) -> FakePeer:
        peer = FakePeer(name, host, **kwargs)
        self.peers[host] = peer
        return peer

    def handle(self, request: httpx.Request) -> httpx.Response:
        peer = self.peers.get(request.url.host)
        if peer is None:
            raise httpx.ConnectError(f"unknown host {request.url.host}", request=request)
        return peer.handle(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def network():
    return FakeNetwork()


@pytest.fixture
def agents(network):
    return AgentConnectionRegistry(transport=network.transport)


@pytest.fixture
def tool_registry():
    return ToolRegistry()


@pytest.fixture
def registrar(tool_registry, agents):
    return OperationRegistrar(tool_registry, agents)


@pytest.fixture
def facade(agents, registrar, tool_registry):
    facade = BridgeFacade(agents, registrar)
    facade.register_tools(tool_registry)
    return facade
