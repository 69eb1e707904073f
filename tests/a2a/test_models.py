"""Tests for A2A protocol data models."""

import pytest
from pydantic import ValidationError

from a2abridge.a2a.models import (
    A2AMessage,
    A2APart,
    A2ATask,
    AgentCard,
    AgentSkill,
    JsonRpcRequest,
    TaskState,
)


class TestAgentCard:
    def test_parses_wire_format(self):
        card = AgentCard(**{
            "name": "Helper Bot",
            "url": "http://helper:9000/a2a",
            "defaultInputModes": ["text/plain"],
            "skills": [{"id": "s1", "name": "Search", "inputModes": ["text/plain"]}],
            "protocolVersion": "0.3.0",
        })
        assert card.name == "Helper Bot"
        assert card.skills[0].input_modes == ["text/plain"]

    def test_card_is_immutable(self):
        card = AgentCard(name="X")
        with pytest.raises(ValidationError):
            card.name = "Y"

    def test_missing_name_rejected(self):
        with pytest.raises(ValidationError):
            AgentCard(url="http://x")

    def test_serialization_uses_aliases(self):
        data = AgentCard(name="X", skills=[AgentSkill(id="s", name="S")]).model_dump(by_alias=True)
        assert "defaultInputModes" in data
        assert "inputModes" in data["skills"][0]


class TestA2AMessage:
    def test_user_text_wire_shape(self):
        msg = A2AMessage.user_text("hello", task_id="t1")
        wire = msg.to_wire()
        assert wire["kind"] == "message"
        assert wire["role"] == "user"
        assert wire["taskId"] == "t1"
        assert wire["parts"] == [{"kind": "text", "text": "hello"}]
        assert "messageId" in wire
        assert "contextId" not in wire

    def test_user_text_carries_context(self):
        wire = A2AMessage.user_text("hi", task_id="t1", context_id="c1").to_wire()
        assert wire["contextId"] == "c1"

    def test_message_ids_unique(self):
        a = A2AMessage(parts=[A2APart(text="a")])
        b = A2AMessage(parts=[A2APart(text="b")])
        assert a.message_id != b.message_id


class TestTask:
    def test_parses_wire_format(self):
        task = A2ATask(**{
            "kind": "task",
            "id": "t1",
            "contextId": "c1",
            "status": {"state": "input-required"},
            "history": [{"role": "user", "messageId": "m1", "parts": []}],
        })
        assert task.status.state == TaskState.INPUT_REQUIRED
        assert task.context_id == "c1"
        assert len(task.history) == 1

    def test_unknown_state_maps_to_unknown(self):
        task = A2ATask(id="t1", status={"state": "teleporting"})
        assert task.status.state == TaskState.UNKNOWN


class TestJsonRpc:
    def test_request_defaults(self):
        req = JsonRpcRequest(method="tasks/get", params={"id": "t1"})
        data = req.model_dump()
        assert data["jsonrpc"] == "2.0"
        assert data["id"]
        assert data["params"] == {"id": "t1"}
