"""Startup agent list — peers to load before the bridge starts serving.

Accepted as a JSON array, either inline (``--agents``, A2A_BRIDGE_AGENTS)
or from a file (``--agents-file``):

    [{"endpoint": "https://helper.example.com", "accessToken": "s3cret"}]
"""

from __future__ import annotations

from pathlib import Path

import orjson
from pydantic import BaseModel, Field, ValidationError

from a2abridge.exceptions import BridgeConfigError


class AgentEntry(BaseModel):
    """One peer to auto-load on startup."""

    endpoint: str
    access_token: str | None = Field(default=None, alias="accessToken")
    descriptor_sub_path: str | None = Field(default=None, alias="descriptorSubPath")

    model_config = {"populate_by_name": True}

    @property
    def key(self) -> str:
        return self.endpoint.rstrip("/")


def parse_agent_entries(raw: str | bytes) -> list[AgentEntry]:
    """Parse a JSON array of agent entries."""
    if not raw or not raw.strip():
        return []
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise BridgeConfigError(f"Agent list is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise BridgeConfigError("Agent list must be a JSON array")
    try:
        return [AgentEntry(**item) for item in data]
    except (TypeError, ValidationError) as e:
        raise BridgeConfigError(f"Invalid agent entry: {e}") from e


def load_agent_entries(path: Path) -> list[AgentEntry]:
    """Read agent entries from a JSON file."""
    if not path.exists():
        raise BridgeConfigError(f"Agent list file not found: {path}")
    return parse_agent_entries(path.read_bytes())
