"""Tool schema — describes what a tool is and what it accepts."""

from __future__ import annotations

from typing import Any

import mcp.types as mcp_types
from pydantic import BaseModel, Field


class ToolParameter(BaseModel):
    name: str
    type: str = "string"
    description: str
    required: bool = True


class ToolSchema(BaseModel):
    """Complete description of a tool the host can call."""

    name: str
    description: str
    parameters: list[ToolParameter] = Field(default_factory=list)

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments."""
        properties: dict[str, Any] = {}
        required: list[str] = []
        for p in self.parameters:
            properties[p.name] = {"type": p.type, "description": p.description}
            if p.required:
                required.append(p.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    def to_mcp_tool(self) -> mcp_types.Tool:
        """Convert to the MCP tool listing format."""
        return mcp_types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )
