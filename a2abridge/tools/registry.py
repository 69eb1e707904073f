"""Tool Registry — the table of operations exposed to the host.

Static tools are installed at startup, peer tools whenever a peer is
loaded. The host transport looks tools up here by name on every call.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Awaitable

from pydantic import BaseModel

from a2abridge.tools.schema import ToolSchema
from a2abridge.exceptions import ToolConflictError, ToolNotFoundError

_logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Awaitable[Any]]


class ToolExecutionResult(BaseModel):
    tool_name: str
    success: bool
    result: Any = None
    error: str | None = None
    execution_time_ms: float = 0.0


class ToolRegistry:
    """Registry of every tool currently installed.

    Tools are registered with a schema and an async handler. There is
    no unregister: once installed, a tool lives until process exit.
    """

    def __init__(self) -> None:
        self._tools: dict[str, tuple[ToolSchema, ToolHandler]] = {}

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(self, schema: ToolSchema, handler: ToolHandler) -> None:
        if schema.name in self._tools:
            raise ToolConflictError(f"Tool '{schema.name}' is already registered")
        self._tools[schema.name] = (schema, handler)
        _logger.debug("Registered tool %s", schema.name)

    def list_tools(self) -> list[ToolSchema]:
        return [schema for schema, _ in self._tools.values()]

    def get_handler(self, tool_name: str) -> ToolHandler:
        entry = self._tools.get(tool_name)
        if entry is None:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found")
        return entry[1]

    async def execute(self, tool_name: str, arguments: dict) -> ToolExecutionResult:
        """Execute a tool by name with the given arguments."""
        handler = self.get_handler(tool_name)
        start = time.monotonic()

        try:
            result = await handler(**arguments)
            elapsed = (time.monotonic() - start) * 1000
            return ToolExecutionResult(
                tool_name=tool_name,
                success=True,
                result=result,
                execution_time_ms=elapsed,
            )
        except Exception as e:
            elapsed = (time.monotonic() - start) * 1000
            _logger.exception("Tool %s failed", tool_name)
            return ToolExecutionResult(
                tool_name=tool_name,
                success=False,
                error=f"{type(e).__name__}: {e}",
                execution_time_ms=elapsed,
            )
