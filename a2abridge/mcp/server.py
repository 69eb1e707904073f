"""MCP server — exposes the tool table to the host over stdio.

The tool list is read from the ToolRegistry on every request, so tools
installed by load_agent show up without restarting. When a call changes
the number of tools, the host is sent a tools/list_changed notification.

Usage:
    server = BridgeServer(tool_registry)
    await server.run()
"""

from __future__ import annotations

import logging
from typing import Any

import mcp.types as mcp_types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.stdio import stdio_server

from a2abridge import __version__
from a2abridge.tools.registry import ToolRegistry

_logger = logging.getLogger(__name__)


class BridgeServer:
    """Serves a ToolRegistry as an MCP stdio server."""

    def __init__(self, tools: ToolRegistry, name: str = "a2a-bridge") -> None:
        self._tools = tools
        self._server: Server = Server(name, version=__version__)
        self._server.list_tools()(self.list_tools)
        self._server.call_tool()(self.call_tool)

    async def list_tools(self) -> list[mcp_types.Tool]:
        return [schema.to_mcp_tool() for schema in self._tools.list_tools()]

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None,
    ) -> list[mcp_types.TextContent]:
        """Run a tool and wrap its text in a single content block.

        Unknown tool names raise ToolNotFoundError; the MCP library
        reports that to the host as an error result.
        """
        before = len(self._tools)
        result = await self._tools.execute(name, arguments or {})
        _logger.info(
            "Tool %s %s in %.1fms", name,
            "succeeded" if result.success else "failed", result.execution_time_ms,
        )
        if len(self._tools) != before:
            await self._notify_tools_changed()

        if result.success:
            text = result.result if isinstance(result.result, str) else str(result.result)
        else:
            text = f"Tool {name} failed: {result.error}"
        return [mcp_types.TextContent(type="text", text=text)]

    async def _notify_tools_changed(self) -> None:
        try:
            session = self._server.request_context.session
        except LookupError:
            # Called outside an MCP request, nobody to notify.
            return
        await session.send_tool_list_changed()
        _logger.debug("Sent tools/list_changed (%d tools)", len(self._tools))

    async def run(self) -> None:
        """Serve over stdin/stdout until the host disconnects."""
        options = self._server.create_initialization_options(
            notification_options=NotificationOptions(tools_changed=True),
        )
        async with stdio_server() as (read_stream, write_stream):
            _logger.info("Serving %d tools over stdio", len(self._tools))
            await self._server.run(read_stream, write_stream, options)
