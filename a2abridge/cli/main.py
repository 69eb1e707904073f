"""a2a-bridge CLI.

`a2a-bridge serve` runs the MCP stdio bridge (stdout belongs to MCP, so
all human output and logs go to stderr).
`a2a-bridge probe URL` fetches one agent card and prints it.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from a2abridge.config import settings
from a2abridge.exceptions import BridgeConfigError, DescriptorFetchFailed

console = Console()
err_console = Console(stderr=True)

_app = typer.Typer(
    name="a2a-bridge",
    help="a2a-bridge -- expose remote A2A agents as MCP tools.",
    no_args_is_help=True,
)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@_app.command("serve")
def serve(
    agents: str = typer.Option(
        "", "--agents", "-a",
        help='JSON array of agents to load on startup, e.g. \'[{"endpoint": "http://localhost:9000"}]\'',
    ),
    agents_file: Path | None = typer.Option(
        None, "--agents-file", help="JSON file with the same array as --agents",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (default from A2A_BRIDGE_LOG_LEVEL)"),
):
    """Run the bridge as an MCP server on stdio."""
    from a2abridge.bridge.config import load_agent_entries, parse_agent_entries
    from a2abridge.serve import main

    _setup_logging(log_level or settings.log_level)

    try:
        entries = parse_agent_entries(agents or settings.agents)
        if agents_file is not None:
            entries += load_agent_entries(agents_file)
    except BridgeConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    try:
        asyncio.run(main(settings, entries))
    except KeyboardInterrupt:
        pass


@_app.command("probe")
def probe(
    endpoint: str = typer.Argument(help="Base URL of the A2A agent"),
    card_path: str | None = typer.Option(None, "--card-path", help="Agent card path relative to the URL"),
    token: str | None = typer.Option(None, "--token", help="Bearer token for the agent"),
):
    """Fetch an agent card and show the agent's skills."""
    from a2abridge.a2a.client import A2AClient
    from a2abridge.types import sanitize_name

    client = A2AClient(endpoint, card_path=card_path, token=token, timeout=settings.request_timeout)
    try:
        card = asyncio.run(client.get_card())
    except DescriptorFetchFailed as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold cyan]{card.name}[/bold cyan] v{card.version}")
    if card.description:
        console.print(card.description)
    console.print(f"[dim]Endpoint:[/dim] {card.url or client.base_url}")
    console.print(f"[dim]Tool prefix:[/dim] {sanitize_name(card.name)}")

    if not card.skills:
        console.print("[dim]No skills advertised.[/dim]")
        return

    table = Table(title="Skills")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Tags", style="blue")
    table.add_column("Description", style="dim")
    for skill in card.skills:
        table.add_row(skill.id, skill.name, ", ".join(skill.tags), skill.description)
    console.print(table)


@_app.command("version")
def version_cmd():
    """Show a2a-bridge version."""
    from a2abridge import __version__
    console.print(f"a2a-bridge v{__version__}")


def app() -> None:
    _app()
