"""
Client Access for CLI Commands.

Commands share one Client per process, built from configuration the first
time it is requested. The global --server option replaces the configured
address before any command runs.
"""

import typer
from rich.console import Console

from comfy_offload.client import Client
from comfy_offload.core.exceptions import ApplicationError

console = Console()

_client: Client | None = None
_server_override: str | None = None


def set_server_override(address: str | None) -> None:
    """Use ``address`` instead of the configured server for this process."""
    global _server_override, _client
    _server_override = address
    _client = None


def get_client() -> Client:
    """Get or create the Client singleton."""
    global _client
    if _client is None:
        if _server_override:
            _client = Client.from_config(server_address=_server_override)
        else:
            _client = Client.from_config()
    return _client


def load_client() -> Client:
    """get_client() for commands: exits with a message if config is unusable."""
    try:
        return get_client()
    except (ApplicationError, RuntimeError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading client configuration: {e}[/red]")
        raise typer.Exit(1)


def reset_client() -> None:
    """Drop the cached Client and any server override."""
    global _client, _server_override
    _client = None
    _server_override = None
