"""
Server Commands.

Commands for checking which server the client talks to and whether it is up.
"""

import typer
from rich.console import Console
from rich.panel import Panel

from comfy_offload.cli.client import load_client

app = typer.Typer(help="Server connection commands")
console = Console()


@app.command()
def ping() -> None:
    """
    Check that the execution server is reachable.

    Examples:
        cli.py server ping
        cli.py --server gpu-box:8188 server ping
    """
    client = load_client()

    if client.test_connection():
        console.print(f"[green]✓ Server at {client.get_server_address()} is reachable[/green]")
    else:
        console.print(f"[red]✗ Server at {client.get_server_address()} is not reachable[/red]")
        raise typer.Exit(1)


@app.command()
def info() -> None:
    """
    Display the resolved server address, client id and directories.
    """
    client = load_client()

    console.print(Panel(
        f"Server: [bold]{client.get_server_address()}[/bold]\n"
        f"Client ID: {client.client_id}\n"
        f"Input directory: {client.get_input_directory() or '-'}\n"
        f"Output directory: {client.get_output_directory() or '-'}",
        title="Client Info",
    ))
