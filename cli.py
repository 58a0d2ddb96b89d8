#!/usr/bin/env python3
"""
Offload Client CLI.

Command-line client for a queue-based workflow execution server.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                              # Show help

    # Server
    python cli.py server ping                         # Check the server answers
    python cli.py server info                         # Show address, client id, directories

    # Jobs
    python cli.py job submit workflow.json            # Queue a workflow
    python cli.py job submit workflow.json --wait     # Queue and wait for the result
    python cli.py job history <job_id>                # Show a job's history record
    python cli.py job wait <job_id> --timeout 600     # Poll until done
    python cli.py job interrupt --client-id <id>      # Stop the running job

Options:
    --server, -s      Server address (host or host:port), overrides config
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from comfy_offload.cli.client import set_server_override  # noqa: E402
from comfy_offload.cli.commands import job_app, server_app  # noqa: E402
from comfy_offload.core.logging import setup_logging  # noqa: E402

app = typer.Typer(
    name="cli",
    help="Offload Client CLI - submit workflows to an execution server and collect results.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(server_app, name="server")
app.add_typer(job_app, name="job")


@app.callback()
def main(
    server: Optional[str] = typer.Option(
        None,
        "--server",
        "-s",
        help="Server address as host or host:port (default port 8188)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Offload Client CLI.

    Submit workflows, poll their history and interrupt execution.
    """
    if server:
        set_server_override(server)

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")

    if debug:
        console.print("[dim]Debug mode enabled[/dim]")


if __name__ == "__main__":
    app()
