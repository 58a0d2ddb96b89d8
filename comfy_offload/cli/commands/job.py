"""
Job Commands.

Submit workflows, inspect their history, wait for them and interrupt them.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax

from comfy_offload.cli.client import load_client
from comfy_offload.cli.polling import wait_for_completion
from comfy_offload.client import Client, ExecutionState, HistoryRecord
from comfy_offload.core.config import get_app_config
from comfy_offload.core.exceptions import ApplicationError

app = typer.Typer(help="Workflow job commands")
console = Console()

STATE_COLORS = {
    ExecutionState.QUEUING: "yellow",
    ExecutionState.PROCESSING: "cyan",
    ExecutionState.COMPLETED: "green",
    ExecutionState.ERROR: "red",
}


def _fail(error: ApplicationError) -> None:
    console.print(f"[red]Error ({error.code}): {error.message}[/red]")
    raise typer.Exit(1)


def _load_workflow(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot read workflow {path}: {e}[/red]")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        console.print(f"[red]Workflow {path} must contain a JSON object[/red]")
        raise typer.Exit(1)
    return data


def _print_state(state: ExecutionState) -> None:
    color = STATE_COLORS.get(state, "white")
    console.print(f"[{color}]{state.value}[/{color}]")


def _print_record(record: HistoryRecord) -> None:
    console.print(Syntax(json.dumps(record.to_dict(), indent=2, sort_keys=True), "json"))


def _wait(client: Client, job_id: str, interval: float | None, timeout: float | None) -> None:
    polling = get_app_config().client.polling
    try:
        record = wait_for_completion(
            client,
            job_id,
            interval=interval if interval is not None else polling.interval,
            timeout=timeout if timeout is not None else polling.timeout,
            on_state=_print_state,
        )
    except ApplicationError as e:
        _fail(e)
    _print_record(record)


@app.command()
def submit(
    workflow_file: Path = typer.Argument(..., help="JSON file holding the workflow graph"),
    wait: bool = typer.Option(False, "--wait", "-w", help="Poll until the job finishes"),
    interval: Optional[float] = typer.Option(None, "--interval", help="Seconds between polls"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds before giving up"),
) -> None:
    """
    Submit a workflow and print its job id.

    Examples:
        cli.py job submit upscale.json
        cli.py job submit upscale.json --wait --timeout 600
    """
    workflow = _load_workflow(workflow_file)
    client = load_client()

    try:
        submission = client.submit(workflow)
    except ApplicationError as e:
        _fail(e)

    job_id = submission.job_id
    console.print(f"[green]Queued job[/green] {job_id}")
    console.print(f"[dim]Client id {submission.client_id} (pass to job interrupt --client-id)[/dim]")
    if wait:
        _wait(client, job_id, interval, timeout)


@app.command()
def history(
    job_id: str = typer.Argument(..., help="Job id returned by submit"),
) -> None:
    """
    Show the server's history record for a job.

    An empty result means the job is unknown, queued or still running.
    """
    client = load_client()

    try:
        record = client.get_history(job_id)
    except ApplicationError as e:
        _fail(e)

    if record.is_empty:
        console.print(f"[yellow]No history for {job_id} yet[/yellow]")
        return
    _print_record(record)


@app.command()
def wait(
    job_id: str = typer.Argument(..., help="Job id returned by submit"),
    interval: Optional[float] = typer.Option(None, "--interval", help="Seconds between polls"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds before giving up"),
) -> None:
    """
    Poll a job's history until it completes or fails.
    """
    client = load_client()
    _wait(client, job_id, interval, timeout)


@app.command()
def interrupt(
    client_id: str = typer.Option(
        ...,
        "--client-id",
        help="Client id the job was submitted with (printed by job submit)",
    ),
) -> None:
    """
    Ask the server to stop the running job (best effort).

    The server matches the client id, so it must be the one the job was
    submitted under; each CLI run generates a new id of its own.
    """
    client = load_client()

    if client.interrupt_execution(client_id):
        console.print("[green]✓ Interrupt sent[/green]")
    else:
        console.print("[yellow]Interrupt was not acknowledged[/yellow]")
        raise typer.Exit(1)
