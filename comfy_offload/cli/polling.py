"""
Job Polling.

Caller-side loop around Client.get_history. The client itself never polls;
this helper is what the CLI uses to wait for a job, and what embedding
applications can use if its cadence suits them.
"""

import time
from collections.abc import Callable

from comfy_offload.client import Client, ExecutionState, HistoryRecord
from comfy_offload.core.exceptions import ApplicationError
from comfy_offload.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class PollTimeoutError(ApplicationError):
    """Raised when a job is still unresolved after the caller's timeout."""

    def __init__(self, message: str = "Timed out waiting for job") -> None:
        super().__init__(message, code="JOB_POLL_TIMEOUT")


class JobFailedError(ApplicationError):
    """Raised when the server reports that a job ended in error."""

    def __init__(self, message: str = "Job failed", record: HistoryRecord | None = None) -> None:
        self.record = record
        super().__init__(message, code="JOB_FAILED")


def derive_state(record: HistoryRecord) -> ExecutionState:
    """Map a history record onto the caller-side execution state."""
    if record.is_empty:
        return ExecutionState.PROCESSING
    if record.status_str == "error":
        return ExecutionState.ERROR
    if record.completed:
        return ExecutionState.COMPLETED
    return ExecutionState.PROCESSING


def wait_for_completion(
    client: Client,
    job_id: str,
    *,
    interval: float = 1.0,
    timeout: float = 300.0,
    on_state: Callable[[ExecutionState], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> HistoryRecord:
    """
    Poll until the job completes, fails, or ``timeout`` seconds pass.

    Connection, server and protocol errors from get_history propagate on
    the first occurrence.

    Args:
        client: Client the job was submitted through.
        job_id: Id returned by the submission.
        interval: Seconds between polls.
        timeout: Seconds before giving up.
        on_state: Called whenever the derived state changes.

    Raises:
        JobFailedError: The server reported the job as failed.
        PollTimeoutError: The job was unresolved at the deadline.
    """
    deadline = clock() + timeout
    state = ExecutionState.QUEUING
    if on_state:
        on_state(state)

    while True:
        record = client.get_history(job_id)
        new_state = derive_state(record)

        if new_state is not state:
            log_with_source(
                logger, "client", "debug", "Job state changed",
                job_id=job_id, old_state=state.value, new_state=new_state.value,
            )
            state = new_state
            if on_state:
                on_state(state)

        if state is ExecutionState.COMPLETED:
            return record
        if state is ExecutionState.ERROR:
            raise JobFailedError(f"Job {job_id} failed on the server", record=record)

        if clock() >= deadline:
            raise PollTimeoutError(f"Job {job_id} unresolved after {timeout:g}s")
        sleep(interval)
