"""
Client Data Models.

Value types exchanged between the facade, its sub-components and callers.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from comfy_offload.core.exceptions import ProtocolError

DEFAULT_PORT = 8188

Workflow = dict[str, Any]
"""Caller-built graph document. Passed through to the server untouched."""


@dataclass(frozen=True)
class ServerAddress:
    """Resolved host and port of the execution server."""

    hostname: str
    port: int = DEFAULT_PORT

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}"

    @property
    def base_url(self) -> str:
        return f"http://{self.hostname}:{self.port}"


@dataclass(frozen=True)
class RawResponse:
    """Status and body of any HTTP response the transport received."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def json(self) -> Any:
        """Decode the body, raising ProtocolError on malformed JSON."""
        try:
            return json.loads(self.text)
        except ValueError as e:
            raise ProtocolError(f"Malformed JSON in server response: {e}") from e


@dataclass(frozen=True)
class JobSubmission:
    """A workflow accepted by the server, identified by its job id."""

    job_id: str
    workflow: Workflow
    client_id: str


@dataclass
class HistoryRecord:
    """
    The server's outputs and status for one job.

    An empty record means the server has no entry for the job yet. That is
    also what a queued or running job looks like, so callers must not treat
    an empty record as terminal.
    """

    outputs: dict[str, Any] = field(default_factory=dict)
    status: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def empty(cls) -> "HistoryRecord":
        return cls()

    @classmethod
    def from_entry(cls, entry: Any) -> "HistoryRecord":
        """Build a record from one value of the /history response object."""
        if not isinstance(entry, dict):
            raise ProtocolError(
                f"History entry must be an object, got {type(entry).__name__}"
            )
        outputs = entry.get("outputs") or {}
        status = entry.get("status") or {}
        if not isinstance(outputs, dict) or not isinstance(status, dict):
            raise ProtocolError("History entry 'outputs' and 'status' must be objects")
        return cls(outputs=outputs, status=status, raw=entry)

    @property
    def is_empty(self) -> bool:
        return not self.outputs and not self.status

    @property
    def completed(self) -> bool:
        return bool(self.status.get("completed", False))

    @property
    def status_str(self) -> str | None:
        return self.status.get("status_str")

    def to_dict(self) -> dict[str, Any]:
        if self.is_empty:
            return {}
        return {"outputs": self.outputs, "status": self.status}


class ExecutionState(str, Enum):
    """
    Lifecycle of a job as seen by a caller.

    The client never stores this; callers derive it from submit, poll and
    interrupt results.
    """

    IDLE = "idle"
    QUEUING = "queuing"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (ExecutionState.COMPLETED, ExecutionState.ERROR)
