"""
Workflow Submission.

Posts a workflow to ``/prompt`` and turns the acknowledgment into a job id.
Submissions are never retried: a resubmitted workflow is a duplicate job.
"""

import json
from typing import Any

from comfy_offload.client.models import JobSubmission, Workflow
from comfy_offload.client.transport import TransportClient
from comfy_offload.core.exceptions import (
    ProtocolError,
    ServerConnectionError,
    ServerError,
    TransportError,
)
from comfy_offload.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

PROMPT_PATH = "/prompt"


def _describe(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


class WorkflowSubmitter:
    """Submits workflows through a TransportClient."""

    def __init__(self, transport: TransportClient, timeout: float) -> None:
        self._transport = transport
        self._timeout = timeout

    def submit(self, workflow: Workflow, client_id: str) -> JobSubmission:
        """
        Queue a workflow on the server.

        Raises:
            ServerConnectionError: The server could not be reached.
            ServerError: Non-200 status, or an ``error`` field in the reply.
            ProtocolError: Malformed JSON or neither ``prompt_id`` nor ``error``.
        """
        address = self._transport.address
        payload = {"prompt": workflow, "client_id": client_id}

        try:
            response = self._transport.post(PROMPT_PATH, json=payload, timeout=self._timeout)
        except TransportError as e:
            log_with_source(
                logger, "client", "error", "Workflow submission failed",
                server=str(address), error=e.message,
            )
            raise ServerConnectionError(
                f"Failed to connect to server at {address}"
            ) from e

        if not response.ok:
            log_with_source(
                logger, "client", "error", "Workflow rejected",
                server=str(address), status_code=response.status_code,
            )
            raise ServerError(
                f"Server returned error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        data = response.json()
        if not isinstance(data, dict):
            raise ProtocolError(
                f"Unexpected response shape from {address}: expected an object"
            )

        if "prompt_id" in data:
            prompt_id = data["prompt_id"]
            # bool is an int subclass but never a job id
            if isinstance(prompt_id, bool) or not isinstance(prompt_id, (str, int)):
                raise ProtocolError(
                    f"Unexpected prompt_id from {address}: {prompt_id!r}"
                )
            job_id = str(prompt_id)
            log_with_source(
                logger, "client", "info", "Workflow queued",
                job_id=job_id, client_id=client_id, queue_number=data.get("number"),
            )
            return JobSubmission(job_id=job_id, workflow=workflow, client_id=client_id)

        if "error" in data:
            details = {"error": data["error"]}
            if data.get("node_errors"):
                details["node_errors"] = data["node_errors"]
            log_with_source(
                logger, "client", "error", "Workflow rejected",
                server=str(address), error=_describe(data["error"]),
            )
            raise ServerError(
                f"Server error: {_describe(data['error'])}",
                status_code=response.status_code,
                body=response.text,
                details=details,
            )

        raise ProtocolError(f"Unexpected response shape from {address}: {response.text}")
