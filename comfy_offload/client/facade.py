"""
Offload Client.

The single object callers interact with. Owns the server address, the
client identity and the input/output directory configuration, and builds
a short-lived transport and sub-component for each operation.

All calls block. Polling cadence, give-up timeouts and retries are the
caller's business.

Usage:
    client = Client("localhost")          # localhost:8188
    if client.test_connection():
        job_id = client.queue_prompt(workflow)
        record = client.get_history(job_id)
        if record.is_empty:
            ...  # still queued or running, poll again later
"""

import os
from typing import Any

import httpx

from comfy_offload.client.address import parse_address
from comfy_offload.client.history import HistoryPoller
from comfy_offload.client.identity import DEFAULT_PREFIX, generate_client_id
from comfy_offload.client.interrupt import InterruptController
from comfy_offload.client.models import HistoryRecord, JobSubmission, ServerAddress, Workflow
from comfy_offload.client.submitter import WorkflowSubmitter
from comfy_offload.client.transport import ClientTimeouts, TransportClient
from comfy_offload.client.workflow import WorkflowBuilder
from comfy_offload.core.config import get_app_config, get_directories, get_server_address
from comfy_offload.core.exceptions import TransportError
from comfy_offload.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

# 404 on / still means a server answered, it just has no root handler
REACHABLE_STATUSES = frozenset({200, 404})


class Client:
    """Client for a queue-based workflow execution server."""

    def __init__(
        self,
        server_address: str,
        *,
        timeouts: ClientTimeouts | None = None,
        client_id_prefix: str = DEFAULT_PREFIX,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            server_address: ``host`` or ``host:port``.
            timeouts: Per-operation timeouts; defaults to 5/10/10/5 seconds.
            client_id_prefix: Human-readable prefix of the generated client id.
            transport: Optional httpx transport shared by every request.

        Raises:
            InvalidAddressError: server_address cannot be parsed.
        """
        self._address = parse_address(server_address)
        self._timeouts = timeouts or ClientTimeouts()
        self._http_transport = transport
        self._client_id = generate_client_id(client_id_prefix)
        self._input_dir: str | os.PathLike = ""
        self._output_dir: str | os.PathLike = ""

    @classmethod
    def from_config(cls, **overrides: Any) -> "Client":
        """
        Build a client from config/settings/client.yaml and COMFY_* overrides.

        Keyword arguments are passed to the constructor and win over config.
        """
        client_config = get_app_config().client
        timeouts = client_config.timeouts
        overrides.setdefault(
            "timeouts",
            ClientTimeouts(
                connect_probe=timeouts.connect_probe,
                submit=timeouts.submit,
                history=timeouts.history,
                interrupt=timeouts.interrupt,
            ),
        )
        overrides.setdefault("client_id_prefix", client_config.identity.prefix)
        server_address = overrides.pop("server_address", None) or get_server_address()

        client = cls(server_address, **overrides)
        input_dir, output_dir = get_directories()
        client.set_input_directory(input_dir)
        client.set_output_directory(output_dir)
        return client

    def _transport(self) -> TransportClient:
        return TransportClient(self._address, transport=self._http_transport)

    # ------------------------------------------------------------------
    # connection management
    # ------------------------------------------------------------------

    def test_connection(self) -> bool:
        """Return True if a server answers ``GET /`` with 200 or 404."""
        try:
            response = self._transport().get("/", timeout=self._timeouts.connect_probe)
        except TransportError as e:
            log_with_source(
                logger, "client", "warning", "Connection test failed",
                server=str(self._address), error=e.message,
            )
            return False
        return response.status_code in REACHABLE_STATUSES

    def set_server_address(self, address: str) -> None:
        """
        Point the client at another server.

        The new address replaces the old one only once it parsed; on
        InvalidAddressError the previous address stays in effect.
        """
        self._address = parse_address(address)
        log_with_source(logger, "client", "info", "Server address changed", server=str(self._address))

    def get_server_address(self) -> str:
        return str(self._address)

    @property
    def server_address(self) -> ServerAddress:
        return self._address

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def timeouts(self) -> ClientTimeouts:
        return self._timeouts

    # ------------------------------------------------------------------
    # workflow execution
    # ------------------------------------------------------------------

    def submit(self, workflow: Workflow, client_id: str | None = None) -> JobSubmission:
        """Queue ``workflow``; see WorkflowSubmitter.submit for errors."""
        submitter = WorkflowSubmitter(self._transport(), self._timeouts.submit)
        return submitter.submit(workflow, client_id or self._client_id)

    def queue_prompt(self, workflow: Workflow, client_id: str | None = None) -> str:
        """Queue ``workflow`` and return the server-assigned job id."""
        return self.submit(workflow, client_id).job_id

    def submit_job(self, builder: WorkflowBuilder) -> JobSubmission:
        """Build a workflow from ``builder`` and queue it."""
        workflow = builder.build_workflow()
        log_with_source(
            logger, "client", "debug", "Submitting job",
            builder=type(builder).__name__,
            required_resources=sorted(builder.required_resources()),
        )
        return self.submit(workflow)

    def get_history(self, job_id: str) -> HistoryRecord:
        """Fetch the job's record; empty while the server has none."""
        poller = HistoryPoller(self._transport(), self._timeouts.history)
        return poller.get_history(job_id)

    def interrupt_execution(self, client_id: str | None = None) -> bool:
        """Best-effort interrupt; True only if the server answered 200."""
        controller = InterruptController(self._transport(), self._timeouts.interrupt)
        return controller.interrupt(client_id or self._client_id)

    # ------------------------------------------------------------------
    # file exchange directories
    # ------------------------------------------------------------------

    def set_input_directory(self, path: str | os.PathLike) -> None:
        self._input_dir = path

    def set_output_directory(self, path: str | os.PathLike) -> None:
        self._output_dir = path

    def get_input_directory(self) -> str | os.PathLike:
        return self._input_dir

    def get_output_directory(self) -> str | os.PathLike:
        return self._output_dir

    # ------------------------------------------------------------------
    # model management
    # ------------------------------------------------------------------

    def find_models(self, model_type: str) -> list[str]:
        """
        Discover models of ``model_type`` available on the server.

        Not implemented yet and always returns an empty list. Discovery
        needs a protocol (the server's /object_info endpoint or a scan of
        its model folders) that has not been settled.
        """
        return []
