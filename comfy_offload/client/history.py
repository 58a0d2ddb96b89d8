"""
History Polling.

Fetches the server's record of a job. A missing record is an ordinary
outcome while the job is queued or running.
"""

from urllib.parse import quote

from comfy_offload.client.models import HistoryRecord
from comfy_offload.client.transport import TransportClient
from comfy_offload.core.exceptions import (
    ProtocolError,
    ServerConnectionError,
    ServerError,
    TransportError,
)
from comfy_offload.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class HistoryPoller:
    """Reads ``/history/{job_id}`` through a TransportClient."""

    def __init__(self, transport: TransportClient, timeout: float) -> None:
        self._transport = transport
        self._timeout = timeout

    def get_history(self, job_id: str) -> HistoryRecord:
        """
        Return the record for ``job_id``, or an empty record if there is none.

        Raises:
            ServerConnectionError: The server could not be reached.
            ServerError: Non-200 status.
            ProtocolError: Malformed JSON or an unexpected body shape.
        """
        address = self._transport.address
        path = f"/history/{quote(job_id, safe='')}"

        try:
            response = self._transport.get(path, timeout=self._timeout)
        except TransportError as e:
            raise ServerConnectionError(
                f"Failed to get history from server at {address}"
            ) from e

        if not response.ok:
            raise ServerError(
                f"History request failed: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        data = response.json()
        if not isinstance(data, dict):
            raise ProtocolError(
                f"Unexpected history response shape from {address}: expected an object"
            )

        if job_id not in data:
            log_with_source(logger, "client", "debug", "No history yet", job_id=job_id)
            return HistoryRecord.empty()

        return HistoryRecord.from_entry(data[job_id])
