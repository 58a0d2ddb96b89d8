"""Best-effort cancellation of the job currently running for a client."""

from comfy_offload.client.transport import TransportClient
from comfy_offload.core.exceptions import TransportError
from comfy_offload.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

INTERRUPT_PATH = "/interrupt"


class InterruptController:
    """Sends ``POST /interrupt`` scoped to a client id."""

    def __init__(self, transport: TransportClient, timeout: float) -> None:
        self._transport = transport
        self._timeout = timeout

    def interrupt(self, client_id: str) -> bool:
        """
        Ask the server to stop execution for ``client_id``.

        Returns True only for a 200 reply. Never raises; a False result does
        not tell "nothing was running" apart from "signal lost".
        """
        try:
            response = self._transport.post(
                INTERRUPT_PATH, json={"client_id": client_id}, timeout=self._timeout,
            )
        except TransportError as e:
            log_with_source(
                logger, "client", "warning", "Interrupt execution failed",
                client_id=client_id, error=e.message,
            )
            return False

        if not response.ok:
            log_with_source(
                logger, "client", "warning", "Interrupt rejected",
                client_id=client_id, status_code=response.status_code,
            )
            return False
        return True
