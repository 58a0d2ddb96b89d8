"""
HTTP Transport.

Issues one request per call against the execution server. Each call opens
its own connection, applies its own timeout and closes the connection on
return, whatever the outcome.

Status codes are not interpreted here: a 404 or 500 is a successful
transport result handed back to the calling component. Only the absence
of a usable response (refused connection, DNS failure, timeout, a body
that cannot be decoded) is an error.
"""

from dataclasses import dataclass
from typing import Any

import httpx

from comfy_offload.client.models import RawResponse, ServerAddress
from comfy_offload.core.exceptions import TransportError
from comfy_offload.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClientTimeouts:
    """Per-operation request timeouts in seconds."""

    connect_probe: float = 5.0
    submit: float = 10.0
    history: float = 10.0
    interrupt: float = 5.0


class TransportClient:
    """
    Blocking HTTP client bound to one server address.

    Usage:
        transport = TransportClient(ServerAddress("localhost", 8188))
        response = transport.request("GET", "/", timeout=5.0)
    """

    def __init__(
        self,
        address: ServerAddress,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            address: Server to talk to.
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
        """
        self.address = address
        self._transport = transport

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        timeout: float,
    ) -> RawResponse:
        """
        Send a request and return whatever the server answered.

        Raises:
            TransportError: No response was received.
        """
        log_with_source(
            logger,
            "client",
            "debug",
            "Server request",
            method=method,
            path=path,
            server=str(self.address),
        )

        try:
            with httpx.Client(
                base_url=self.address.base_url,
                timeout=timeout,
                transport=self._transport,
            ) as client:
                response = client.request(method, path, json=json)
                body = response.text
        except (httpx.RequestError, httpx.InvalidURL) as e:
            log_with_source(
                logger,
                "client",
                "debug",
                "Server request failed",
                method=method,
                path=path,
                server=str(self.address),
                error=str(e),
            )
            raise TransportError(
                f"{method} {path} to {self.address} failed: {e}"
            ) from e

        log_with_source(
            logger,
            "client",
            "debug",
            "Server response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return RawResponse(status_code=response.status_code, text=body)

    def get(self, path: str, *, timeout: float) -> RawResponse:
        """Make a GET request."""
        return self.request("GET", path, timeout=timeout)

    def post(self, path: str, *, json: Any = None, timeout: float) -> RawResponse:
        """Make a POST request."""
        return self.request("POST", path, json=json, timeout=timeout)
