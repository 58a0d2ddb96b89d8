"""
Custom Exceptions.

Error taxonomy for the offload client. Every failure mode has its own
class so call sites branch on the kind of error instead of catching a
generic failure.
"""


class ApplicationError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class InvalidAddressError(ApplicationError):
    """Raised when a server address string cannot be parsed."""

    def __init__(self, message: str = "Invalid server address") -> None:
        super().__init__(message, code="CFG_INVALID_ADDRESS")


class TransportError(ApplicationError):
    """Raised by the transport layer when no response was received."""

    def __init__(self, message: str = "No response from server") -> None:
        super().__init__(message, code="NET_TRANSPORT_ERROR")


class ServerConnectionError(ApplicationError):
    """Raised when the execution server cannot be reached."""

    def __init__(self, message: str = "Could not connect to server") -> None:
        super().__init__(message, code="NET_CONNECTION_FAILED")


class ServerError(ApplicationError):
    """Raised when the server answers with a failure status or error field."""

    def __init__(
        self,
        message: str = "Server error",
        status_code: int | None = None,
        body: str = "",
        details: dict | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.details = details or {}
        super().__init__(message, code="SRV_ERROR")


class ProtocolError(ApplicationError):
    """Raised when a response does not have the expected shape."""

    def __init__(self, message: str = "Unexpected response shape") -> None:
        super().__init__(message, code="PRO_UNEXPECTED_RESPONSE")
