"""
Server Address Resolution.

Turns user input of the form ``host`` or ``host:port`` into a ServerAddress.
"""

from comfy_offload.client.models import DEFAULT_PORT, ServerAddress
from comfy_offload.core.exceptions import InvalidAddressError


def parse_address(raw: str) -> ServerAddress:
    """
    Parse a ``host[:port]`` string.

    The string is split on the first colon. Without a colon the whole string
    is the hostname and the port defaults to 8188.

    Raises:
        InvalidAddressError: Empty hostname, or a port that is not a
            positive integer.
    """
    text = raw.strip()
    hostname, sep, port_text = text.partition(":")

    if not hostname:
        raise InvalidAddressError(f"Server address has no hostname: {raw!r}")

    if not sep:
        return ServerAddress(hostname=hostname, port=DEFAULT_PORT)

    # int() would also take "+80", " 80" and "8_188"
    if not (port_text.isascii() and port_text.isdigit()):
        raise InvalidAddressError(f"Port must be numeric in server address {raw!r}")

    port = int(port_text)
    if port <= 0:
        raise InvalidAddressError(f"Port must be positive in server address {raw!r}")

    return ServerAddress(hostname=hostname, port=port)


def format_address(address: ServerAddress) -> str:
    """Inverse of parse_address for canonical ``host:port`` strings."""
    return str(address)
