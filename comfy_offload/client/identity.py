"""
Client Identity.

Per-client correlation token sent with submissions and interrupts so the
server can scope notifications to this client. Not a credential: the random
source is a general-purpose PRNG, swap in ``secrets`` if tokens ever need to
be unguessable.
"""

import random

DEFAULT_PREFIX = "ofx_client_"
HEX_DIGITS = 16

_rng = random.Random()


def generate_client_id(prefix: str = DEFAULT_PREFIX) -> str:
    """Return ``prefix`` followed by 16 independently drawn hex digits."""
    return prefix + "".join(f"{_rng.randrange(16):x}" for _ in range(HEX_DIGITS))
