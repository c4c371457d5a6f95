"""Identifier generation for new entities."""

import random
import time
import uuid


def new_id() -> str:
    """Return a new unique identifier.

    Uses a random UUID. On platforms without an OS randomness source this
    falls back to a millisecond timestamp plus a pseudo-random suffix, which
    is unique enough for one local user but not unguessable.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        return f"{int(time.time() * 1000)}-{random.getrandbits(52):x}"
