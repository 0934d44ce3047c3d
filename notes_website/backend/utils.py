import time
import uuid
from datetime import datetime, UTC
from typing import Iterable


def make_id(prefix: str) -> str:
    """Generate a unique ID with a given prefix."""
    return f"{prefix}_{uuid.uuid4()}"


def make_note_id(taken: Iterable[str] = ()) -> str:
    """Return the current time in milliseconds as a string, bumped past any id in `taken`."""
    taken = set(taken)
    stamp = time.time_ns() // 1_000_000
    while str(stamp) in taken:
        stamp += 1
    return str(stamp)


def time_now() -> str:
    """Return the current time in ISO format (UTC, no microseconds)."""
    return datetime.now(UTC).replace(microsecond=0).isoformat()
