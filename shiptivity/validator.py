"""
Input validation for the client API.

Each check returns the coerced value or raises a ClientError subclass with
a user-facing explanation. Nothing here writes to the store.
"""
import re
from typing import Any, Optional

from .errors import InvalidId, InvalidLane, InvalidPriority
from .schema import Lane

SQLITE_INT_MIN = -2 ** 63
SQLITE_INT_MAX = 2 ** 63 - 1


def _is_absent(value: Any) -> bool:
    return value is None or value == ""


def parse_int(value: Any) -> Optional[int]:
    """Coerce ints and digit strings to int; anything else gives None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r"-?\d+", text):
            return int(text)
    return None


def validate_id(store, raw_id: Any) -> int:
    """Return the client id as an int if it parses and exists in the store."""
    client_id = parse_int(raw_id)
    if client_id is None:
        raise InvalidId(InvalidId.NOT_AN_INTEGER)
    # Outside SQLite's INTEGER range no row can match.
    if not SQLITE_INT_MIN <= client_id <= SQLITE_INT_MAX:
        raise InvalidId(InvalidId.NOT_FOUND)
    if store.get(client_id) is None:
        raise InvalidId(InvalidId.NOT_FOUND)
    return client_id


def validate_priority(raw: Any) -> Optional[int]:
    """
    Priority is optional. Absent (None or "") returns None, meaning no
    explicit priority was requested; otherwise it must be a positive integer.
    """
    if _is_absent(raw):
        return None
    priority = parse_int(raw)
    if priority is None or priority < 1:
        raise InvalidPriority()
    return priority


def validate_status(raw: Any) -> Optional[Lane]:
    """Status is optional. Absent returns None; otherwise it must name a lane."""
    if _is_absent(raw):
        return None
    try:
        return Lane(raw)
    except ValueError:
        raise InvalidLane()
