"""Domain rules for the connection-request ledger."""
from __future__ import annotations

import re
import uuid
from enum import Enum

USER_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


class ConnectionStatus(str, Enum):
    INTERESTED = "interested"
    IGNORED = "ignored"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


SEND_STATUSES = frozenset({ConnectionStatus.INTERESTED, ConnectionStatus.IGNORED})
REVIEW_DECISIONS = frozenset({ConnectionStatus.ACCEPTED, ConnectionStatus.REJECTED})
TERMINAL_STATUSES = REVIEW_DECISIONS

# Older clients post "ignore" instead of "ignored".
_ALIASES = {"ignore": ConnectionStatus.IGNORED}


def new_id() -> str:
    return uuid.uuid4().hex


def is_valid_id(value: str | None) -> bool:
    """Return True when value looks like an identifier minted by new_id()."""
    if not value:
        return False
    return bool(USER_ID_PATTERN.fullmatch(value))


def parse_status(value: str | ConnectionStatus | None) -> ConnectionStatus | None:
    if isinstance(value, ConnectionStatus):
        return value
    raw = (value or "").strip().lower()
    if raw in _ALIASES:
        return _ALIASES[raw]
    try:
        return ConnectionStatus(raw)
    except ValueError:
        return None


def pair_key(a: str, b: str) -> tuple[str, str]:
    """Canonical, order-independent key for the pair {a, b}."""
    return (a, b) if a < b else (b, a)


def can_overwrite(current: ConnectionStatus) -> bool:
    """A send may only replace a status that has not been reviewed yet."""
    return current not in TERMINAL_STATUSES
