"""Domain models for kiosk print sessions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle states of a kiosk session."""

    WAITING = "waiting"
    IMAGE_READY = "image_ready"
    PRINTING = "printing"
    PRINTED = "printed"
    ERROR = "error"


ALLOWED_TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.WAITING: frozenset({SessionStatus.IMAGE_READY}),
    SessionStatus.IMAGE_READY: frozenset({SessionStatus.PRINTING}),
    SessionStatus.PRINTING: frozenset({SessionStatus.PRINTED, SessionStatus.ERROR}),
    SessionStatus.PRINTED: frozenset(),
    SessionStatus.ERROR: frozenset(),
}


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    """Return true when the state machine allows moving to ``target``."""
    return target in ALLOWED_TRANSITIONS[current]


@dataclass(frozen=True)
class KioskSession:
    """Represents one kiosk/mobile photo session."""

    token: str
    status: SessionStatus
    created_at: datetime
    image_path: str | None = None
