"""In-memory session store keyed by token."""

import secrets
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol

from photo_kiosk.domain.errors import TokenGenerationError
from photo_kiosk.domain.sessions import KioskSession, SessionStatus

MAX_TOKEN_ATTEMPTS = 5


class SessionStore(Protocol):
    """Storage interface for kiosk sessions."""

    def create(self) -> KioskSession:
        """Create a new waiting session and return it."""

    def get(self, token: str) -> KioskSession | None:
        """Return a session by token, if present."""

    def update(self, token: str, **changes: object) -> KioskSession | None:
        """Merge fields into a session and return the new record."""

    def set_image(self, token: str, image_path: str) -> KioskSession | None:
        """Attach an image and mark the session as image_ready."""

    def count(self) -> int:
        """Return the number of stored sessions."""


def generate_token() -> str:
    """Return an unguessable URL-safe session token."""
    return secrets.token_urlsafe(16)


@dataclass
class InMemorySessionStore(SessionStore):
    """Process-local session store.

    Records are immutable; every mutation swaps in a new ``KioskSession`` so
    callers never hold a reference into the map.
    """

    token_factory: Callable[[], str] = generate_token
    _sessions: dict[str, KioskSession] = field(default_factory=dict)

    def create(self) -> KioskSession:
        """Create a session under a fresh token, retrying on collision."""
        for _ in range(MAX_TOKEN_ATTEMPTS):
            token = self.token_factory()
            if token not in self._sessions:
                break
        else:
            raise TokenGenerationError(
                f"No unused token after {MAX_TOKEN_ATTEMPTS} attempts"
            )
        session = KioskSession(
            token=token,
            status=SessionStatus.WAITING,
            created_at=datetime.now(tz=UTC),
        )
        self._sessions[token] = session
        return session

    def get(self, token: str) -> KioskSession | None:
        return self._sessions.get(token)

    def update(self, token: str, **changes: object) -> KioskSession | None:
        """Replace a session with the given fields merged in."""
        existing = self._sessions.get(token)
        if existing is None:
            return None
        updated = replace(existing, **changes)
        self._sessions[token] = updated
        return updated

    def set_image(self, token: str, image_path: str) -> KioskSession | None:
        """Set image path and image_ready status in one replacement."""
        return self.update(
            token, image_path=image_path, status=SessionStatus.IMAGE_READY
        )

    def count(self) -> int:
        return len(self._sessions)
