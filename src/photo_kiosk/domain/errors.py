"""Domain errors raised by the session orchestrator."""

from photo_kiosk.domain.sessions import SessionStatus


class KioskError(Exception):
    """Base class for kiosk session errors."""


class SessionNotFoundError(KioskError):
    """Raised when a token does not match any session."""

    def __init__(self, token: str) -> None:
        super().__init__("Session not found")
        self.token = token


class NoImageToPrintError(KioskError):
    """Raised when print is requested without a stored or uploaded image."""

    def __init__(self, token: str) -> None:
        super().__init__("No image to print")
        self.token = token


class InvalidTransitionError(KioskError):
    """Raised when an operation is not allowed from the current status."""

    def __init__(self, token: str, current: SessionStatus, operation: str) -> None:
        super().__init__(f"Cannot {operation}: session is {current.value}")
        self.token = token
        self.current = current
        self.operation = operation


class PrintFailedError(KioskError):
    """Raised after a print attempt failed and the session moved to error."""

    def __init__(self, token: str, reason: str) -> None:
        super().__init__("Failed to print image")
        self.token = token
        self.reason = reason


class TokenGenerationError(KioskError):
    """Raised when no unused session token could be generated."""
