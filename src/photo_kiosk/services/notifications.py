"""Fan-out of session notifications to live push channels."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from photo_kiosk.domain.notifications import SessionNotification

_logger = logging.getLogger(__name__)


class PushChannel(Protocol):
    """Long-lived connection the server can push text messages over."""

    @property
    def is_open(self) -> bool:
        """Return true while the channel accepts messages."""

    def send(self, text: str) -> None:
        """Queue a text payload for delivery without blocking."""

    def on_close(self, callback: Callable[[], None]) -> None:
        """Register a callback fired when the channel closes."""

    def on_error(self, callback: Callable[[BaseException], None]) -> None:
        """Register a callback fired when the channel fails."""


@dataclass
class NotificationHub:
    """Maps session tokens to subscribed channels."""

    _subscribers: dict[str, set[PushChannel]] = field(default_factory=dict)

    def subscribe(self, token: str, channel: PushChannel) -> None:
        """Register a channel and release it when it closes or errors."""
        self._subscribers.setdefault(token, set()).add(channel)

        def _release() -> None:
            self.unsubscribe(token, channel)

        def _release_on_error(exc: BaseException) -> None:
            _logger.warning("Channel error for session %s: %s", token, exc)
            self.unsubscribe(token, channel)

        channel.on_close(_release)
        channel.on_error(_release_on_error)
        _logger.info(
            "Client connected to session: %s (Total connections: %s)",
            token,
            self.subscriber_count(token),
        )

    def unsubscribe(self, token: str, channel: PushChannel) -> None:
        """Remove a channel; repeated calls are no-ops."""
        channels = self._subscribers.get(token)
        if channels is None or channel not in channels:
            return
        channels.discard(channel)
        if not channels:
            del self._subscribers[token]
        _logger.info("Client disconnected from session: %s", token)

    def publish(self, token: str, message: SessionNotification) -> int:
        """Send a message to every open channel of a session.

        Channels that are no longer open are pruned. Returns the number of
        channels the message was handed to.
        """
        channels = self._subscribers.get(token)
        if not channels:
            _logger.info("No active connections for session: %s", token)
            return 0

        text = message.to_text()
        sent = 0
        for channel in list(channels):
            if channel.is_open:
                channel.send(text)
                sent += 1
            else:
                channels.discard(channel)

        if not channels:
            self._subscribers.pop(token, None)
        _logger.info("Broadcasted to %s client(s) for session: %s", sent, token)
        return sent

    def subscriber_count(self, token: str) -> int:
        """Return the number of subscribed channels for a token."""
        return len(self._subscribers.get(token, ()))

    def has_subscribers(self, token: str) -> bool:
        """Return true while a subscriber set exists for a token.

        Empty sets are dropped, so this is false exactly when
        ``subscriber_count`` is zero.
        """
        return token in self._subscribers
