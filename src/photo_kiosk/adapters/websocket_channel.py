"""WebSocket implementation of a push channel."""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from fastapi import WebSocket

from photo_kiosk.services.notifications import PushChannel

_logger = logging.getLogger(__name__)


class ChannelState(Enum):
    """Lifecycle of a push channel."""

    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


class WebSocketChannel(PushChannel):
    """Wraps a FastAPI WebSocket behind a non-blocking ``send``.

    Outgoing frames go through a queue drained by ``run_sender``. Teardown
    runs once, whichever of close or error happens first.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self.state = ChannelState.OPEN
        self._outbox: asyncio.Queue[str] = asyncio.Queue()
        self._close_callbacks: list[Callable[[], None]] = []
        self._error_callbacks: list[Callable[[BaseException], None]] = []

    @property
    def is_open(self) -> bool:
        return self.state is ChannelState.OPEN

    def send(self, text: str) -> None:
        """Queue a frame; dropped silently once the channel is not open."""
        if self.is_open:
            self._outbox.put_nowait(text)

    def on_close(self, callback: Callable[[], None]) -> None:
        self._close_callbacks.append(callback)

    def on_error(self, callback: Callable[[BaseException], None]) -> None:
        self._error_callbacks.append(callback)

    async def run_sender(self) -> None:
        """Deliver queued frames until the channel stops being open."""
        while self.is_open:
            text = await self._outbox.get()
            if not self.is_open:
                return
            try:
                await self.websocket.send_text(text)
            except Exception as exc:
                self.fail(exc)
                return

    def fail(self, exc: BaseException) -> None:
        """Mark the channel broken, notify error hooks, then close."""
        if self.state is not ChannelState.OPEN:
            return
        _logger.warning("WebSocket send failed: %s", exc)
        self.state = ChannelState.CLOSING
        for callback in self._error_callbacks:
            callback(exc)
        self._finish()

    def close(self) -> None:
        """Mark the channel closed and fire close hooks once."""
        if self.state is not ChannelState.OPEN:
            return
        self.state = ChannelState.CLOSING
        self._finish()

    def _finish(self) -> None:
        self.state = ChannelState.CLOSED
        for callback in self._close_callbacks:
            callback()
        self._close_callbacks.clear()
        self._error_callbacks.clear()
