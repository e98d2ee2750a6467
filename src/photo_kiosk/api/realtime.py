"""WebSocket endpoint that streams session notifications to kiosks."""

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, status
from starlette.types import Message

from photo_kiosk.adapters.websocket_channel import WebSocketChannel
from photo_kiosk.domain import notifications

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def session_updates(websocket: WebSocket) -> None:
    """Subscribe a kiosk display to a session's notifications.

    The session is identified by the ``sessionId`` (or ``token``) query
    parameter. Text or binary frames from the client are logged and otherwise
    ignored.
    """
    token = websocket.query_params.get("sessionId") or websocket.query_params.get(
        "token"
    )
    if not token:
        logger.error("WebSocket connection rejected: No sessionId provided")
        await websocket.close(
            code=status.WS_1008_POLICY_VIOLATION, reason="Session ID required"
        )
        return

    await websocket.accept()
    hub = websocket.app.state.container.notification_hub
    channel = WebSocketChannel(websocket)
    hub.subscribe(token, channel)
    channel.send(notifications.connected(token).to_text())
    sender = asyncio.create_task(channel.run_sender())
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                logger.info("WebSocket closed for session %s", token)
                break
            _log_client_message(token, _frame_text(frame))
    finally:
        channel.close()
        sender.cancel()


def _frame_text(frame: Message) -> str:
    text = frame.get("text")
    if isinstance(text, str):
        return text
    data = frame.get("bytes")
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return ""


def _log_client_message(token: str, raw: str) -> None:
    try:
        message = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Error parsing WebSocket message for session %s", token)
        return
    logger.info("Received message from session %s: %s", token, message)
