"""Session endpoints used by the kiosk and mobile clients."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse

from photo_kiosk.domain.errors import (
    InvalidTransitionError,
    KioskError,
    NoImageToPrintError,
    SessionNotFoundError,
)

if TYPE_CHECKING:
    from photo_kiosk.containers import AppContainer

router = APIRouter(prefix="/session", tags=["sessions"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(request: Request) -> dict[str, str]:
    """Create a session and return the kiosk and mobile links."""
    service = _container(request).session_service
    session = service.create_session()
    return {
        "token": session.token,
        "status": session.status.value,
        "kioskUrl": service.kiosk_url(session.token),
        "mobileUrl": service.mobile_url(session.token),
    }


@router.post("/{token}/image")
async def upload_image(
    token: str, request: Request, image: UploadFile | None = File(default=None)
) -> dict[str, str]:
    """Store an uploaded photo and notify the kiosk."""
    container = _container(request)
    container.session_service.get_session(token)
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No image file uploaded"
        )
    image_path = await _store_upload(container, image)
    previous_path = container.session_service.get_image_path(token)
    try:
        session = container.session_service.upload_image(token, image_path)
    except KioskError:
        await asyncio.to_thread(container.image_storage.delete, image_path)
        raise
    await _discard_replaced(container, token, previous_path)
    return {"message": "Image uploaded successfully", "status": session.status.value}


@router.get("/{token}/status")
async def get_status(token: str, request: Request) -> dict[str, str]:
    """Return the current session status."""
    session = _container(request).session_service.get_session(token)
    return {"token": session.token, "status": session.status.value}


@router.get("/{token}/image")
async def get_image(token: str, request: Request) -> FileResponse:
    """Serve the stored session image."""
    service = _container(request).session_service
    try:
        image_path = service.get_image_path(token)
    except SessionNotFoundError:
        image_path = None
    if image_path is None or not Path(image_path).is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Image not found for this session",
        )
    return FileResponse(Path(image_path).resolve())


@router.post("/{token}/print")
async def print_session(
    token: str, request: Request, image: UploadFile | None = File(default=None)
) -> dict[str, str]:
    """Print the stored image, or one sent with this request."""
    container = _container(request)
    container.session_service.get_session(token)
    upload_path = None
    if image is not None:
        upload_path = await _store_upload(container, image)
    previous_path = container.session_service.get_image_path(token)
    try:
        session = await container.session_service.print_session(token, upload_path)
    except (InvalidTransitionError, NoImageToPrintError, SessionNotFoundError):
        if upload_path is not None:
            await asyncio.to_thread(container.image_storage.delete, upload_path)
        raise
    finally:
        await _discard_replaced(container, token, previous_path)
    return {"message": "Print job submitted", "status": session.status.value}


async def _store_upload(container: AppContainer, image: UploadFile) -> str:
    content = await image.read()
    return await asyncio.to_thread(
        container.image_storage.save, image.filename, content
    )


async def _discard_replaced(
    container: AppContainer, token: str, previous_path: str | None
) -> None:
    """Delete an image file the session no longer points at."""
    if previous_path is None:
        return
    if container.session_service.get_image_path(token) != previous_path:
        await asyncio.to_thread(container.image_storage.delete, previous_path)
