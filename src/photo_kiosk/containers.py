"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from photo_kiosk.adapters.image_storage import LocalImageStorage
from photo_kiosk.adapters.print_clients import (
    CommandPrintClient,
    HttpxPrintClient,
    LoggingPrintClient,
)
from photo_kiosk.config import Settings
from photo_kiosk.services.notifications import NotificationHub
from photo_kiosk.services.session_store import InMemorySessionStore, SessionStore
from photo_kiosk.services.sessions import KioskSessionService, PrintClient


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_store: SessionStore
    notification_hub: NotificationHub
    image_storage: LocalImageStorage
    print_client: PrintClient
    session_service: KioskSessionService
    close_resources: Callable[[], Awaitable[None]]


def build_print_client(settings: Settings) -> PrintClient:
    """Select the print backend named in settings."""
    backend = settings.print_backend.strip().lower()
    if backend == "log":
        return LoggingPrintClient()
    if backend == "command":
        return CommandPrintClient(command=settings.print_command)
    if backend == "http":
        if not settings.print_server_url:
            raise ValueError("print_server_url is required for the http print backend")
        return HttpxPrintClient.create(settings.print_server_url)
    raise ValueError(f"Unknown print backend: {settings.print_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    session_store = InMemorySessionStore()
    notification_hub = NotificationHub()
    image_storage = LocalImageStorage(Path(resolved_settings.upload_dir))
    print_client = build_print_client(resolved_settings)
    session_service = KioskSessionService(
        store=session_store,
        hub=notification_hub,
        print_client=print_client,
        base_url=resolved_settings.base_url,
        print_timeout_seconds=resolved_settings.print_timeout_seconds,
    )

    async def close_resources() -> None:
        if isinstance(print_client, HttpxPrintClient):
            await print_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_store=session_store,
        notification_hub=notification_hub,
        image_storage=image_storage,
        print_client=print_client,
        session_service=session_service,
        close_resources=close_resources,
    )
