"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from photo_kiosk.adapters.image_storage import LocalImageStorage
from photo_kiosk.config import Settings
from photo_kiosk.containers import AppContainer
from photo_kiosk.services.notifications import NotificationHub, PushChannel
from photo_kiosk.services.session_store import InMemorySessionStore
from photo_kiosk.services.sessions import KioskSessionService, PrintClient


@dataclass(eq=False)
class FakeChannel(PushChannel):
    """Push channel that records sent frames."""

    sent: list[str] = field(default_factory=list)
    open: bool = True
    close_callbacks: list[Callable[[], None]] = field(default_factory=list)
    error_callbacks: list[Callable[[BaseException], None]] = field(
        default_factory=list
    )

    @property
    def is_open(self) -> bool:
        return self.open

    def send(self, text: str) -> None:
        self.sent.append(text)

    def on_close(self, callback: Callable[[], None]) -> None:
        self.close_callbacks.append(callback)

    def on_error(self, callback: Callable[[BaseException], None]) -> None:
        self.error_callbacks.append(callback)

    def close(self) -> None:
        self.open = False
        for callback in self.close_callbacks:
            callback()

    def error(self, exc: BaseException) -> None:
        self.open = False
        for callback in self.error_callbacks:
            callback(exc)


@dataclass
class FakePrintClient(PrintClient):
    """Print client that records jobs and can be told to fail."""

    printed: list[str] = field(default_factory=list)
    error: Exception | None = None

    async def print_image(self, image_path: str) -> None:
        if self.error is not None:
            raise self.error
        self.printed.append(image_path)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        port=3000,
        public_base_url="http://kiosk.test",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def print_client() -> FakePrintClient:
    return FakePrintClient()


@pytest.fixture
def hub() -> NotificationHub:
    return NotificationHub()


@pytest.fixture
def session_service(
    hub: NotificationHub, print_client: FakePrintClient
) -> KioskSessionService:
    return KioskSessionService(
        store=InMemorySessionStore(),
        hub=hub,
        print_client=print_client,
        base_url="http://kiosk.test",
    )


@pytest.fixture
def container(
    settings: Settings,
    hub: NotificationHub,
    print_client: FakePrintClient,
    session_service: KioskSessionService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_store=session_service.store,
        notification_hub=hub,
        image_storage=LocalImageStorage(Path(settings.upload_dir)),
        print_client=print_client,
        session_service=session_service,
        close_resources=close_resources,
    )
