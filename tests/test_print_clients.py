"""Tests for print device adapters."""

import asyncio
import shlex
import sys

import httpx
import pytest

from photo_kiosk.adapters.print_clients import (
    CommandPrintClient,
    HttpxPrintClient,
    LoggingPrintClient,
    PrintError,
)


def _python_command(code: str) -> str:
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


def test_logging_print_client_succeeds() -> None:
    asyncio.run(LoggingPrintClient().print_image("/tmp/a.jpg"))


def test_command_print_client_passes_image_path(tmp_path) -> None:
    marker = tmp_path / "printed.txt"
    code = f"import sys, pathlib; pathlib.Path({str(marker)!r}).write_text(sys.argv[1])"
    client = CommandPrintClient(command=_python_command(code))

    asyncio.run(client.print_image("/tmp/a.jpg"))

    assert marker.read_text() == "/tmp/a.jpg"


def test_command_print_client_raises_on_failure() -> None:
    code = "import sys; sys.stderr.write('printer offline'); sys.exit(3)"
    client = CommandPrintClient(command=_python_command(code))

    with pytest.raises(PrintError, match="printer offline"):
        asyncio.run(client.print_image("/tmp/a.jpg"))


def test_httpx_print_client_uploads_image(tmp_path) -> None:
    image = tmp_path / "photo.png"
    image.write_bytes(b"\x89PNG\r\n\x1a\nfake")
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, json={"ok": True})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxPrintClient(
        server_url="http://printer.local/print", http_client=async_client
    )

    asyncio.run(client.print_image(str(image)))

    assert seen["url"] == "http://printer.local/print"
    body = seen["body"]
    assert isinstance(body, bytes)
    assert b'filename="photo.png"' in body
    assert b"image/png" in body


def test_httpx_print_client_raises_on_error_status(tmp_path) -> None:
    image = tmp_path / "photo.jpg"
    image.write_bytes(b"\xff\xd8\xfffake")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "busy"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxPrintClient(
        server_url="http://printer.local/print", http_client=async_client
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.print_image(str(image)))
