"""Print device adapters."""

import asyncio
import logging
import mimetypes
import shlex
from dataclasses import dataclass
from pathlib import Path

import httpx

from photo_kiosk.services.sessions import PrintClient

_logger = logging.getLogger(__name__)


class PrintError(RuntimeError):
    """Raised when a print device rejects or fails a job."""


@dataclass
class LoggingPrintClient(PrintClient):
    """Development print client that only logs the job."""

    async def print_image(self, image_path: str) -> None:
        """Log the print request and succeed."""
        _logger.info("Print requested for %s (logging backend)", image_path)


@dataclass
class CommandPrintClient(PrintClient):
    """Print client that shells out to a spooler command such as ``lp``."""

    command: str = "lp"

    async def print_image(self, image_path: str) -> None:
        """Run the print command with the image path as last argument."""
        args = [*shlex.split(self.command), image_path]
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await process.communicate()
        if process.returncode != 0:
            detail = stderr.decode(errors="replace").strip()
            raise PrintError(f"{args[0]} exited with {process.returncode}: {detail}")
        _logger.info("Print job spooled: %s", image_path)


@dataclass
class HttpxPrintClient(PrintClient):
    """Print client that forwards images to a print server over HTTP."""

    server_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, server_url: str) -> "HttpxPrintClient":
        """Create a print client with a managed httpx session."""
        return cls(server_url=server_url, http_client=httpx.AsyncClient())

    async def print_image(self, image_path: str) -> None:
        """Upload the image as multipart form data."""
        path = Path(image_path)
        content = await asyncio.to_thread(path.read_bytes)
        mime_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
        response = await self.http_client.post(
            self.server_url,
            files={"image": (path.name, content, mime_type)},
            timeout=30,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
