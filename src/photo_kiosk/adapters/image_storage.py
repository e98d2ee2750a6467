"""Local disk storage for uploaded images."""

import secrets
import time
from dataclasses import dataclass
from pathlib import Path

DEFAULT_EXTENSION = ".jpg"


@dataclass
class LocalImageStorage:
    """Stores uploaded images under a single directory."""

    upload_dir: Path

    def ensure_directory(self) -> None:
        """Create the upload directory if it does not exist."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def save(self, original_filename: str | None, content: bytes) -> str:
        """Write image bytes under a unique name and return the path."""
        self.ensure_directory()
        path = self.upload_dir / _unique_filename(original_filename)
        path.write_bytes(content)
        return str(path)

    def delete(self, image_path: str) -> None:
        """Remove a stored image; missing files are ignored."""
        Path(image_path).unlink(missing_ok=True)


def _unique_filename(original_filename: str | None) -> str:
    """Build ``<millis>-<random><ext>`` keeping the original extension."""
    extension = Path(original_filename or "").suffix or DEFAULT_EXTENSION
    millis = int(time.time() * 1000)
    return f"{millis}-{secrets.randbelow(10**9)}{extension}"
