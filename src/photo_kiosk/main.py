"""Process entrypoint for running the kiosk API with uvicorn."""

import uvicorn

from photo_kiosk.config import Settings


def main() -> None:
    """Serve the ASGI app on the configured host and port."""
    settings = Settings()
    uvicorn.run("photo_kiosk.api.asgi:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
