# main.py
"""Run the catalog API with production server settings."""

from sys import platform

from uvicorn import run

from catalog.configs import settings
from catalog.main import app

WORKERS = 4


def main() -> None:
    run(
        "catalog.main:app",
        host="127.0.0.1",
        port=8000,
        log_level="debug" if settings.DEBUG else "info",
        workers=1 if settings.DEBUG else WORKERS,
        reload=settings.DEBUG,
        loop="asyncio" if platform == "win32" else "uvloop",
        http="httptools",
    )


__all__ = ["app"]

if __name__ == "__main__":
    main()
