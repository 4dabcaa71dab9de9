# receipt_admin/notify.py
"""Capabilities the views need from their host: toasts and file downloads."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class Downloader(Protocol):
    def save(self, content: bytes, filename: str) -> None: ...


class ConsoleNotifier:
    """Writes user-facing messages to a stream (stderr by default)."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stderr

    def success(self, message: str) -> None:
        print(f"✅ {message}", file=self.stream)

    def error(self, message: str) -> None:
        print(f"❌ {message}", file=self.stream)


class DirectoryDownloader:
    def __init__(self, directory: str | Path = "."):
        self.directory = Path(directory)
        self.last_path: Path | None = None

    def save(self, content: bytes, filename: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        path.write_bytes(content)
        self.last_path = path
        logger.info("Saved %d bytes to %s", len(content), path)
