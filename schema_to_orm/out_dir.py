"""
Output directory wrapper.

Files are buffered in memory and flushed to disk in one write.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).parent.resolve() / "resources"


class OutputFile:
    """Buffered content of one generated file."""

    def __init__(self, path: Path):
        self.path = path
        self._chunks: list[str] = []
        self.written = False

    def line(self, text: str = "") -> None:
        self._chunks.append(text + "\n")

    def append(self, text: str) -> None:
        self._chunks.append(text)

    def prepend(self, text: str) -> None:
        self._chunks.insert(0, text)

    @property
    def content(self) -> str:
        return "".join(self._chunks)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(self.content)
        self.written = True
        logger.debug("Wrote %s", self.path)


class OutDir:
    """Root directory of the generated package."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def delete(self) -> None:
        """Destroy the directory and everything below it, then recreate it."""
        if self.path.exists():
            logger.debug("Removing %s", self.path)
            shutil.rmtree(self.path)
        self.path.mkdir(parents=True)

    def file(self, name: str) -> OutputFile:
        return OutputFile(self.path / name)

    def add_resource(self, name: str) -> None:
        """Copy a static support module into the directory."""
        target = self.path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(RESOURCES_DIR / name, target)
        logger.debug("Copied resource %s", name)
