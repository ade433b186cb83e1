"""Filesystem implementations for infrastructure.

Usage example:
    from pathlib import Path

    from place_confidence.infrastructure.filesystem import LocalFileSystem

    fs = LocalFileSystem()
    payload = fs.read_text(Path("data/reference/category_profiles.json"))
"""

from __future__ import annotations

from pathlib import Path

from ..protocols import FileSystem


class LocalFileSystem(FileSystem):
    """Local filesystem implementation."""

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def exists(self, path: Path) -> bool:
        return path.exists()
