"""Filesystem fakes for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing_extensions import override

from place_confidence.protocols import FileSystem
from tests.support.errors import FakeFileNotFoundError


def _empty_files() -> dict[str, str]:
    return {}


@dataclass
class InMemoryFileSystem(FileSystem):
    """In-memory filesystem for testing, seeded with ``{path: text}``."""

    files: dict[str, str] = field(default_factory=_empty_files)

    @override
    def read_text(self, path: Path) -> str:
        key = str(path)
        if key not in self.files:
            raise FakeFileNotFoundError(str(path))
        return self.files[key]

    @override
    def exists(self, path: Path) -> bool:
        return str(path) in self.files
