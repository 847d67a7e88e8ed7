"""Byte-oriented document stores backing the session log."""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path


class DocumentStore(ABC):
    """Whole-document read/create/write access to one log file."""

    @property
    def key(self) -> str:
        """Identity used to serialize writers of the same underlying document."""
        return f"{type(self).__name__}:{id(self)}"

    @abstractmethod
    def exists(self) -> bool:
        """Whether the document has been created."""

    @abstractmethod
    def read(self) -> bytes:
        """Return the full document. Raises FileNotFoundError if missing."""

    @abstractmethod
    def create(self, data: bytes) -> None:
        """Create the document with initial content."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Replace the whole document; a failed write leaves the old one intact."""


class FileDocumentStore(DocumentStore):
    """Document stored as a file on the local filesystem."""

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    @property
    def key(self) -> str:
        return str(self.path.resolve())

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> bytes:
        return self.path.read_bytes()

    def create(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.write(data)

    def write(self, data: bytes) -> None:
        # Write next to the target, then swap it in with an atomic rename.
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def __repr__(self) -> str:
        return f"FileDocumentStore({str(self.path)!r})"
