"""
Base repository class for file-backed persistence.

Provides a common abstraction layer for repositories that keep their whole
state in a single JSON document. The storage backend is injected so tests can
substitute an in-memory document without touching the filesystem.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Generic, Optional, Protocol, TypeVar, runtime_checkable


T = TypeVar("T")


@runtime_checkable
class DocumentStorage(Protocol):
    """Reads and writes a single JSON document."""

    def read(self) -> Optional[dict[str, Any]]:
        """
        Return the stored document, or None if nothing has been stored yet.

        Raises:
            OSError, ValueError: If the document exists but cannot be read or parsed
        """
        ...

    def write(self, document: dict[str, Any]) -> None:
        """Replace the stored document."""
        ...


class JsonFileStorage:
    """
    Document storage backed by a JSON file on disk.

    Writes go to a temporary file in the same directory which is then renamed
    over the target, so a crash never leaves a half-written document behind.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Optional[dict[str, Any]]:
        if not self._path.exists():
            return None
        with self._path.open("r", encoding="utf-8") as fh:
            document = json.load(fh)
        if not isinstance(document, dict):
            raise ValueError(f"Expected a JSON object in {self._path}")
        return document

    def write(self, document: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for document persistence:
    - Storage access via self._storage
    - Generic type parameter for model type hints

    Subclasses own their in-memory index and handle dict-to-Pydantic model
    mapping internally. Every mutation rewrites the whole document.

    Example:
        class AccountRepository(BaseRepository[Account]):
            def save(self) -> None:
                self._storage.write({"users": [...]})
    """

    def __init__(self, storage: DocumentStorage) -> None:
        """
        Initialize the repository with a document storage.

        Args:
            storage: Storage backend holding the repository's JSON document.
        """
        self._storage = storage
