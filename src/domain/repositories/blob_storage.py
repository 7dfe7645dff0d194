"""Blob storage protocol for portfolio assets."""

from pathlib import Path
from typing import Protocol


class IBlobStorage(Protocol):
    """Stores and deletes binary assets. Failures raise StorageError."""

    async def store(self, source: Path, key: str, content_type: str) -> str:
        """Persist the file at ``source`` under ``key`` and return its public URL."""
        ...

    async def delete(self, url: str) -> None:
        """Delete the asset previously returned by ``store``."""
        ...
