"""Filesystem blob storage, served by the app under a static URL prefix."""

import asyncio
import shutil
from pathlib import Path

import structlog

from core.exceptions import StorageError

logger = structlog.get_logger()


class LocalBlobStorage:
    """Stores assets below ``root_dir`` and exposes them at ``url_prefix``."""

    def __init__(self, root_dir: str | Path, url_prefix: str = "/uploads") -> None:
        self._root = Path(root_dir).resolve()
        self._url_prefix = url_prefix.rstrip("/")

    async def store(self, source: Path, key: str, content_type: str) -> str:
        """Copy ``source`` into the storage directory and return its URL."""
        target = self._path_for_key(key)
        try:
            await asyncio.to_thread(self._copy, source, target)
        except OSError as e:
            logger.error("blob_store_failed", key=key, error=str(e))
            raise StorageError("Failed to store asset", details={"key": key}) from e
        return f"{self._url_prefix}/{key}"

    async def delete(self, url: str) -> None:
        """Delete the file behind ``url``. A missing file is not an error."""
        prefix = f"{self._url_prefix}/"
        if not url.startswith(prefix):
            raise StorageError("Asset URL is not managed by this store", details={"url": url})

        target = self._path_for_key(url[len(prefix) :])
        try:
            await asyncio.to_thread(target.unlink)
        except FileNotFoundError:
            logger.warning("blob_already_missing", url=url)
        except OSError as e:
            logger.error("blob_delete_failed", url=url, error=str(e))
            raise StorageError("Failed to delete asset", details={"url": url}) from e

    def _path_for_key(self, key: str) -> Path:
        target = (self._root / key).resolve()
        if not target.is_relative_to(self._root):
            raise StorageError("Invalid asset key", details={"key": key})
        return target

    @staticmethod
    def _copy(source: Path, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
