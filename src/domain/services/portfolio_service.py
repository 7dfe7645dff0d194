"""Portfolio service: uploaded assets attached to a skill profile."""

import asyncio
import os
import tempfile
from collections.abc import Callable
from pathlib import Path, PurePath
from uuid import UUID, uuid4

import structlog

from core.exceptions import (
    ForbiddenError,
    PortfolioItemNotFoundError,
    ProfileNotFoundError,
    ValidationError,
)
from domain.entities.profile import PortfolioItem, PortfolioItemType, SkillProfile
from domain.repositories.blob_storage import IBlobStorage
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

MAX_PORTFOLIO_FILE_SIZE = 5 * 1024 * 1024  # 5 MiB

ALLOWED_EXTENSIONS: dict[str, PortfolioItemType] = {
    ".jpeg": PortfolioItemType.IMAGE,
    ".jpg": PortfolioItemType.IMAGE,
    ".png": PortfolioItemType.IMAGE,
    ".gif": PortfolioItemType.IMAGE,
    ".pdf": PortfolioItemType.PDF,
    ".doc": PortfolioItemType.DOCUMENT,
    ".docx": PortfolioItemType.DOCUMENT,
}

ALLOWED_CONTENT_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


class PortfolioService:
    """Service layer for portfolio uploads and removals.

    Ordering rules: an asset is persisted before its record is appended, and
    deleted before its record is removed. A failed delete keeps the record.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        blob_storage: IBlobStorage,
        tmp_dir: str | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._blob_storage = blob_storage
        self._tmp_dir = tmp_dir

    async def upload_portfolio_item(
        self,
        profile_id: UUID,
        requester_id: UUID,
        data: bytes,
        filename: str,
        content_type: str | None,
        title: str | None = None,
        is_admin: bool = False,
    ) -> PortfolioItem:
        """Persist an uploaded file and attach it to the profile's portfolio.

        Args:
            profile_id: The profile to attach the item to.
            requester_id: The uploading user (must own the profile).
            data: Raw file bytes.
            filename: Original client filename; its extension picks the type.
            content_type: MIME type declared by the client.
            title: Display title; defaults to the original filename.
            is_admin: Whether the requester has administrative capability.

        Returns:
            The new PortfolioItem.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            ForbiddenError: If the requester does not own the profile.
            ValidationError: If the file type or size is not accepted.
            StorageError: If the blob store rejects the asset.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id, for_update=True)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            self._require_owner(profile, requester_id, is_admin)

            original_name = PurePath(filename or "").name
            extension, item_type = self._validate_file(data, original_name, content_type)

            staged = await asyncio.to_thread(self._stage, data, extension)
            try:
                key = f"portfolio/{profile.id}/{uuid4().hex}{extension}"
                url = await self._blob_storage.store(staged, key, content_type or "")
            finally:
                await self._discard(staged)

            item = PortfolioItem(
                url=url,
                title=title.strip() if title and title.strip() else original_name,
                type=item_type,
            )
            profile.add_portfolio_item(item)
            await uow.profiles.update(profile)
            await uow.commit()

            logger.info(
                "portfolio_item_uploaded",
                profile_id=str(profile.id),
                item_id=str(item.id),
                size_bytes=len(data),
                type=item.type.value,
            )
            return item

    async def delete_portfolio_item(
        self,
        profile_id: UUID,
        item_id: UUID,
        requester_id: UUID,
        is_admin: bool = False,
    ) -> None:
        """Delete the item's asset, then remove the item from the profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id, for_update=True)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            item = profile.find_portfolio_item(item_id)
            if not item:
                raise PortfolioItemNotFoundError(str(item_id))
            self._require_owner(profile, requester_id, is_admin)

            await self._blob_storage.delete(item.url)

            profile.remove_portfolio_item(item_id)
            await uow.profiles.update(profile)
            await uow.commit()

    @staticmethod
    def _require_owner(profile: SkillProfile, requester_id: UUID, is_admin: bool) -> None:
        if profile.owner_id != requester_id and not is_admin:
            raise ForbiddenError("Not authorized to modify this portfolio")

    @staticmethod
    def _validate_file(
        data: bytes, filename: str, content_type: str | None
    ) -> tuple[str, PortfolioItemType]:
        extension = PurePath(filename).suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                "Only image, PDF, and document files are allowed",
                details={"filename": filename, "allowed_extensions": sorted(ALLOWED_EXTENSIONS)},
            )

        mime = (content_type or "").split(";")[0].strip().lower()
        if mime not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(
                "Only image, PDF, and document files are allowed",
                details={"content_type": content_type},
            )

        if not data:
            raise ValidationError("Uploaded file is empty")
        if len(data) > MAX_PORTFOLIO_FILE_SIZE:
            raise ValidationError(
                "File exceeds the 5 MB upload limit",
                details={"size_bytes": len(data), "max_bytes": MAX_PORTFOLIO_FILE_SIZE},
            )

        return extension, ALLOWED_EXTENSIONS[extension]

    def _stage(self, data: bytes, suffix: str) -> Path:
        """Write the upload to a local temporary file."""
        fd, name = tempfile.mkstemp(suffix=suffix, dir=self._tmp_dir)
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
        except BaseException:
            path.unlink(missing_ok=True)
            raise
        return path

    async def _discard(self, path: Path) -> None:
        """Remove a staged file. Failure is logged, never raised."""
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError:
            logger.warning("upload_tmp_cleanup_failed", path=str(path), exc_info=True)
