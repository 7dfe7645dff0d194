"""Shared fixtures for unit tests."""

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from core.exceptions import StorageError
from domain.entities.profile import SkillProfile


class FakeUnitOfWork:
    """Fake Unit of Work with all 4 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.service_requests = AsyncMock()
        self.exchanges = AsyncMock()
        self.users = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


class FakeBlobStorage:
    """In-memory blob storage that records every call.

    Set ``fail_store`` / ``fail_delete`` to make the next calls raise
    StorageError, or ``fail_delete_after`` to let that many deletes succeed
    before the rest fail.
    """

    def __init__(self) -> None:
        self.stored: dict[str, bytes] = {}
        self.staged_paths: list[Path] = []
        self.deleted: list[str] = []
        self.fail_store = False
        self.fail_delete = False
        self.fail_delete_after: int | None = None

    async def store(self, source: Path, key: str, content_type: str) -> str:
        self.staged_paths.append(source)
        if self.fail_store:
            raise StorageError("Asset storage is unavailable")
        self.stored[key] = source.read_bytes()
        return f"/uploads/{key}"

    async def delete(self, url: str) -> None:
        if self.fail_delete or (
            self.fail_delete_after is not None and len(self.deleted) >= self.fail_delete_after
        ):
            raise StorageError("Asset storage is unavailable")
        self.deleted.append(url)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def blob_storage() -> FakeBlobStorage:
    """Create a fresh FakeBlobStorage."""
    return FakeBlobStorage()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def other_user_id() -> UUID:
    """A random user ID (distinct from user_id)."""
    return uuid4()


def make_profile(owner_id: UUID | None = None, **overrides: Any) -> SkillProfile:
    """Build a valid profile, overriding any field."""
    fields: dict[str, Any] = {
        "owner_id": owner_id or uuid4(),
        "name": "Ada",
        "primary_skill": "Web Development",
        "description": "Full-stack developer",
        "looking_for": ["Graphic Design"],
    }
    fields.update(overrides)
    return SkillProfile(**fields)
