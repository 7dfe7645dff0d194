"""SQLAlchemy implementation of the user repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.user import User
from infrastructure.database.models import UserModel


class SQLAlchemyUserRepository:
    """Read-only access to synced user records."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            created_at=model.created_at,
        )
