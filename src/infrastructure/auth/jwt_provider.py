"""JWT authentication provider implementation.

Tokens are HS256-signed with a shared secret by the identity service. Older
clients put the user id under ``userId`` or ``id`` instead of ``sub``:

    {
        "sub": "user-uuid",          # or "userId" / "id"
        "email": "user@example.com",
        "name": "Jane",
        "role": "admin",             # or "isAdmin": true
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import structlog
from jose import ExpiredSignatureError, JWTError, jwt

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

USER_ID_CLAIMS = ("sub", "userId", "id")


def extract_user_id(payload: dict[str, Any]) -> Optional[UUID]:
    """Read the user id from the first present id claim.

    Returns None when no id claim is present or the value is not a UUID.
    """
    for claim in USER_ID_CLAIMS:
        value = payload.get(claim)
        if value in (None, ""):
            continue
        try:
            return UUID(str(value))
        except ValueError:
            return None
    return None


def is_admin_claim(payload: dict[str, Any]) -> bool:
    """Whether the token grants administrative capability."""
    return payload.get("role") == "admin" or bool(payload.get("isAdmin"))


class JWTAuthProvider:
    """JWT-based authentication provider (HS256 shared secret)."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and normalize its claims.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid

        Raises:
            AuthenticationError: If the token signature is valid but expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except ExpiredSignatureError:
            raise AuthenticationError(
                message="Token has expired",
                error_code=ErrorCode.TOKEN_EXPIRED,
            ) from None
        except JWTError:
            return None

        user_id = extract_user_id(payload)
        if not user_id:
            logger.info("token_missing_user_id", claims=sorted(payload))
            return None

        user_metadata = payload.get("user_metadata") or {}
        display_name = (
            payload.get("name")
            or user_metadata.get("display_name")
            or user_metadata.get("name")
        )

        return TokenUser(
            id=user_id,
            email=payload.get("email") or None,
            display_name=display_name,
            role=payload.get("role"),
            is_admin=is_admin_claim(payload),
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create a JWT token for a user (used by tests and local tooling).

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "exp": expire,
        }
        if user.email:
            payload["email"] = user.email
        if user.display_name:
            payload["name"] = user.display_name
        if user.is_admin:
            payload["role"] = "admin"
        elif user.role:
            payload["role"] = user.role

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
