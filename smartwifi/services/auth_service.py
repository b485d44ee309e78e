"""
SmartWiFi Portal - Authentication service

Password login and stateless session verification
"""
import logging
from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from jose import JWTError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartwifi.config import settings
from smartwifi.core.errors import InvalidCredentialsError
from smartwifi.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from smartwifi.models.user import User
from smartwifi.schemas.auth import SessionClaims

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # verified when the user does not exist, so both failure paths cost one bcrypt check
    return get_password_hash("smartwifi-dummy-password")


def _claims_from_payload(payload: Dict[str, Any]) -> SessionClaims:
    return SessionClaims(
        subject_id=payload["sub"],
        username=payload["username"],
        role=payload["role"],
        issued_at=datetime.utcfromtimestamp(payload["iat"]),
        expires_at=datetime.utcfromtimestamp(payload["exp"]),
    )


class AuthService:
    """Issues and verifies session tokens."""

    @staticmethod
    async def login(
        db: AsyncSession,
        username: str,
        password: str,
    ) -> Tuple[str, SessionClaims]:
        """
        Check credentials and issue a session token

        Args:
            db: database session
            username: account name
            password: plain password

        Returns:
            (token, claims)

        Raises:
            InvalidCredentialsError: unknown user or wrong password, never
                telling which
        """
        user = await db.scalar(select(User).where(User.username == username))

        if user is None:
            verify_password(password, _dummy_hash())
            logger.info(f"Login failed for {username!r}")
            raise InvalidCredentialsError()

        if not verify_password(password, user.hashed_password):
            logger.info(f"Login failed for {username!r}")
            raise InvalidCredentialsError()

        token = create_access_token(
            data={
                "sub": user.id,
                "username": user.username,
                "role": user.role,
            }
        )
        logger.info(f"Login succeeded for {username!r} (role={user.role})")
        return token, _claims_from_payload(decode_access_token(token))

    @staticmethod
    def verify(token: Optional[str]) -> Optional[SessionClaims]:
        """
        Validate a session token

        Returns None for anything that is not a well-formed, correctly signed,
        unexpired token with known claims.
        """
        if not token:
            return None
        try:
            return _claims_from_payload(decode_access_token(token))
        except (JWTError, KeyError, TypeError, ValueError, OverflowError, PydanticValidationError):
            return None
