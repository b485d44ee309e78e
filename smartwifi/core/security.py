"""
SmartWiFi Portal - Security

JWT signing/verification and password hashing
"""
from datetime import datetime, timedelta
import logging
from typing import Optional, Dict, Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from smartwifi.config import settings

logger = logging.getLogger(__name__)


# bcrypt, cost taken from settings so tests can run cheap
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Salted bcrypt hash of a password."""
    return pwd_context.hash(password)


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
) -> str:
    """
    Create a signed JWT access token

    Args:
        data: token claims, should contain sub (user id), username, role
        expires_delta: lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES
        secret_key: signing key, defaults to SECRET_KEY

    Returns:
        encoded JWT
    """
    to_encode = data.copy()
    now = datetime.utcnow()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = now + expires_delta

    to_encode.update({
        "exp": expire,
        "iat": now,
    })

    logger.debug(
        "[AUTH] issuing token: sub=%s, username=%s, role=%s, exp=%s",
        to_encode.get("sub"),
        to_encode.get("username"),
        to_encode.get("role"),
        expire,
    )

    return jwt.encode(
        to_encode,
        secret_key or settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT access token

    Raises:
        JWTError: bad signature, expired or malformed token
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except JWTError as e:
        logger.debug(f"[AUTH] token rejected: {type(e).__name__}: {e}")
        raise
