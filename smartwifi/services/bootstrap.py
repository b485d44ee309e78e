"""
SmartWiFi Portal - Seed data

Run once at startup from the application lifespan.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smartwifi.core.security import get_password_hash
from smartwifi.models.user import Role, User

logger = logging.getLogger(__name__)


async def ensure_admin(db: AsyncSession, username: str, password: str) -> bool:
    """
    Create the default administrator if no account has that name.

    Returns True when an account was created.
    """
    existing = await db.scalar(select(User).where(User.username == username))
    if existing is not None:
        logger.info(f"Admin account {username!r} already exists")
        return False

    db.add(User(
        username=username,
        hashed_password=get_password_hash(password),
        role=Role.ADMIN.value,
    ))
    try:
        await db.commit()
    except IntegrityError:
        # another worker seeded it first
        await db.rollback()
        return False

    logger.info(f"Created default admin account {username!r}")
    return True
