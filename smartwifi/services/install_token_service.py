"""
SmartWiFi Portal - Installation token service

One long-lived token per cafe. Hotspot controllers embed it in their
configuration, so once stored it never changes.
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smartwifi.config import settings
from smartwifi.core.codegen import CODE_ALPHABET, generate
from smartwifi.core.errors import NotFoundError
from smartwifi.models.cafe import Cafe

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5


class InstallTokenService:
    """Assigns and memoizes cafe installation tokens"""

    @staticmethod
    async def _stored_token(db: AsyncSession, cafe_id: str):
        """(exists, token) read straight from the table, bypassing the identity map."""
        row = (await db.execute(
            select(Cafe.id, Cafe.install_token).where(Cafe.id == cafe_id)
        )).first()
        if row is None:
            return False, None
        return True, row.install_token

    @staticmethod
    async def get_or_create_token(db: AsyncSession, cafe_id: str) -> str:
        """
        Return the cafe's installation token, creating it on first use

        The write is a conditional ``UPDATE ... WHERE install_token IS NULL``,
        so concurrent callers race on the database and every one of them gets
        back the single stored value.

        Raises:
            NotFoundError: no such cafe, nothing written
        """
        for _ in range(MAX_ATTEMPTS):
            exists, token = await InstallTokenService._stored_token(db, cafe_id)
            if not exists:
                raise NotFoundError(f"cafe {cafe_id} not found")
            if token:
                await db.commit()
                return token

            candidate = generate(CODE_ALPHABET, settings.INSTALL_TOKEN_LENGTH)
            try:
                result = await db.execute(
                    update(Cafe)
                    .where(Cafe.id == cafe_id, Cafe.install_token.is_(None))
                    .values(install_token=candidate)
                    .execution_options(synchronize_session=False)
                )
                await db.commit()
            except IntegrityError:
                # token already used by another cafe
                await db.rollback()
                continue

            if result.rowcount == 1:
                logger.info(f"Install token assigned to cafe {cafe_id}")
            # lost the race or won it: either way the stored value is the answer

        exists, token = await InstallTokenService._stored_token(db, cafe_id)
        await db.commit()
        if not exists:
            raise NotFoundError(f"cafe {cafe_id} not found")
        if token is None:
            raise RuntimeError(f"could not assign an install token to cafe {cafe_id}")
        return token
