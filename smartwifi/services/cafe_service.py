"""
SmartWiFi Portal - Cafe service
"""
import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from smartwifi.core.errors import NotFoundError
from smartwifi.models.cafe import Cafe, CafeStatus
from smartwifi.schemas.cafe import AddCafeRequest, CafeDoc

logger = logging.getLogger(__name__)


def cafe_to_doc(cafe: Cafe) -> CafeDoc:
    return CafeDoc(
        id=cafe.id,
        name=cafe.name,
        address=cafe.address,
        owner=cafe.owner,
        phone=cafe.phone,
        landline=cafe.landline,
        status=cafe.status,
        install_token=cafe.install_token,
        created_at=cafe.created_at,
    )


class CafeService:
    """Cafe registration and status"""

    @staticmethod
    async def list_cafes(db: AsyncSession) -> List[CafeDoc]:
        result = await db.scalars(select(Cafe).order_by(Cafe.created_at.desc()))
        return [cafe_to_doc(cafe) for cafe in result.all()]

    @staticmethod
    async def add_cafe(db: AsyncSession, request: AddCafeRequest) -> str:
        """Register a cafe, active by default. Returns the new id."""
        cafe = Cafe(
            name=request.name,
            address=request.address,
            owner=request.owner,
            phone=request.phone,
            landline=request.landline,
            status=CafeStatus.ACTIVE.value,
        )
        db.add(cafe)
        await db.commit()
        logger.info(f"Cafe created: {cafe.id} ({cafe.name})")
        return cafe.id

    @staticmethod
    async def toggle_cafe(db: AsyncSession, cafe_id: str, status: CafeStatus) -> None:
        """
        Set a cafe's status

        Raises:
            NotFoundError: no such cafe
        """
        result = await db.execute(
            update(Cafe)
            .where(Cafe.id == cafe_id)
            .values(status=CafeStatus(status).value)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        if result.rowcount == 0:
            raise NotFoundError(f"cafe {cafe_id} not found")
        logger.info(f"Cafe {cafe_id} is now {CafeStatus(status).value}")
