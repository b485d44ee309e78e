"""
SmartWiFi Portal - Card design service

Templates are stored verbatim; rendering happens on the client.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartwifi.models.cafe import Cafe
from smartwifi.models.design import Design
from smartwifi.schemas.design import AddDesignRequest, DesignDoc

logger = logging.getLogger(__name__)


def design_to_doc(design: Design) -> DesignDoc:
    return DesignDoc(
        id=design.id,
        cafe_id=design.cafe_id,
        cafe_name=design.cafe_name,
        name=design.name,
        template=design.template,
        created_at=design.created_at,
    )


class DesignService:

    @staticmethod
    async def add_design(db: AsyncSession, request: AddDesignRequest) -> str:
        """Store a template; the cafe name is copied in when the cafe exists."""
        cafe_name = await db.scalar(select(Cafe.name).where(Cafe.id == request.cafe_id))
        design = Design(
            cafe_id=request.cafe_id,
            cafe_name=cafe_name,
            name=request.name,
            template=request.template,
        )
        db.add(design)
        await db.commit()
        logger.info(f"Design created: {design.id} ({design.name})")
        return design.id

    @staticmethod
    async def list_designs(db: AsyncSession) -> List[DesignDoc]:
        result = await db.scalars(select(Design).order_by(Design.created_at.desc()))
        return [design_to_doc(design) for design in result.all()]

    @staticmethod
    async def get_design(db: AsyncSession, design_id: str) -> Optional[DesignDoc]:
        design = await db.scalar(select(Design).where(Design.id == design_id))
        return design_to_doc(design) if design else None
