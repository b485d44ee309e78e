"""
SmartWiFi Portal - Plan service
"""
import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from smartwifi.core.errors import NotFoundError
from smartwifi.models.plan import Plan
from smartwifi.schemas.plan import AddPlanRequest, PlanDoc, PlanDuration

logger = logging.getLogger(__name__)


def plan_to_doc(plan: Plan) -> PlanDoc:
    return PlanDoc(
        id=plan.id,
        name=plan.name,
        price=plan.price,
        quota_mb=plan.quota_mb,
        upload_mbps=plan.upload_mbps,
        download_mbps=plan.download_mbps,
        duration=PlanDuration(value=plan.duration_value, unit=plan.duration_unit),
        created_at=plan.created_at,
    )


class PlanService:
    """Service plan catalogue"""

    @staticmethod
    async def list_plans(db: AsyncSession) -> List[PlanDoc]:
        result = await db.scalars(select(Plan).order_by(Plan.created_at.desc()))
        return [plan_to_doc(plan) for plan in result.all()]

    @staticmethod
    async def add_plan(db: AsyncSession, request: AddPlanRequest) -> str:
        plan = Plan(
            name=request.name,
            price=request.price,
            quota_mb=request.quota_mb,
            upload_mbps=request.upload_mbps,
            download_mbps=request.download_mbps,
            duration_value=request.duration.value,
            duration_unit=request.duration.unit.value,
        )
        db.add(plan)
        await db.commit()
        logger.info(f"Plan created: {plan.id} ({plan.name})")
        return plan.id

    @staticmethod
    async def delete_plan(db: AsyncSession, plan_id: str) -> None:
        """
        Remove a plan. Cards already issued for it keep their reference.

        Raises:
            NotFoundError: no such plan
        """
        result = await db.execute(delete(Plan).where(Plan.id == plan_id))
        await db.commit()
        if result.rowcount == 0:
            raise NotFoundError(f"plan {plan_id} not found")
        logger.info(f"Plan deleted: {plan_id}")
