"""
SmartWiFi Portal - Action endpoint

A single ``POST /api/egsmart`` endpoint carries ``{"action": ..., "data": ...}``.
Each action is declared once in ``ACTIONS`` with its payload schema, whether it
needs a session, and which roles may run it. The payload is validated before
the owning service is called, so services only ever see typed input.
"""
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Optional, Type

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from smartwifi.database import get_async_db
from smartwifi.dependencies import get_current_session, require_role
from smartwifi.core.errors import DomainError, UnknownActionError, ValidationError
from smartwifi.models.user import ALL_ROLES
from smartwifi.schemas.response import (
    IdRequest,
    InsertedResponse,
    OkResponse,
    error_response,
)
from smartwifi.schemas.auth import LoginRequest, LoginResponse, MeResponse, SessionClaims
from smartwifi.schemas.cafe import AddCafeRequest, InstallCafeResponse, ToggleCafeRequest
from smartwifi.schemas.plan import AddPlanRequest
from smartwifi.schemas.card import GenerateCardsRequest, SearchCardsRequest
from smartwifi.schemas.design import AddDesignRequest
from smartwifi.services import (
    AuthService,
    CafeService,
    DesignService,
    InstallTokenService,
    PlanService,
    VoucherService,
)

logger = logging.getLogger(__name__)

router = APIRouter()

Handler = Callable[[AsyncSession, Any, Optional[SessionClaims]], Awaitable[Any]]


class ActionEnvelope(BaseModel):
    """Request body"""
    action: Optional[str] = None
    data: Any = None


@dataclass(frozen=True)
class ActionSpec:
    handler: Handler
    schema: Optional[Type[BaseModel]] = None
    public: bool = False
    roles: FrozenSet[str] = ALL_ROLES


# ==================== Handlers ====================

async def _login(db: AsyncSession, payload: LoginRequest, _claims) -> dict:
    token, claims = await AuthService.login(db, payload.username, payload.password)
    expires_in = int((claims.expires_at - claims.issued_at).total_seconds())
    return LoginResponse(token=token, expires_in=expires_in).model_dump(by_alias=True)


async def _me(db: AsyncSession, _payload, claims: SessionClaims) -> dict:
    return MeResponse(user=claims.username, role=claims.role).model_dump(mode="json")


async def _get_cafes(db: AsyncSession, _payload, _claims) -> list:
    return [cafe.to_wire() for cafe in await CafeService.list_cafes(db)]


async def _add_cafe(db: AsyncSession, payload: AddCafeRequest, _claims) -> dict:
    cafe_id = await CafeService.add_cafe(db, payload)
    return InsertedResponse(inserted_id=cafe_id).model_dump(by_alias=True)


async def _toggle_cafe(db: AsyncSession, payload: ToggleCafeRequest, _claims) -> dict:
    await CafeService.toggle_cafe(db, payload.id, payload.status)
    return OkResponse().model_dump()


async def _install_cafe(db: AsyncSession, payload: IdRequest, _claims) -> dict:
    token = await InstallTokenService.get_or_create_token(db, payload.id)
    return InstallCafeResponse(token=token).model_dump()


async def _get_plans(db: AsyncSession, _payload, _claims) -> list:
    return [plan.to_wire() for plan in await PlanService.list_plans(db)]


async def _add_plan(db: AsyncSession, payload: AddPlanRequest, _claims) -> dict:
    plan_id = await PlanService.add_plan(db, payload)
    return InsertedResponse(inserted_id=plan_id).model_dump(by_alias=True)


async def _delete_plan(db: AsyncSession, payload: IdRequest, _claims) -> dict:
    await PlanService.delete_plan(db, payload.id)
    return OkResponse().model_dump()


async def _generate_cards(db: AsyncSession, payload: GenerateCardsRequest, claims: SessionClaims) -> dict:
    result = await VoucherService.issue(
        db,
        cafe_id=payload.cafe_id,
        plan_id=payload.plan_id,
        count=payload.count,
        length=payload.length,
        prefix=payload.prefix,
    )
    logger.info(f"{claims.username} issued {len(result.inserted)} cards for cafe {payload.cafe_id}")
    return result.model_dump(mode="json", by_alias=True)


async def _search_cards(db: AsyncSession, payload: SearchCardsRequest, _claims) -> list:
    cards = await VoucherService.search(
        db, cafe_id=payload.cafe_id, code=payload.code, limit=payload.limit,
    )
    return [card.to_wire() for card in cards]


async def _add_design(db: AsyncSession, payload: AddDesignRequest, _claims) -> dict:
    design_id = await DesignService.add_design(db, payload)
    return InsertedResponse(inserted_id=design_id).model_dump(by_alias=True)


async def _get_designs(db: AsyncSession, _payload, _claims) -> list:
    return [design.to_wire() for design in await DesignService.list_designs(db)]


async def _get_design(db: AsyncSession, payload: IdRequest, _claims) -> Optional[dict]:
    design = await DesignService.get_design(db, payload.id)
    return design.to_wire() if design else None


ACTIONS: Dict[str, ActionSpec] = {
    "login": ActionSpec(_login, LoginRequest, public=True),
    "me": ActionSpec(_me),
    # cafes
    "getCafes": ActionSpec(_get_cafes),
    "addCafe": ActionSpec(_add_cafe, AddCafeRequest),
    "toggleCafe": ActionSpec(_toggle_cafe, ToggleCafeRequest),
    "installCafe": ActionSpec(_install_cafe, IdRequest),
    # plans
    "getPlans": ActionSpec(_get_plans),
    "addPlan": ActionSpec(_add_plan, AddPlanRequest),
    "deletePlan": ActionSpec(_delete_plan, IdRequest),
    # cards
    "generateCards": ActionSpec(_generate_cards, GenerateCardsRequest),
    "searchCards": ActionSpec(_search_cards, SearchCardsRequest),
    # designs
    "addDesign": ActionSpec(_add_design, AddDesignRequest),
    "getDesigns": ActionSpec(_get_designs),
    "getDesign": ActionSpec(_get_design, IdRequest),
}


# ==================== Dispatch ====================

async def _read_envelope(request: Request) -> ActionEnvelope:
    """Parse the body; anything unreadable counts as an empty envelope."""
    try:
        body = await request.json()
    except ValueError:
        return ActionEnvelope()
    if not isinstance(body, dict):
        return ActionEnvelope()
    try:
        return ActionEnvelope.model_validate(body)
    except PydanticValidationError:
        return ActionEnvelope()


def _validate_payload(schema: Optional[Type[BaseModel]], data: Any) -> Optional[BaseModel]:
    if schema is None:
        return None
    try:
        return schema.model_validate(data if data is not None else {})
    except PydanticValidationError as e:
        raise ValidationError(f"{e.error_count()} invalid field(s)") from e


@router.post("/egsmart")
async def dispatch(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
):
    """
    Run one action

    Domain failures come back as ``{"error": code}`` with HTTP 200; auth
    failures are raised and answered with 401/403 by the app's handlers.
    """
    envelope = await _read_envelope(request)
    spec = ACTIONS.get(envelope.action) if envelope.action else None

    claims: Optional[SessionClaims] = None
    if spec is None or not spec.public:
        claims = await get_current_session(request)
        if spec is not None:
            require_role(claims, spec.roles)

    try:
        if spec is None:
            raise UnknownActionError(f"unknown action {envelope.action!r}")
        payload = _validate_payload(spec.schema, envelope.data)
        return await spec.handler(db, payload, claims)
    except DomainError as e:
        logger.info(f"Action {envelope.action!r} failed: {e.code} ({e.message})")
        return error_response(e.code)

