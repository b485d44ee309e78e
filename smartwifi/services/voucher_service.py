"""
SmartWiFi Portal - Voucher issuance service

Builds batches of cards whose codes are unique across the whole card table.
Candidates are checked against stored codes before insert; the unique
constraint on ``cards.code`` catches anything a concurrent batch slipped in
between the check and the insert, in which case the batch is re-checked and
retried.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Set

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smartwifi.config import settings
from smartwifi.core.codegen import CODE_ALPHABET, generate
from smartwifi.core.errors import IssuanceConflictError, ValidationError
from smartwifi.database import new_id
from smartwifi.models.card import Card, CardStatus
from smartwifi.schemas.card import (
    MAX_BATCH,
    MAX_CODE_LENGTH,
    MAX_PREFIX_LENGTH,
    MIN_CODE_LENGTH,
    CardDoc,
    GenerateCardsResponse,
)

logger = logging.getLogger(__name__)

# stay well below sqlite's bound-parameter limit
LOOKUP_CHUNK = 500


def card_to_doc(card: Card) -> CardDoc:
    return CardDoc(
        id=card.id,
        code=card.code,
        cafe_id=card.cafe_id,
        plan_id=card.plan_id,
        status=card.status,
        created_at=card.created_at,
    )


def compose_code(prefix: str, body: str) -> str:
    """``PREFIX-BODY``, or just ``BODY`` without a prefix."""
    return f"{prefix}-{body}" if prefix else body


class VoucherService:
    """Card issuance and lookup"""

    @staticmethod
    def _fill(codes: List[str], seen: Set[str], count: int, length: int, prefix: str) -> None:
        """Append fresh codes, never repeating anything in ``seen``, until ``count`` is reached."""
        budget = (count - len(codes)) * 20 + 100
        while len(codes) < count:
            if budget == 0:
                raise IssuanceConflictError("code space exhausted")
            budget -= 1
            code = compose_code(prefix, generate(CODE_ALPHABET, length))
            if code in seen:
                continue
            seen.add(code)
            codes.append(code)

    @staticmethod
    async def _taken_codes(db: AsyncSession, codes: Iterable[str]) -> Set[str]:
        """Codes from ``codes`` that already exist in the card table."""
        codes = list(codes)
        taken: Set[str] = set()
        for start in range(0, len(codes), LOOKUP_CHUNK):
            chunk = codes[start:start + LOOKUP_CHUNK]
            result = await db.scalars(select(Card.code).where(Card.code.in_(chunk)))
            taken.update(result.all())
        return taken

    @staticmethod
    async def issue(
        db: AsyncSession,
        cafe_id: str,
        plan_id: str,
        count: int,
        length: int,
        prefix: str = "",
    ) -> GenerateCardsResponse:
        """
        Issue ``count`` new cards for a cafe and plan

        Args:
            db: database session
            cafe_id: cafe reference, not checked here
            plan_id: plan reference, not checked here
            count: number of cards, 1..5000
            length: random part length, 4..20
            prefix: optional, joined to the random part with ``-``

        Returns:
            every inserted code plus a preview of the first cards

        Raises:
            ValidationError: bad arguments, nothing written
            IssuanceConflictError: no collision-free batch within the retry budget
        """
        if not cafe_id or not plan_id:
            raise ValidationError("cafe_id and plan_id are required")
        if not 1 <= count <= MAX_BATCH:
            raise ValidationError(f"count must be within 1..{MAX_BATCH}")
        if not MIN_CODE_LENGTH <= length <= MAX_CODE_LENGTH:
            raise ValidationError(f"length must be within {MIN_CODE_LENGTH}..{MAX_CODE_LENGTH}")
        prefix = prefix or ""
        if len(prefix) > MAX_PREFIX_LENGTH:
            raise ValidationError(f"prefix longer than {MAX_PREFIX_LENGTH}")

        codes: List[str] = []
        seen: Set[str] = set()
        VoucherService._fill(codes, seen, count, length, prefix)

        for attempt in range(1, settings.ISSUE_MAX_ATTEMPTS + 1):
            taken = await VoucherService._taken_codes(db, codes)
            if taken:
                logger.info(f"Replacing {len(taken)} already-issued codes (attempt {attempt})")
                codes = [code for code in codes if code not in taken]
                VoucherService._fill(codes, seen, count, length, prefix)
                continue

            now = datetime.utcnow()
            cards = [
                Card(
                    id=new_id(),
                    code=code,
                    cafe_id=cafe_id,
                    plan_id=plan_id,
                    status=CardStatus.NEW.value,
                    created_at=now,
                )
                for code in codes
            ]
            db.add_all(cards)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                logger.warning(f"Card insert hit the unique constraint (attempt {attempt}), retrying")
                continue

            logger.info(f"Issued {len(cards)} cards for cafe {cafe_id} / plan {plan_id}")
            return GenerateCardsResponse(
                inserted=codes,
                preview=[card_to_doc(card) for card in cards[:settings.PREVIEW_SIZE]],
            )

        raise IssuanceConflictError(
            f"could not issue {count} unique cards in {settings.ISSUE_MAX_ATTEMPTS} attempts"
        )

    @staticmethod
    async def search(
        db: AsyncSession,
        cafe_id: Optional[str] = None,
        code: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[CardDoc]:
        """
        Newest cards first, filtered by exact cafe id and/or code

        ``limit`` defaults to SEARCH_DEFAULT_LIMIT and is clamped to
        1..SEARCH_MAX_LIMIT.
        """
        limit = limit or settings.SEARCH_DEFAULT_LIMIT
        limit = max(1, min(limit, settings.SEARCH_MAX_LIMIT))

        stmt = select(Card)
        if cafe_id:
            stmt = stmt.where(Card.cafe_id == cafe_id)
        if code:
            stmt = stmt.where(Card.code == code)
        stmt = stmt.order_by(Card.created_at.desc()).limit(limit)

        result = await db.scalars(stmt)
        return [card_to_doc(card) for card in result.all()]
