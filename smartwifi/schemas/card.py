"""
SmartWiFi Portal - Card schemas
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from smartwifi.models.card import CardStatus
from smartwifi.schemas.response import Document

MAX_BATCH = 5000
MIN_CODE_LENGTH = 4
MAX_CODE_LENGTH = 20
MAX_PREFIX_LENGTH = 32


class GenerateCardsRequest(BaseModel):
    """Issue a batch of cards"""
    model_config = ConfigDict(populate_by_name=True)

    cafe_id: str = Field(..., min_length=1, alias="cafeId")
    plan_id: str = Field(..., min_length=1, alias="planId")
    count: int = Field(..., ge=1, le=MAX_BATCH, strict=True)
    length: int = Field(..., ge=MIN_CODE_LENGTH, le=MAX_CODE_LENGTH, strict=True)
    prefix: str = Field("", max_length=MAX_PREFIX_LENGTH)


class SearchCardsRequest(BaseModel):
    """Card lookup; every filter is optional"""
    model_config = ConfigDict(populate_by_name=True)

    cafe_id: Optional[str] = Field(None, alias="cafeId")
    code: Optional[str] = None
    limit: Optional[int] = None


class CardDoc(Document):
    code: str
    cafe_id: str = Field(..., alias="cafeId")
    plan_id: str = Field(..., alias="planId")
    status: CardStatus


class GenerateCardsResponse(BaseModel):
    inserted: List[str]
    preview: List[CardDoc]
