"""
SmartWiFi Portal - Card design schemas
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from smartwifi.schemas.response import Document


class AddDesignRequest(BaseModel):
    """Store a printable card template"""
    model_config = ConfigDict(populate_by_name=True)

    cafe_id: str = Field(..., min_length=1, alias="cafeId")
    name: str = Field(..., min_length=1, max_length=100)
    template: str = Field(..., min_length=1)


class DesignDoc(Document):
    cafe_id: str = Field(..., alias="cafeId")
    cafe_name: Optional[str] = Field(None, alias="cafeName")
    name: str
    template: str
