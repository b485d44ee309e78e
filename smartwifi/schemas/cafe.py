"""
SmartWiFi Portal - Cafe schemas
"""
from typing import Optional

from pydantic import BaseModel, Field

from smartwifi.models.cafe import CafeStatus
from smartwifi.schemas.response import Document


class AddCafeRequest(BaseModel):
    """Create cafe"""
    name: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = None
    owner: Optional[str] = None
    phone: Optional[str] = None
    landline: Optional[str] = None


class ToggleCafeRequest(BaseModel):
    """Change cafe status"""
    id: str = Field(..., min_length=1)
    status: CafeStatus


class CafeDoc(Document):
    name: str
    address: Optional[str] = None
    owner: Optional[str] = None
    phone: Optional[str] = None
    landline: Optional[str] = None
    status: CafeStatus
    install_token: Optional[str] = Field(None, alias="installToken")


class InstallCafeResponse(BaseModel):
    token: str
