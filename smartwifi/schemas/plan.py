"""
SmartWiFi Portal - Plan schemas
"""
from pydantic import BaseModel, ConfigDict, Field

from smartwifi.models.plan import DurationUnit
from smartwifi.schemas.response import Document


class PlanDuration(BaseModel):
    value: float = Field(..., description="validity length")
    unit: DurationUnit


class AddPlanRequest(BaseModel):
    """Create plan"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    price: float = 0
    quota_mb: float = Field(0, alias="quotaMB")
    upload_mbps: float = Field(0, alias="uploadMbps")
    download_mbps: float = Field(0, alias="downloadMbps")
    duration: PlanDuration


class PlanDoc(Document):
    name: str
    price: float
    quota_mb: float = Field(..., alias="quotaMB")
    upload_mbps: float = Field(..., alias="uploadMbps")
    download_mbps: float = Field(..., alias="downloadMbps")
    duration: PlanDuration
