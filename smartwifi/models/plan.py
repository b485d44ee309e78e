"""
SmartWiFi Portal - Plan model
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import String, DateTime, Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from smartwifi.database import Base, new_id


class DurationUnit(str, Enum):
    """Plan validity unit"""
    HOURS = "hours"
    DAYS = "days"
    MONTHS = "months"


class Plan(Base):
    """Service tier assigned to cards"""

    __tablename__ = "plans"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[float] = mapped_column(Float, default=0)
    quota_mb: Mapped[float] = mapped_column(Float, default=0)
    upload_mbps: Mapped[float] = mapped_column(Float, default=0)
    download_mbps: Mapped[float] = mapped_column(Float, default=0)

    # validity window
    duration_value: Mapped[float] = mapped_column(Float, nullable=False)
    duration_unit: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<Plan {self.id}: {self.name}>"
