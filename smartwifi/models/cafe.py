"""
SmartWiFi Portal - Cafe model
"""
from datetime import datetime
from typing import Optional
from enum import Enum

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from smartwifi.database import Base, new_id


class CafeStatus(str, Enum):
    """Cafe status"""
    ACTIVE = "active"
    SUSPENDED = "suspended"


class Cafe(Base):
    """Venue running a hotspot controller"""

    __tablename__ = "cafes"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    owner: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    landline: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=CafeStatus.ACTIVE.value)

    # written once, never changed afterwards
    install_token: Mapped[Optional[str]] = mapped_column(String(64), unique=True, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<Cafe {self.id}: {self.name}>"
