"""
SmartWiFi Portal - Card (voucher) model
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from smartwifi.database import Base, new_id


class CardStatus(str, Enum):
    """Card status"""
    NEW = "new"
    ACTIVATED = "activated"
    EXPIRED = "expired"
    REVOKED = "revoked"


class Card(Base):
    """Single-use access code"""

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    # unique across every cafe and plan
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)

    # opaque references, checked at redemption time
    cafe_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    plan_id: Mapped[str] = mapped_column(String(64), nullable=False)

    status: Mapped[str] = mapped_column(String(20), default=CardStatus.NEW.value)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<Card {self.code}>"
