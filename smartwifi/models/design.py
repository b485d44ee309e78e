"""
SmartWiFi Portal - Card design model
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from smartwifi.database import Base, new_id


class Design(Base):
    """Printable card template, stored as-is"""

    __tablename__ = "designs"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    cafe_id: Mapped[str] = mapped_column(String(64), nullable=False)
    cafe_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    template: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<Design {self.id}: {self.name}>"
