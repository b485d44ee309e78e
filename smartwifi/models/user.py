"""
SmartWiFi Portal - User model
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from smartwifi.database import Base, new_id


class Role(str, Enum):
    """Account role"""
    ADMIN = "admin"
    OPERATOR = "operator"


ALL_ROLES = frozenset(role.value for role in Role)


class User(Base):
    """Portal account"""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default=Role.OPERATOR.value)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.username}>"
