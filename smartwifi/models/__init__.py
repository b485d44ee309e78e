"""
SmartWiFi Portal - Models
"""
from smartwifi.models.user import User, Role, ALL_ROLES
from smartwifi.models.cafe import Cafe, CafeStatus
from smartwifi.models.plan import Plan, DurationUnit
from smartwifi.models.card import Card, CardStatus
from smartwifi.models.design import Design

__all__ = [
    "User",
    "Role",
    "ALL_ROLES",
    "Cafe",
    "CafeStatus",
    "Plan",
    "DurationUnit",
    "Card",
    "CardStatus",
    "Design",
]
