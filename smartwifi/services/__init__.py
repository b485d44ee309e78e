"""
SmartWiFi Portal - Services
"""
from smartwifi.services.auth_service import AuthService
from smartwifi.services.bootstrap import ensure_admin
from smartwifi.services.cafe_service import CafeService
from smartwifi.services.plan_service import PlanService
from smartwifi.services.voucher_service import VoucherService
from smartwifi.services.install_token_service import InstallTokenService
from smartwifi.services.design_service import DesignService

__all__ = [
    "AuthService",
    "ensure_admin",
    "CafeService",
    "PlanService",
    "VoucherService",
    "InstallTokenService",
    "DesignService",
]
