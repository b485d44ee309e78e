"""
SmartWiFi Portal - API routers
"""
from fastapi import APIRouter

from smartwifi.api import actions, health

api_router = APIRouter()

# action endpoint
api_router.include_router(actions.router, prefix="/api", tags=["actions"])

# liveness / readiness
api_router.include_router(health.router)
