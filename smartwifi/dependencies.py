"""
SmartWiFi Portal - Access control

Every action except ``login`` goes through ``get_current_session`` before any
side effect. The full session is returned so role checks can be layered on
without touching call sites.
"""
from typing import Iterable

from fastapi import Request
from fastapi.security import HTTPBearer

from smartwifi.core.errors import AuthError, ForbiddenError
from smartwifi.schemas.auth import SessionClaims
from smartwifi.services.auth_service import AuthService


# Authorization: Bearer <token>; missing header yields None instead of a 403
security = HTTPBearer(auto_error=False)


async def get_current_session(request: Request) -> SessionClaims:
    """
    Resolve the caller's session

    Raises:
        AuthError: no bearer token, or the token does not verify
    """
    credentials = await security(request)
    claims = AuthService.verify(credentials.credentials if credentials else None)
    if claims is None:
        raise AuthError()
    return claims


def require_role(claims: SessionClaims, roles: Iterable[str]) -> SessionClaims:
    """
    Check the session role against an allowed set

    Raises:
        ForbiddenError: role not allowed
    """
    if claims.role.value not in set(roles):
        raise ForbiddenError()
    return claims
