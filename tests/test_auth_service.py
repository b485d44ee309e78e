"""Login and admin seeding"""
import pytest
from sqlalchemy import func, select

from smartwifi.core.errors import InvalidCredentialsError
from smartwifi.core.security import get_password_hash
from smartwifi.models import Role, User
from smartwifi.services.auth_service import AuthService
from smartwifi.services.bootstrap import ensure_admin

pytestmark = pytest.mark.anyio


class TestEnsureAdmin:
    async def test_creates_admin_once(self, session):
        assert await ensure_admin(session, "admin", "123") is True
        assert await ensure_admin(session, "admin", "other") is False

        count = await session.scalar(select(func.count()).select_from(User))
        assert count == 1
        admin = await session.scalar(select(User))
        assert admin.role == Role.ADMIN.value
        assert admin.hashed_password != "123"


class TestLogin:
    async def test_success_carries_stored_role(self, session):
        session.add(User(username="op", hashed_password=get_password_hash("pw"), role="operator"))
        await session.commit()

        token, claims = await AuthService.login(session, "op", "pw")
        assert claims.username == "op"
        assert claims.role == Role.OPERATOR
        assert AuthService.verify(token) == claims

    async def test_admin_login(self, session):
        await ensure_admin(session, "admin", "123")
        _, claims = await AuthService.login(session, "admin", "123")
        assert claims.role == Role.ADMIN

    async def test_failures_are_indistinguishable(self, session):
        await ensure_admin(session, "admin", "123")

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await AuthService.login(session, "admin", "nope")
        with pytest.raises(InvalidCredentialsError) as no_user:
            await AuthService.login(session, "ghost", "123")

        assert wrong_password.value.code == no_user.value.code == "invalid"
        assert str(wrong_password.value) == str(no_user.value)
