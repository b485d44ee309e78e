"""The single action endpoint, end to end"""
import re

from sqlalchemy.exc import OperationalError

from smartwifi.api import actions
from smartwifi.api.actions import ActionSpec
from smartwifi.core.codegen import CODE_ALPHABET
from smartwifi.database import Database
from smartwifi.services import voucher_service
from smartwifi.services.voucher_service import VoucherService
from tests.conftest import ADMIN_PASS, ADMIN_USER, call


def add_cafe(client, token, name="Corner Cafe"):
    response = call(client, "addCafe", {"name": name, "phone": "555-0100"}, token)
    return response.json()["insertedId"]


class TestLogin:
    def test_returns_token(self, client):
        response = call(client, "login", {"user": ADMIN_USER, "pass": ADMIN_PASS})
        body = response.json()
        assert response.status_code == 200
        assert body["token"]
        assert body["expiresIn"] == 12 * 3600

    def test_accepts_long_field_names(self, client):
        response = call(client, "login", {"username": ADMIN_USER, "password": ADMIN_PASS})
        assert "token" in response.json()

    def test_unknown_user(self, client):
        response = call(client, "login", {"user": "ghost", "pass": ADMIN_PASS})
        assert response.status_code == 200
        assert response.json() == {"error": "invalid"}

    def test_wrong_password(self, client):
        response = call(client, "login", {"user": ADMIN_USER, "pass": "wrong"})
        assert response.status_code == 200
        assert response.json() == {"error": "invalid"}

    def test_missing_fields(self, client):
        response = call(client, "login", {"user": ADMIN_USER})
        assert response.json() == {"error": "invalid"}

    def test_me(self, client, token):
        assert call(client, "me", token=token).json() == {"user": "admin", "role": "admin"}


class TestAccessControl:
    def test_generate_cards_without_token(self, client, token):
        data = {"cafeId": "c1", "planId": "p1", "count": 5, "length": 8}
        response = call(client, "generateCards", data)

        assert response.status_code == 401
        assert response.json() == {"error": "unauthorized"}
        assert call(client, "searchCards", {}, token).json() == []

    def test_bad_token(self, client):
        response = call(client, "getCafes", token="not-a-token")
        assert response.status_code == 401
        assert response.json() == {"error": "unauthorized"}

    def test_unknown_action_requires_auth(self, client):
        assert call(client, "dance").status_code == 401

    def test_unknown_action(self, client, token):
        response = call(client, "dance", {}, token)
        assert response.status_code == 200
        assert response.json() == {"error": "unknown_action"}

    def test_missing_action(self, client, token):
        response = client.post(
            "/api/egsmart", content=b"not json",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.json() == {"error": "unknown_action"}

    def test_method_not_allowed(self, client):
        response = client.get("/api/egsmart")
        assert response.status_code == 405
        assert response.json() == {"error": "method_not_allowed"}

    def test_role_not_allowed(self, client, token, monkeypatch):
        operator_only = ActionSpec(actions.ACTIONS["getCafes"].handler, roles=frozenset({"operator"}))
        monkeypatch.setitem(actions.ACTIONS, "getCafes", operator_only)

        response = call(client, "getCafes", token=token)

        assert response.status_code == 403
        assert response.json() == {"error": "forbidden"}


class TestCards:
    def test_issue_scenario(self, client, token):
        cafe_id = add_cafe(client, token)
        plan = call(client, "addPlan", {
            "name": "1 day", "price": 5, "duration": {"value": 1, "unit": "days"},
        }, token).json()

        response = call(client, "generateCards", {
            "cafeId": cafe_id, "planId": plan["insertedId"],
            "count": 100, "length": 8, "prefix": "CAFE1",
        }, token)
        body = response.json()

        pattern = re.compile(rf"^CAFE1-[{CODE_ALPHABET}]{{8}}$")
        assert response.status_code == 200
        assert len(body["inserted"]) == 100
        assert len(set(body["inserted"])) == 100
        assert all(pattern.match(code) for code in body["inserted"])
        assert len(body["preview"]) == 20
        assert {card["status"] for card in body["preview"]} == {"new"}
        assert body["preview"][0]["cafeId"] == cafe_id
        assert "_id" in body["preview"][0]

        found = call(client, "searchCards", {"cafeId": cafe_id, "limit": 500}, token).json()
        assert len(found) == 100
        assert {card["status"] for card in found} == {"new"}

    def test_out_of_range_is_invalid(self, client, token):
        base = {"cafeId": "c1", "planId": "p1", "count": 10, "length": 8}
        overrides = (
            {"count": 0}, {"count": 5001}, {"length": 3}, {"length": 21}, {"cafeId": ""},
            # no coercion from booleans or numeric strings
            {"count": True}, {"count": "10"}, {"length": "8"}, {"length": 8.0},
        )
        for override in overrides:
            response = call(client, "generateCards", {**base, **override}, token)
            assert response.status_code == 200
            assert response.json() == {"error": "invalid"}, override
        assert call(client, "searchCards", {}, token).json() == []

    def test_conflict_is_a_soft_error(self, client, token, monkeypatch):
        monkeypatch.setattr(voucher_service, "generate", lambda alphabet, length: "AAAA")

        response = call(client, "generateCards", {
            "cafeId": "c1", "planId": "p1", "count": 2, "length": 4,
        }, token)

        assert response.status_code == 200
        assert response.json() == {"error": "conflict"}
        assert call(client, "searchCards", {}, token).json() == []

    def test_search_by_code(self, client, token):
        issued = call(client, "generateCards", {
            "cafeId": "c1", "planId": "p1", "count": 3, "length": 6,
        }, token).json()["inserted"]

        found = call(client, "searchCards", {"code": issued[2]}, token).json()
        assert [card["code"] for card in found] == [issued[2]]


class TestInstallCafe:
    def test_token_is_stable(self, client, token):
        cafe_id = add_cafe(client, token)

        first = call(client, "installCafe", {"id": cafe_id}, token).json()
        second = call(client, "installCafe", {"id": cafe_id}, token).json()

        assert first["token"] == second["token"]
        cafes = call(client, "getCafes", token=token).json()
        assert cafes[0]["installToken"] == first["token"]

    def test_unknown_cafe(self, client, token):
        response = call(client, "installCafe", {"id": "nope"}, token)
        assert response.status_code == 200
        assert response.json() == {"error": "not_found"}

    def test_missing_id(self, client, token):
        assert call(client, "installCafe", {}, token).json() == {"error": "invalid"}


class TestCafesPlansDesigns:
    def test_cafe_lifecycle(self, client, token):
        cafe_id = add_cafe(client, token, "Harbour")

        cafes = call(client, "getCafes", token=token).json()
        assert [(c["_id"], c["name"], c["status"]) for c in cafes] == [(cafe_id, "Harbour", "active")]
        assert cafes[0]["phone"] == "555-0100"

        ok = call(client, "toggleCafe", {"id": cafe_id, "status": "suspended"}, token).json()
        assert ok == {"ok": True}
        assert call(client, "getCafes", token=token).json()[0]["status"] == "suspended"

    def test_toggle_rejects_unknown_status_and_cafe(self, client, token):
        cafe_id = add_cafe(client, token)
        bad_status = call(client, "toggleCafe", {"id": cafe_id, "status": "closed"}, token)
        assert bad_status.json() == {"error": "invalid"}
        missing = call(client, "toggleCafe", {"id": "nope", "status": "active"}, token)
        assert missing.json() == {"error": "not_found"}

    def test_add_cafe_requires_name(self, client, token):
        assert call(client, "addCafe", {"name": ""}, token).json() == {"error": "invalid"}

    def test_plans(self, client, token):
        plan_id = call(client, "addPlan", {
            "name": "Monthly", "quotaMB": 2048, "downloadMbps": 10,
            "duration": {"value": 1, "unit": "months"},
        }, token).json()["insertedId"]

        plans = call(client, "getPlans", token=token).json()
        assert len(plans) == 1
        assert plans[0]["quotaMB"] == 2048
        assert plans[0]["price"] == 0
        assert plans[0]["duration"] == {"value": 1, "unit": "months"}

        assert call(client, "deletePlan", {"id": plan_id}, token).json() == {"ok": True}
        assert call(client, "getPlans", token=token).json() == []
        assert call(client, "deletePlan", {"id": plan_id}, token).json() == {"error": "not_found"}

    def test_plan_duration_unit_is_checked(self, client, token):
        response = call(client, "addPlan", {
            "name": "Weekly", "duration": {"value": 1, "unit": "weeks"},
        }, token)
        assert response.json() == {"error": "invalid"}

    def test_designs(self, client, token):
        cafe_id = add_cafe(client, token, "Harbour")
        design_id = call(client, "addDesign", {
            "cafeId": cafe_id, "name": "Default", "template": "<div>{{code}}</div>",
        }, token).json()["insertedId"]

        design = call(client, "getDesign", {"id": design_id}, token).json()
        assert design["cafeName"] == "Harbour"
        assert design["template"] == "<div>{{code}}</div>"
        assert len(call(client, "getDesigns", token=token).json()) == 1
        assert call(client, "getDesign", {"id": "nope"}, token).json() is None


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"

    def test_ready(self, client):
        assert client.get("/ready").json() == {"status": "ready"}

    def test_not_ready_when_store_is_down(self, client, monkeypatch):
        async def ping(self):
            raise OperationalError("SELECT 1", {}, Exception("unable to open database file"))

        monkeypatch.setattr(Database, "ping", ping)
        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json() == {"error": "store_unavailable"}


class TestStoreFailures:
    def test_store_error_is_a_hard_failure(self, client, token, monkeypatch):
        async def search(db, cafe_id=None, code=None, limit=None):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(VoucherService, "search", staticmethod(search))
        response = call(client, "searchCards", {}, token)

        assert response.status_code == 500
        assert response.json() == {"error": "store_unavailable"}
