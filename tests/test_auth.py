import pytest
from django.test import Client

from accounts.jwt_utils import decode_token, issue_access_token, issue_refresh_token


@pytest.mark.django_db
class TestLogin:
    def test_sets_cookies(self, staff_user):
        client = Client()
        res = client.post(
            "/api/auth/login",
            {"email": "Admin@Example.com", "password": "secret123"},
            content_type="application/json",
        )
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}
        access = res.cookies["access_token"].value
        assert decode_token(access)["type"] == "access"
        assert res.cookies["access_token"]["httponly"]

        # The cookie alone authenticates admin calls.
        assert client.get("/api/admin/languages").status_code == 200

    def test_wrong_password(self, staff_user):
        res = Client().post(
            "/api/auth/login",
            {"email": "admin@example.com", "password": "nope"},
            content_type="application/json",
        )
        assert res.status_code == 401

    def test_refresh(self, staff_user):
        res = Client().post(
            "/api/auth/refresh",
            {"refresh": issue_refresh_token(user_id=staff_user.id)},
            content_type="application/json",
        )
        assert res.status_code == 200
        assert decode_token(res.cookies["access_token"].value)["sub"] == str(staff_user.id)

    def test_refresh_rejects_access_tokens(self, staff_client, staff_user):
        res = Client().post(
            "/api/auth/refresh",
            {"refresh": issue_access_token(user_id=staff_user.id)},
            content_type="application/json",
        )
        assert res.status_code == 401

    def test_logout_clears_cookies(self):
        res = Client().post("/api/auth/logout")
        assert res.cookies["access_token"].value == ""


@pytest.mark.django_db
class TestMe:
    def test_me(self, staff_client, staff_user):
        res = staff_client.get("/api/auth/me")
        assert res.json() == {"id": staff_user.id, "email": "admin@example.com", "display_name": "admin@example.com", "is_staff": True}

    def test_me_shows_display_name(self, staff_client, staff_user):
        staff_user.display_name = "Atelier Hout"
        staff_user.save(update_fields=["display_name"])
        assert staff_client.get("/api/auth/me").json()["display_name"] == "Atelier Hout"

    def test_anonymous(self, anon_client):
        assert anon_client.get("/api/auth/me").status_code == 401

    def test_garbage_token(self, db):
        client = Client(HTTP_AUTHORIZATION="Bearer not-a-jwt")
        assert client.get("/api/admin/languages").status_code == 401


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
