import pytest

from cryptostart.db.session import get_db
from cryptostart.services.user_service import UserService


@pytest.fixture
def admin_user(app):
    with app.app_context():
        user = UserService(get_db().session()).create_user(
            email="admin@thecryptostart.com", name="Admin", password="s3cret-pass", roles=["ADMIN"]
        )
        return user.id


def test_token_exchange_and_use(client, admin_user):
    resp = client.post("/api/auth/token", json={"email": "admin@thecryptostart.com", "password": "s3cret-pass"})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["tokenType"] == "Bearer"
    assert data["roles"] == ["ADMIN"]

    users = client.get("/api/users/", headers={"Authorization": f"Bearer {data['accessToken']}"})
    assert users.status_code == 200
    assert [u["id"] for u in users.get_json()["data"]] == [admin_user]


def test_wrong_password(client, admin_user):
    resp = client.post("/api/auth/token", json={"email": "admin@thecryptostart.com", "password": "nope"})
    assert resp.status_code == 401


def test_users_require_admin(client, auth_header):
    assert client.get("/api/users/", headers=auth_header("EDITOR")).status_code == 403


def test_user_crud(client, admin_headers):
    resp = client.post(
        "/api/users/",
        json={"email": "writer@example.com", "name": "Writer", "password": "long-enough", "roles": ["AUTHOR"]},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    user = resp.get_json()["data"]
    assert user["roles"] == ["AUTHOR"]
    assert "password_hash" not in user

    dup = client.post("/api/users/", json={"email": "writer@example.com"}, headers=admin_headers)
    assert dup.status_code == 409

    bad_role = client.post("/api/users/", json={"email": "x@example.com", "roles": ["OWNER"]}, headers=admin_headers)
    assert bad_role.status_code == 400

    updated = client.put(f"/api/users/{user['id']}", json={"roles": ["EDITOR"]}, headers=admin_headers)
    assert updated.get_json()["data"]["roles"] == ["EDITOR"]

    assert client.delete(f"/api/users/{user['id']}", headers=admin_headers).get_json()["data"] == {"deleted": True}
    assert client.get(f"/api/users/{user['id']}", headers=admin_headers).status_code == 404


def test_health(client):
    resp = client.get("/api/health/")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert set(data["env"]) == {"DATABASE_URL", "JWT_SECRET", "SECRET_KEY", "SITE_URL"}


def test_openapi_lists_endpoints(client):
    spec = client.get("/openapi.json").get_json()
    assert spec["info"]["title"] == "TheCryptoStart Content API"
    assert "/api/comments/" in spec["paths"]
    assert "/api/admin/seo/metrics" in spec["paths"]
    assert "CommentCreateIn" in spec["components"]["schemas"]


def test_unknown_route_returns_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"


@pytest.mark.parametrize("path,marker", [("/docs", "swagger-ui"), ("/redoc", "<redoc")])
def test_docs_pages(client, path, marker):
    resp = client.get(path)
    assert resp.status_code == 200
    assert marker in resp.get_data(as_text=True)


def test_delete_unknown_user_is_not_found(client, admin_headers):
    resp = client.delete("/api/users/does-not-exist", headers=admin_headers)
    assert resp.status_code == 404


def test_admin_cannot_delete_own_account(client, auth_header, admin_user):
    headers = auth_header("ADMIN", user_id=admin_user)
    resp = client.delete(f"/api/users/{admin_user}", headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Cannot delete yourself"
    assert client.get(f"/api/users/{admin_user}", headers=headers).status_code == 200
