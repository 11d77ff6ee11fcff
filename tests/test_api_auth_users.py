# ============================================================================
# FILE: tests/test_api_auth_users.py
# ============================================================================
from app.db.models.user import Role


SIGNUP = {
    "name": "Ana",
    "last_name": "Lopez",
    "nickname": "ana",
    "email": "ana@example.com",
    "password": "secret123",
}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_signup_then_login(client):
    response = client.post("/api/auth/signup", json=SIGNUP)
    assert response.status_code == 201
    assert response.json()["message"]

    response = client.post("/api/auth/login", data={"username": "ana@example.com", "password": "secret123"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["nickname"] == "ana"
    assert body["role"] == "USER"

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "ana@example.com"


def test_login_with_nickname(client):
    client.post("/api/auth/signup", json=SIGNUP)

    response = client.post("/api/auth/login", data={"username": "ana", "password": "secret123"})
    assert response.status_code == 200


def test_signup_duplicate_email_conflicts(client):
    client.post("/api/auth/signup", json=SIGNUP)

    response = client.post("/api/auth/signup", json={**SIGNUP, "nickname": "other"})
    assert response.status_code == 409
    assert response.json() == {"detail": "Email already in use"}


def test_signup_validation(client):
    response = client.post("/api/auth/signup", json={**SIGNUP, "email": "not-an-email", "password": "123"})
    assert response.status_code == 422


def test_login_wrong_password(client):
    client.post("/api/auth/signup", json=SIGNUP)

    response = client.post("/api/auth/login", data={"username": "ana", "password": "wrong"})
    assert response.status_code == 401


def test_protected_route_requires_token(client):
    assert client.get("/api/users/me").status_code == 401
    assert client.get("/api/users/me", headers={"Authorization": "Bearer junk"}).status_code == 401


def test_get_unknown_user(client):
    response = client.get("/api/users/999")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_follow_flow(client, make_user, headers_for):
    ana = make_user("ana")
    bob = make_user("bob")

    response = client.post(f"/api/users/{bob.id}/follow", headers=headers_for(ana))
    assert response.status_code == 200

    profile = client.get(f"/api/users/{bob.id}", headers=headers_for(ana)).json()
    assert profile["is_following"] is True
    assert profile["follower_count"] == 1

    again = client.post(f"/api/users/{bob.id}/follow", headers=headers_for(ana))
    assert again.status_code == 409

    followers = client.get(f"/api/users/{bob.id}/followers").json()
    assert [u["id"] for u in followers] == [ana.id]

    response = client.post(f"/api/users/{bob.id}/unfollow", headers=headers_for(ana))
    assert response.status_code == 200
    assert client.get(f"/api/users/{ana.id}/following").json() == []


def test_follow_self_is_bad_request(client, make_user, headers_for):
    ana = make_user("ana")

    response = client.post(f"/api/users/{ana.id}/follow", headers=headers_for(ana))
    assert response.status_code == 400


def test_update_profile_requires_owner_or_admin(client, make_user, headers_for):
    ana = make_user("ana")
    bob = make_user("bob")
    admin = make_user("admin", role=Role.ADMIN)

    response = client.put(f"/api/users/{ana.id}", json={"bio": "hi"}, headers=headers_for(bob))
    assert response.status_code == 403

    response = client.put(f"/api/users/{ana.id}", json={"bio": "hi"}, headers=headers_for(ana))
    assert response.status_code == 200
    assert response.json()["bio"] == "hi"

    response = client.put(f"/api/users/{ana.id}", json={"bio": "moderated"}, headers=headers_for(admin))
    assert response.json()["bio"] == "moderated"


def test_search_users(client, make_user):
    make_user("guitarhero")
    make_user("drummer")

    response = client.get("/api/users/search", params={"query": "GUITAR"})
    assert [u["nickname"] for u in response.json()] == ["guitarhero"]


def test_delete_account(client, make_user, headers_for):
    ana = make_user("ana")

    response = client.delete(f"/api/users/{ana.id}", headers=headers_for(ana))
    assert response.status_code == 204
    assert client.get(f"/api/users/{ana.id}").status_code == 404
