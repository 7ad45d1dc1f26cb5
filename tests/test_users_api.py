import asyncio

from restaurant_api.utils.auth.jwt_handler import create_access_token


def test_signup_returns_generated_id_and_tokens(client):
    response = client.post("/users/signup", json={"email": "a@b.com", "phone": "5551234", "password": "Secret123"})

    assert response.status_code == 200, response.text
    body = response.json()
    assert len(body["user_id"]) == 24
    assert body["email"] == "a@b.com"
    assert body["user_type"] == "USER"
    assert body["token"] and body["refresh_token"]
    assert "password" not in body
    assert "_id" not in body


def test_signup_stores_a_hash_not_the_password(client, mongo_db):
    response = client.post("/users/signup", json={"email": "a@b.com", "phone": "5551234", "password": "Secret123"})
    assert response.status_code == 200

    stored = asyncio.run(mongo_db["user"].find_one({"email": "a@b.com"}))
    assert stored["password"] != "Secret123"
    assert stored["token"] == response.json()["token"]


def test_duplicate_email_is_a_conflict(client, mongo_db):
    first = client.post("/users/signup", json={"email": "a@b.com", "phone": "5551234", "password": "Secret123"})
    assert first.status_code == 200

    second = client.post("/users/signup", json={"email": "a@b.com", "phone": "5559999", "password": "Secret123"})

    assert second.status_code == 409
    assert second.json()["detail"] == "this email or phone number already exists"
    assert asyncio.run(mongo_db["user"].count_documents({})) == 1


def test_duplicate_phone_is_a_conflict(client):
    client.post("/users/signup", json={"email": "a@b.com", "phone": "5551234", "password": "Secret123"})
    response = client.post("/users/signup", json={"email": "c@d.com", "phone": "5551234", "password": "Secret123"})
    assert response.status_code == 409


def test_signup_validates_body(client):
    response = client.post("/users/signup", json={"email": "not-an-email", "phone": "5551234", "password": "Secret123"})
    assert response.status_code == 422

    response = client.post("/users/signup", json={"email": "a@b.com", "phone": "5551234", "password": "short"})
    assert response.status_code == 422


def test_login_rotates_tokens(client, signup_payload):
    signup = client.post("/users/signup", json=signup_payload).json()

    response = client.patch("/users/login", json={"email": signup_payload["email"], "password": signup_payload["password"]})

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["user_id"] == signup["user_id"]
    assert body["refresh_token"] != signup["refresh_token"]

    fetched = client.get(f"/users/{signup['user_id']}", headers={"Authorization": f"Bearer {body['token']}"})
    assert fetched.status_code == 200
    assert fetched.json()["email"] == signup_payload["email"]


def test_login_with_wrong_password(client, signup_payload):
    client.post("/users/signup", json=signup_payload)
    response = client.patch("/users/login", json={"email": signup_payload["email"], "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json()["detail"] == "login or password is incorrect"


def test_login_with_unknown_email_gives_same_message(client):
    response = client.post("/users/login", json={"email": "nobody@b.com", "password": "whatever"})
    assert response.status_code == 401
    assert response.json()["detail"] == "login or password is incorrect"


def test_refresh_issues_new_pair_once(client, signup_payload):
    signup = client.post("/users/signup", json=signup_payload).json()

    response = client.post("/users/refresh", json={"refresh_token": signup["refresh_token"]})
    assert response.status_code == 200, response.text
    pair = response.json()
    assert pair["token_type"] == "bearer"
    assert pair["refresh_token"] != signup["refresh_token"]

    # the old refresh token was rotated out
    replay = client.post("/users/refresh", json={"refresh_token": signup["refresh_token"]})
    assert replay.status_code == 401


def test_refresh_rejects_access_token(client, signup_payload):
    signup = client.post("/users/signup", json=signup_payload).json()
    response = client.post("/users/refresh", json={"refresh_token": signup["token"]})
    assert response.status_code == 401


def test_protected_routes_need_a_token(client):
    assert client.get("/users").status_code == 401
    assert client.get("/menus", headers={"Authorization": "Bearer garbage"}).status_code == 401
    assert client.get("/orders", headers={"Authorization": "Basic abc"}).status_code == 401


def test_expired_token_is_rejected(client):
    token = create_access_token({"uid": "abc", "email": "a@b.com"}, expire_minutes=-5)
    response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert "expired" in response.json()["detail"]


def test_list_users_paginated(client, auth_headers):
    for n in range(4):
        client.post("/users/signup", json={"email": f"u{n}@b.com", "phone": f"555100{n}", "password": "Secret123"})

    response = client.get("/users", params={"recordPerPage": 2, "page": 2}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 5
    assert [user["email"] for user in body["items"]] == ["u1@b.com", "u2@b.com"]
    assert all("password" not in user and "token" not in user for user in body["items"])


def test_list_users_ignores_bad_pagination_values(client, auth_headers):
    response = client.get("/users", params={"recordPerPage": "abc", "page": "-3"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["total_count"] == 1


def test_unknown_user(client, auth_headers):
    response = client.get("/users/0123456789abcdef01234567", headers=auth_headers)
    assert response.status_code == 404


def test_responses_carry_request_id(client):
    response = client.post("/users/login", json={"email": "nobody@b.com", "password": "x"}, headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"
