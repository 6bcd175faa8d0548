"""Auth and user API endpoint tests."""

from conftest import TEST_PASSWORD


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_signup(client):
    """Test user signup."""
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "newuser@example.com", "password": "abc123!@", "nickname": "newbie"},
    )
    assert response.status_code == 201
    assert response.json()["message"] == "Signup completed"


def test_signup_password_without_special_character(client):
    """Test signup rejects a password with no special character."""
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "newuser@example.com", "password": "abc12345", "nickname": "newbie"},
    )
    assert response.status_code == 400
    assert "special character" in response.json()["detail"]


def test_signup_missing_nickname(client):
    """Test signup requires a nickname."""
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "newuser@example.com", "password": "abc123!@", "nickname": "  "},
    )
    assert response.status_code == 400
    assert "required" in response.json()["detail"]


def test_signup_duplicate_email(client, auth_headers):
    """Test signup with duplicate email fails."""
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": auth_headers.email, "password": "abc123!@", "nickname": "someone"},
    )
    assert response.status_code == 400
    assert "already registered" in response.json()["detail"]


def test_signup_duplicate_nickname(client, auth_headers):
    """Test signup with a nickname already in use fails."""
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "fresh@example.com", "password": "abc123!@", "nickname": "tester"},
    )
    assert response.status_code == 400
    assert "Nickname" in response.json()["detail"]


def test_check_email_and_nickname(client, auth_headers):
    """Test duplicate check endpoints."""
    response = client.get("/api/v1/auth/check-email", params={"email": auth_headers.email})
    assert response.json()["duplicated"] is True

    response = client.get("/api/v1/auth/check-nickname", params={"nickname": "unused"})
    assert response.json()["duplicated"] is False


def test_login(client, auth_headers, fake_redis):
    """Test login returns a token pair and stores the refresh token."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["nickname"] == "tester"
    assert data["role"] == "USER"
    assert fake_redis.store[f"refresh_token:{auth_headers.email}"] == data["refresh_token"]


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "wrongpass1!"}
    )
    assert response.status_code == 401


def test_login_unknown_user(client):
    """Test login for an email nobody registered."""
    response = client.post(
        "/api/v1/auth/login", json={"email": "ghost@example.com", "password": TEST_PASSWORD}
    )
    assert response.status_code == 404


def test_reissue(client, auth_headers, fake_redis):
    """Test reissue returns a new pair and replaces the stored refresh token."""
    response = client.post(
        "/api/v1/auth/reissue",
        json={
            "access_token": auth_headers.access_token,
            "refresh_token": auth_headers.refresh_token,
        },
    )
    assert response.status_code == 200
    new_refresh = response.json()["refresh_token"]
    assert new_refresh != auth_headers.refresh_token
    assert fake_redis.store[f"refresh_token:{auth_headers.email}"] == new_refresh

    # The old refresh token is no longer accepted
    response = client.post(
        "/api/v1/auth/reissue",
        json={
            "access_token": auth_headers.access_token,
            "refresh_token": auth_headers.refresh_token,
        },
    )
    assert response.status_code == 401


def test_reissue_with_invalid_refresh_token(client, auth_headers):
    """Test reissue rejects a token that is not a valid refresh token."""
    response = client.post(
        "/api/v1/auth/reissue",
        json={
            "access_token": auth_headers.access_token,
            "refresh_token": auth_headers.access_token,
        },
    )
    assert response.status_code == 401


def test_logout_removes_refresh_token(client, auth_headers, fake_redis):
    """Test logout deletes the stored refresh token so reissue fails."""
    response = client.post("/api/v1/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert f"refresh_token:{auth_headers.email}" not in fake_redis.store

    response = client.post(
        "/api/v1/auth/reissue",
        json={
            "access_token": auth_headers.access_token,
            "refresh_token": auth_headers.refresh_token,
        },
    )
    assert response.status_code == 404


def test_get_current_user(client, auth_headers):
    """Test getting current user information."""
    response = client.get("/api/v1/user/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == auth_headers.email


def test_update_profile(client, auth_headers):
    """Test updating nickname and profile."""
    response = client.patch(
        "/api/v1/user/me",
        headers=auth_headers,
        json={"nickname": "renamed", "profile": "Writing every day"},
    )
    assert response.status_code == 200
    assert response.json()["nickname"] == "renamed"
    assert response.json()["profile"] == "Writing every day"


def test_update_profile_duplicate_nickname(client, auth_headers, other_headers):
    """Test a nickname used by someone else is rejected."""
    response = client.patch("/api/v1/user/me", headers=auth_headers, json={"nickname": "other"})
    assert response.status_code == 400


def test_update_profile_image(client, auth_headers, image_service):
    """Test replacing the profile image removes the previous file."""
    first = client.put(
        "/api/v1/user/me/image",
        headers=auth_headers,
        files={"image": ("me.png", b"first", "image/png")},
    )
    assert first.status_code == 200
    first_url = first.json()["image"]

    second = client.put(
        "/api/v1/user/me/image",
        headers=auth_headers,
        files={"image": ("me.jpg", b"second", "image/jpeg")},
    )
    assert second.status_code == 200
    assert second.json()["image"].endswith(".jpg")
    assert not (image_service.upload_dir / first_url.rsplit("/", 1)[-1]).exists()


def test_password_check_and_update(client, auth_headers):
    """Test password check and change."""
    response = client.post(
        "/api/v1/user/me/password/check", headers=auth_headers, json={"password": TEST_PASSWORD}
    )
    assert response.json()["matched"] is True

    response = client.put(
        "/api/v1/user/me/password",
        headers=auth_headers,
        json={"current_password": TEST_PASSWORD, "new_password": "n3w-secret"},
    )
    assert response.status_code == 204

    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "n3w-secret"}
    )
    assert response.status_code == 200


def test_password_update_requires_current_password(client, auth_headers):
    """Test a wrong current password blocks the change."""
    response = client.put(
        "/api/v1/user/me/password",
        headers=auth_headers,
        json={"current_password": "wrong1234!", "new_password": "n3w-secret"},
    )
    assert response.status_code == 400


def test_withdraw(client, auth_headers):
    """Test a withdrawn user can no longer authenticate."""
    response = client.delete("/api/v1/user/me", headers=auth_headers)
    assert response.status_code == 204

    response = client.get("/api/v1/user/me", headers=auth_headers)
    assert response.status_code == 401

    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": TEST_PASSWORD}
    )
    assert response.status_code == 404


def test_search_users(client, auth_headers, other_headers):
    """Test searching users by nickname excludes the requester."""
    response = client.get("/api/v1/user/search", headers=auth_headers, params={"nickname": "e"})
    assert response.status_code == 200
    nicknames = [u["nickname"] for u in response.json()]
    assert nicknames == ["other"]
