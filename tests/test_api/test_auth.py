import pytest

from tests.fixtures.app import make_client
from tests.fixtures.users import PASSWORD

COOKIE = "session_id"


# ─────────────────────────────────────────────────────────────
# Login
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_login_sets_http_only_session_cookie(async_client, regular_user, mock_redis):
    resp = await async_client.post("/api/login", json={"login": regular_user.login, "password": PASSWORD})

    assert resp.status_code == 200, f"Unexpected status: {resp.status_code} {resp.text}"
    assert resp.content == b""
    set_cookie = resp.headers["set-cookie"]
    assert "HttpOnly" in set_cookie
    assert "Path=/" in set_cookie
    assert "Max-Age=172800" in set_cookie
    token = async_client.cookies.get(COOKIE)
    assert token and await mock_redis.get(token) == str(regular_user.id)


@pytest.mark.anyio
@pytest.mark.parametrize(
    "credentials",
    [
        {"login": "viewer", "password": "wrong"},
        {"login": "ghost", "password": PASSWORD},
    ],
)
async def test_bad_credentials_share_one_response(async_client, regular_user, credentials):
    resp = await async_client.post("/api/login", json=credentials)

    assert resp.status_code == 409, resp.text
    assert resp.json()["detail"] == "incorrect login or password"
    assert COOKIE not in async_client.cookies


@pytest.mark.anyio
async def test_login_requires_login_and_password(async_client):
    resp = await async_client.post("/api/login", json={"login": "viewer"})
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_login_with_live_session_is_teapot(user_client, regular_user):
    resp = await user_client.post("/api/login", json={"login": regular_user.login, "password": PASSWORD})
    assert resp.status_code == 418
    assert resp.json()["detail"] == "already logged in"


@pytest.mark.anyio
async def test_login_with_stale_cookie_proceeds(async_client, regular_user):
    async_client.cookies.set(COOKIE, "stale-token")

    resp = await async_client.post("/api/login", json={"login": regular_user.login, "password": PASSWORD})

    assert resp.status_code == 200, resp.text
    cookies = resp.headers.get_list("set-cookie")
    assert any("Max-Age=0" in c for c in cookies), "stale cookie should be cleared"
    assert any("Max-Age=172800" in c for c in cookies), "new session cookie should be issued"


# ─────────────────────────────────────────────────────────────
# Session check on protected routes
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_missing_cookie_is_unauthorized(async_client):
    resp = await async_client.get("/api/actor/list")

    assert resp.status_code == 401
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert resp.json()["detail"] == "no session"


@pytest.mark.anyio
async def test_unknown_token_is_unauthorized_and_cookie_cleared(async_client):
    async_client.cookies.set(COOKIE, "bogus")

    resp = await async_client.get("/api/film/list")

    assert resp.status_code == 401
    set_cookie = resp.headers["set-cookie"]
    assert set_cookie.startswith(f"{COOKIE}=")
    assert "Max-Age=0" in set_cookie


@pytest.mark.anyio
async def test_valid_session_refreshes_cookie(user_client, mock_redis):
    token = user_client.cookies.get(COOKIE)
    mock_redis.expirations[token] = mock_redis.clock() + 60

    resp = await user_client.get("/api/user/list")

    assert resp.status_code == 200, resp.text
    assert f"{COOKIE}={token}" in resp.headers["set-cookie"]
    assert "Max-Age=172800" in resp.headers["set-cookie"]
    assert await mock_redis.ttl(token) == 172800


@pytest.mark.anyio
async def test_session_of_deleted_user_is_rejected(admin_client, app, create_test_user):
    doomed = await create_test_user(login="doomed")
    async with make_client(app) as doomed_client:
        resp = await doomed_client.post("/api/login", json={"login": "doomed", "password": PASSWORD})
        assert resp.status_code == 200

        resp = await admin_client.delete(f"/api/user/{doomed.id}")
        assert resp.status_code == 200, resp.text

        resp = await doomed_client.get("/api/actor/list")
        assert resp.status_code == 401


@pytest.mark.anyio
async def test_session_store_outage_is_server_error(user_client, mock_redis):
    mock_redis.failing.add("getex")

    resp = await user_client.get("/api/actor/list")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "An unexpected error occurred."


# ─────────────────────────────────────────────────────────────
# Logout
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_logout_deletes_session_and_cookie(user_client, mock_redis):
    token = user_client.cookies.get(COOKIE)

    resp = await user_client.post("/api/logout")

    assert resp.status_code == 200, resp.text
    assert token not in mock_redis.store
    set_cookies = resp.headers.get_list("set-cookie")
    assert len(set_cookies) == 1, set_cookies
    assert "Max-Age=0" in set_cookies[0]
    assert COOKIE not in user_client.cookies

    resp = await user_client.get("/api/actor/list")
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_logout_survives_store_failure(user_client, mock_redis):
    mock_redis.failing.add("delete")

    resp = await user_client.post("/api/logout")

    assert resp.status_code == 200
    assert "Max-Age=0" in resp.headers["set-cookie"]


@pytest.mark.anyio
async def test_logout_requires_session(async_client):
    resp = await async_client.post("/api/logout")
    assert resp.status_code == 401
