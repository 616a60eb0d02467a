from datetime import timedelta

import pytest

from filmoteka.core.exceptions import IncorrectPassword, NoSession, RepositoryError, SessionStoreError, UserNotFound
from filmoteka.domain.entities import UserDraft
from filmoteka.domain.types import Role
from filmoteka.services.auth import EXPIRED_SESSION_TIME, SessionManager
from tests.fixtures.users import PASSWORD


@pytest.fixture()
def manager(user_repo, session_store) -> SessionManager:
    return SessionManager(user_repo, session_store)


@pytest.mark.anyio
async def test_login_then_resolve_returns_same_user(manager, create_test_user, mock_redis):
    user = await create_test_user(login="alice", role=Role.ADMIN)

    token = await manager.login("alice", PASSWORD)

    assert token
    assert await mock_redis.get(token) == str(user.id)
    assert await mock_redis.ttl(token) == int(EXPIRED_SESSION_TIME.total_seconds())
    assert await manager.get_user(token) == user


@pytest.mark.anyio
async def test_each_login_gets_a_fresh_token(manager, create_test_user):
    await create_test_user(login="alice")

    assert await manager.login("alice", PASSWORD) != await manager.login("alice", PASSWORD)


@pytest.mark.anyio
async def test_wrong_password(manager, create_test_user, mock_redis):
    await create_test_user(login="alice")

    with pytest.raises(IncorrectPassword):
        await manager.login("alice", "not the password")

    assert mock_redis.store == {}


@pytest.mark.anyio
async def test_unknown_login(manager):
    with pytest.raises(UserNotFound):
        await manager.login("ghost", PASSWORD)


@pytest.mark.anyio
async def test_logout_ends_session(manager, create_test_user):
    await create_test_user(login="alice")
    token = await manager.login("alice", PASSWORD)

    await manager.logout(token)

    with pytest.raises(NoSession):
        await manager.get_user(token)


@pytest.mark.anyio
async def test_logout_propagates_store_failure(manager, mock_redis):
    mock_redis.failing.add("delete")

    with pytest.raises(SessionStoreError):
        await manager.logout("tok")


@pytest.mark.anyio
async def test_deleted_user_session_self_heals(manager, create_test_user, user_repo, mock_redis):
    user = await create_test_user(login="alice")
    token = await manager.login("alice", PASSWORD)
    await user_repo.delete_user(user.id)

    with pytest.raises(NoSession):
        await manager.get_user(token)
    assert token not in mock_redis.store

    # second check fails in the store without reaching the user lookup
    with pytest.raises(NoSession):
        await manager.get_user(token)


@pytest.mark.anyio
async def test_orphaned_session_is_no_session_even_if_store_delete_fails(
    manager, create_test_user, user_repo, mock_redis
):
    user = await create_test_user(login="ghost")
    token = await manager.login("ghost", PASSWORD)
    await user_repo.delete_user(user.id)
    mock_redis.failing.add("delete")

    with pytest.raises(NoSession):
        await manager.get_user(token)
    assert token in mock_redis.store


@pytest.mark.anyio
async def test_corrupt_password_hash_is_repository_error(manager, user_repo, mock_redis):
    await user_repo.create_user(UserDraft(login="broken", password_hash="not-a-bcrypt-hash"))

    with pytest.raises(RepositoryError) as excinfo:
        await manager.login("broken", PASSWORD)

    assert not isinstance(excinfo.value, IncorrectPassword)
    assert mock_redis.store == {}


@pytest.mark.anyio
async def test_get_user_refreshes_ttl(user_repo, session_store, create_test_user, mock_redis):
    manager = SessionManager(user_repo, session_store, ttl=timedelta(seconds=30))
    now = 1_000_000.0
    mock_redis.clock = lambda: now
    await create_test_user(login="alice")
    token = await manager.login("alice", PASSWORD)

    mock_redis.clock = lambda: now + 20
    await manager.get_user(token)

    assert await mock_redis.ttl(token) == 30
