import pytest
from sqlalchemy import func, select

from filmoteka.core.exceptions import LoginAlreadyExists, UserNotFound
from filmoteka.db.models import UserModel
from filmoteka.domain.entities import UserDraft
from filmoteka.domain.types import Role


@pytest.mark.anyio
async def test_create_user_defaults_to_user_role(user_repo):
    user = await user_repo.create_user(UserDraft(login="alice", password_hash="hash"))

    assert user.id > 0
    assert user.login == "alice"
    assert user.role is Role.USER
    assert not user.is_admin


@pytest.mark.anyio
async def test_duplicate_login_returns_existing_user(user_repo, db_session):
    first = await user_repo.create_user(UserDraft(login="alice", password_hash="h1", role=Role.ADMIN))

    with pytest.raises(LoginAlreadyExists) as exc_info:
        await user_repo.create_user(UserDraft(login="alice", password_hash="h2", role=Role.USER))

    assert exc_info.value.user == first
    count = await db_session.scalar(select(func.count()).select_from(UserModel).where(UserModel.login == "alice"))
    assert count == 1
    creds = await user_repo.get_password_by_login("alice")
    assert creds.password_hash == "h1"


@pytest.mark.anyio
async def test_update_user_role(user_repo):
    user = await user_repo.create_user(UserDraft(login="bob", password_hash="h"))

    updated = await user_repo.update_user_role(user.id, Role.ADMIN)

    assert updated.role is Role.ADMIN
    assert (await user_repo.get_user_by_id(user.id)).is_admin


@pytest.mark.anyio
async def test_update_role_of_missing_user(user_repo):
    with pytest.raises(UserNotFound):
        await user_repo.update_user_role(404, Role.ADMIN)


@pytest.mark.anyio
async def test_delete_user(user_repo):
    user = await user_repo.create_user(UserDraft(login="carol", password_hash="h"))

    await user_repo.delete_user(user.id)

    with pytest.raises(UserNotFound):
        await user_repo.get_user_by_id(user.id)
    with pytest.raises(UserNotFound):
        await user_repo.delete_user(user.id)


@pytest.mark.anyio
async def test_get_password_by_login(user_repo):
    user = await user_repo.create_user(UserDraft(login="dave", password_hash="$2b$12$abc"))

    creds = await user_repo.get_password_by_login("dave")

    assert creds.id == user.id
    assert creds.password_hash == "$2b$12$abc"
    assert "$2b$" not in repr(creds)
    with pytest.raises(UserNotFound):
        await user_repo.get_password_by_login("nobody")


@pytest.mark.anyio
async def test_get_users_lists_everyone(user_repo):
    a = await user_repo.create_user(UserDraft(login="a", password_hash="h"))
    b = await user_repo.create_user(UserDraft(login="b", password_hash="h", role=Role.ADMIN))

    assert await user_repo.get_users() == [a, b]
