from datetime import date

import pytest

from filmoteka.core.exceptions import ActorNotFound
from filmoteka.domain.entities import ActorDraft, ActorPatch, FilmDraft, FilmQuery
from filmoteka.domain.types import Sex


def _draft(name: str = "Timothée", sex: Sex = Sex.MALE, birthday: date = date(2002, 2, 12)) -> ActorDraft:
    return ActorDraft(name=name, sex=sex, birthday=birthday)


@pytest.mark.anyio
async def test_create_actor_echoes_fields_with_new_id(actor_repo):
    actor = await actor_repo.create_actor(_draft())

    assert actor.id > 0
    assert actor.name == "Timothée"
    assert actor.sex is Sex.MALE
    assert actor.birthday == date(2002, 2, 12)


@pytest.mark.anyio
async def test_create_actor_assigns_distinct_ids(actor_repo):
    first = await actor_repo.create_actor(_draft("A"))
    second = await actor_repo.create_actor(_draft("B"))
    assert first.id != second.id


@pytest.mark.anyio
async def test_update_with_empty_patch_is_identity(actor_repo):
    actor = await actor_repo.create_actor(_draft())

    updated = await actor_repo.update_actor(actor.id, ActorPatch())

    assert (updated.id, updated.name, updated.sex, updated.birthday) == (
        actor.id,
        actor.name,
        actor.sex,
        actor.birthday,
    )
    assert updated.films == []


@pytest.mark.anyio
async def test_update_changes_only_supplied_fields(actor_repo):
    actor = await actor_repo.create_actor(_draft())

    updated = await actor_repo.update_actor(actor.id, ActorPatch(name="Timothée Chalamet"))

    assert updated.name == "Timothée Chalamet"
    assert updated.sex is Sex.MALE
    assert updated.birthday == date(2002, 2, 12)

    [stored] = await actor_repo.get_actors()
    assert stored.name == "Timothée Chalamet"


@pytest.mark.anyio
async def test_update_returns_current_films(actor_repo, film_repo):
    actor = await actor_repo.create_actor(_draft())
    film = await film_repo.create_film(
        FilmDraft(name="Dune", description="", publish_date=date(2021, 9, 3), rating=8),
        [actor.id],
    )

    updated = await actor_repo.update_actor(actor.id, ActorPatch(sex=Sex.FEMALE))

    assert updated.sex is Sex.FEMALE
    assert [f.id for f in updated.films] == [film.id]


@pytest.mark.anyio
async def test_update_missing_actor_raises_not_found(actor_repo):
    with pytest.raises(ActorNotFound):
        await actor_repo.update_actor(999, ActorPatch(name="Nobody"))


@pytest.mark.anyio
async def test_delete_actor_removes_row_and_links(actor_repo, film_repo):
    actor = await actor_repo.create_actor(_draft())
    film = await film_repo.create_film(
        FilmDraft(name="Dune", description="", publish_date=date(2021, 9, 3), rating=8),
        [actor.id],
    )

    await actor_repo.delete_actor(actor.id)

    assert await actor_repo.get_actors() == []
    [stored] = await film_repo.get_films(FilmQuery())
    assert stored.id == film.id
    assert stored.actors == []


@pytest.mark.anyio
async def test_delete_missing_actor_raises_not_found_and_keeps_rows(actor_repo):
    actor = await actor_repo.create_actor(_draft())

    with pytest.raises(ActorNotFound):
        await actor_repo.delete_actor(actor.id + 100)

    assert [a.id for a in await actor_repo.get_actors()] == [actor.id]


@pytest.mark.anyio
async def test_get_actors_groups_films_in_actor_order(actor_repo, film_repo):
    a1 = await actor_repo.create_actor(_draft("First"))
    a2 = await actor_repo.create_actor(_draft("Second", Sex.FEMALE))
    a3 = await actor_repo.create_actor(_draft("Third"))
    f1 = await film_repo.create_film(
        FilmDraft(name="One", description="", publish_date=date(2000, 1, 1), rating=5), [a1.id, a2.id]
    )
    f2 = await film_repo.create_film(
        FilmDraft(name="Two", description="", publish_date=date(2001, 1, 1), rating=6), [a1.id]
    )

    listed = await actor_repo.get_actors()

    assert [a.id for a in listed] == [a1.id, a2.id, a3.id]
    assert [f.id for f in listed[0].films] == [f1.id, f2.id]
    assert [f.id for f in listed[1].films] == [f1.id]
    assert listed[2].films == []


@pytest.mark.anyio
async def test_get_actors_empty(actor_repo):
    assert await actor_repo.get_actors() == []
