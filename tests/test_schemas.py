from datetime import date

import pytest
from pydantic import ValidationError

from filmoteka.domain.entities import ActorWithFilms, Film
from filmoteka.domain.types import UNSET, Order, OrderField, SearchField, Sex, is_set
from filmoteka.schemas import ActorUpdate, ActorWithFilmsOut, FilmListParams, FilmUpdate


def test_actor_update_only_carries_supplied_fields():
    patch = ActorUpdate.model_validate({"birthday": "27.12.1995", "name": None}).to_patch()

    assert patch.birthday == date(1995, 12, 27)
    assert patch.name is UNSET
    assert patch.sex is UNSET


def test_film_update_distinguishes_absent_and_empty_actor_list():
    assert not FilmUpdate.model_validate({"rating": 3}).to_patch().update_actors

    patch = FilmUpdate.model_validate({"actors": [], "data_publish": "01.02.2003"}).to_patch()
    assert patch.update_actors
    assert patch.actors == []
    assert patch.publish_date == date(2003, 2, 1)
    assert not is_set(patch.name)


def test_dates_serialize_as_day_month_year():
    actor = ActorWithFilms(
        id=1,
        name="Zendaya",
        sex=Sex.FEMALE,
        birthday=date(1996, 9, 1),
        films=[Film(id=2, name="Dune", description="", publish_date=date(2021, 9, 3), rating=8)],
    )

    dumped = ActorWithFilmsOut.model_validate(actor).model_dump(mode="json")

    assert dumped["birthday"] == "01.09.1996"
    assert dumped["films"][0]["data_publish"] == "03.09.2021"


def test_film_list_params_defaults():
    query = FilmListParams().to_query()

    assert query.search_string == "*"
    assert query.pattern == ""
    assert query.search_field is SearchField.FILM
    assert query.order_field is OrderField.RATING
    assert query.order is Order.DESC


def test_film_list_params_reject_unknown_sort():
    with pytest.raises(ValidationError):
        FilmListParams(sort_by="id")
