# filmoteka/api/v1/routers/films.py
from __future__ import annotations

"""
🎬 Films
========
CRUD over films and their casts, plus the searchable/sortable listing.

`GET /film/list` query parameters
--------------------------------
- `search_string`: substring to look for; `*` (default) matches everything.
- `search_by`: `film` (film name, default) or `actor` (any cast member's name).
- `sort_by`: `rating` (default), `name`, `publish_date`.
- `sort_order`: `ASC` / `DESC` (default), any letter case.

Unknown values are rejected with 400 before any query is built; only enum
members ever reach the ORDER BY clause.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response, status
from loguru import logger
from pydantic import ValidationError

from filmoteka.core.exceptions import (
    ActorNotFound,
    BadRequestException,
    ConflictException,
    FilmNotFound,
    NotFoundException,
)
from filmoteka.dependencies import current_session, get_film_repository, require_admin
from filmoteka.domain.entities import AuthenticatedSession
from filmoteka.domain.types import SEARCH_ALL
from filmoteka.repositories import FilmRepository
from filmoteka.schemas.film import FilmCreate, FilmListParams, FilmOut, FilmUpdate

router = APIRouter(tags=["Films"])


def film_list_params(
    search_string: str = Query(SEARCH_ALL, description="Substring to search for; `*` matches everything"),
    search_by: str = Query("film", description="film | actor"),
    sort_by: str = Query("rating", description="rating | name | publish_date"),
    sort_order: str = Query("DESC", description="ASC | DESC"),
) -> FilmListParams:
    try:
        return FilmListParams(
            search_string=search_string,
            search_by=search_by,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except ValidationError as exc:
        raise BadRequestException(
            details=[{"loc": e["loc"], "msg": e["msg"]} for e in exc.errors(include_url=False)],
        ) from None


@router.post(
    "/film",
    response_model=FilmOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a film with its cast",
)
async def create_film(
    payload: FilmCreate,
    _admin: AuthenticatedSession = Depends(require_admin),
    films: FilmRepository = Depends(get_film_repository),
) -> FilmOut:
    try:
        film = await films.create_film(payload.to_draft(), payload.actors)
    except ActorNotFound as exc:
        logger.info("Film create references unknown actor(s) {}", payload.actors)
        raise ConflictException(str(exc)) from None
    logger.info("Film {} created", film.id)
    return FilmOut.model_validate(film)


@router.put("/film/{film_id}", response_model=FilmOut, summary="Update a film (partial)")
async def update_film(
    payload: FilmUpdate,
    film_id: int = Path(..., ge=1),
    _admin: AuthenticatedSession = Depends(require_admin),
    films: FilmRepository = Depends(get_film_repository),
) -> FilmOut:
    try:
        film = await films.update_film(film_id, payload.to_patch())
    except FilmNotFound as exc:
        logger.info("Update of missing film {}", film_id)
        raise NotFoundException(str(exc)) from None
    except ActorNotFound as exc:
        logger.info("Film {} update references unknown actor(s) {}", film_id, payload.actors)
        raise ConflictException(str(exc)) from None
    return FilmOut.model_validate(film)


@router.delete("/film/{film_id}", response_class=Response, summary="Delete a film")
async def delete_film(
    film_id: int = Path(..., ge=1),
    _admin: AuthenticatedSession = Depends(require_admin),
    films: FilmRepository = Depends(get_film_repository),
) -> None:
    try:
        await films.delete_film(film_id)
    except FilmNotFound as exc:
        logger.info("Delete of missing film {}", film_id)
        raise NotFoundException(str(exc)) from None
    logger.info("Film {} deleted", film_id)


@router.get("/film/list", response_model=List[FilmOut], summary="Search and sort films")
async def list_films(
    _session: AuthenticatedSession = Depends(current_session),
    params: FilmListParams = Depends(film_list_params),
    films: FilmRepository = Depends(get_film_repository),
) -> List[FilmOut]:
    return [FilmOut.model_validate(f) for f in await films.get_films(params.to_query())]


__all__ = ["router"]
