# filmoteka/api/v1/routers/actors.py
from __future__ import annotations

"""
🎭 Actors
=========
CRUD over the actor catalog.

| Method | Path                 | Who   |
|--------|----------------------|-------|
| POST   | /actor               | admin |
| PUT    | /actor/{actor_id}    | admin |
| DELETE | /actor/{actor_id}    | admin |
| GET    | /actor/list          | any logged-in user |
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from loguru import logger

from filmoteka.core.exceptions import ActorNotFound, NotFoundException
from filmoteka.dependencies import current_session, get_actor_repository, require_admin
from filmoteka.domain.entities import AuthenticatedSession
from filmoteka.repositories import ActorRepository
from filmoteka.schemas.actor import ActorCreate, ActorOut, ActorUpdate, ActorWithFilmsOut

router = APIRouter(tags=["Actors"])


@router.post(
    "/actor",
    response_model=ActorOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create an actor",
)
async def create_actor(
    payload: ActorCreate,
    _admin: AuthenticatedSession = Depends(require_admin),
    actors: ActorRepository = Depends(get_actor_repository),
) -> ActorOut:
    actor = await actors.create_actor(payload.to_draft())
    logger.info("Actor {} created", actor.id)
    return ActorOut.model_validate(actor)


@router.put("/actor/{actor_id}", response_model=ActorWithFilmsOut, summary="Update an actor (partial)")
async def update_actor(
    payload: ActorUpdate,
    actor_id: int = Path(..., ge=1),
    _admin: AuthenticatedSession = Depends(require_admin),
    actors: ActorRepository = Depends(get_actor_repository),
) -> ActorWithFilmsOut:
    try:
        actor = await actors.update_actor(actor_id, payload.to_patch())
    except ActorNotFound as exc:
        logger.info("Update of missing actor {}", actor_id)
        raise NotFoundException(str(exc)) from None
    return ActorWithFilmsOut.model_validate(actor)


@router.delete("/actor/{actor_id}", response_class=Response, summary="Delete an actor")
async def delete_actor(
    actor_id: int = Path(..., ge=1),
    _admin: AuthenticatedSession = Depends(require_admin),
    actors: ActorRepository = Depends(get_actor_repository),
) -> None:
    try:
        await actors.delete_actor(actor_id)
    except ActorNotFound as exc:
        logger.info("Delete of missing actor {}", actor_id)
        raise NotFoundException(str(exc)) from None
    logger.info("Actor {} deleted", actor_id)


@router.get("/actor/list", response_model=List[ActorWithFilmsOut], summary="List actors with their films")
async def list_actors(
    _session: AuthenticatedSession = Depends(current_session),
    actors: ActorRepository = Depends(get_actor_repository),
) -> List[ActorWithFilmsOut]:
    return [ActorWithFilmsOut.model_validate(a) for a in await actors.get_actors()]


__all__ = ["router"]
