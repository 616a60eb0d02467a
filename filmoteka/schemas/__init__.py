from filmoteka.schemas.actor import ActorCreate, ActorFilmOut, ActorOut, ActorUpdate, ActorWithFilmsOut
from filmoteka.schemas.common import DayDate
from filmoteka.schemas.film import FilmCreate, FilmListParams, FilmOut, FilmUpdate
from filmoteka.schemas.user import LoginRequest, RoleUpdate, UserCreate, UserOut

__all__ = [
    "DayDate",
    "ActorCreate",
    "ActorUpdate",
    "ActorOut",
    "ActorFilmOut",
    "ActorWithFilmsOut",
    "FilmCreate",
    "FilmUpdate",
    "FilmOut",
    "FilmListParams",
    "UserCreate",
    "RoleUpdate",
    "LoginRequest",
    "UserOut",
]
