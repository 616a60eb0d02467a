from filmoteka.db.models.actor import ActorModel
from filmoteka.db.models.film import FILM_ACTOR_ACTOR_FK, FilmModel, film_actor
from filmoteka.db.models.user import UserModel

__all__ = ["ActorModel", "FilmModel", "film_actor", "FILM_ACTOR_ACTOR_FK", "UserModel"]
