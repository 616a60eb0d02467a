from filmoteka.repositories.actor import ActorRepository
from filmoteka.repositories.film import FilmRepository
from filmoteka.repositories.session import RedisSessionStore
from filmoteka.repositories.user import UserRepository

__all__ = ["ActorRepository", "FilmRepository", "UserRepository", "RedisSessionStore"]
