from filmoteka.dependencies.auth import current_session, ensure_no_session, require_admin
from filmoteka.dependencies.providers import (
    get_actor_repository,
    get_container,
    get_film_repository,
    get_session_manager,
    get_settings,
    get_user_repository,
)

__all__ = [
    "current_session",
    "ensure_no_session",
    "require_admin",
    "get_container",
    "get_settings",
    "get_actor_repository",
    "get_film_repository",
    "get_user_repository",
    "get_session_manager",
]
