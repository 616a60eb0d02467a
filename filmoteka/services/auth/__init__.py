from filmoteka.services.auth.session_manager import EXPIRED_SESSION_TIME, SessionManager

__all__ = ["SessionManager", "EXPIRED_SESSION_TIME"]
