# filmoteka/core/security.py
from __future__ import annotations

"""
Filmoteka: Password & Session Token Helpers
============================================
- bcrypt hashing via Passlib (salted, cost-factored)
- Opaque session tokens (UUID4, 128 bits of randomness)
"""

from uuid import uuid4

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ───────────────────────────────────────────────
# 🔐 Password Hashing Utilities
# ───────────────────────────────────────────────
def get_password_hash(password: str) -> str:
    """Return a salted hash using Passlib's bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time verify of a plaintext password against a stored hash.

    Raises `ValueError` when the stored value is not a bcrypt hash.
    """
    return pwd_context.verify(plain_password, hashed_password)


# ───────────────────────────────────────────────
# 🎟️ Session tokens
# ───────────────────────────────────────────────
def new_session_token() -> str:
    """Random opaque token for the session cookie."""
    return str(uuid4())


__all__ = ["pwd_context", "get_password_hash", "verify_password", "new_session_token"]
