# tests/conftest.py
"""
Global test bootstrap
- Quiet, file-less logging before the app modules import
- Pulls in the fixtures (db, redis, app, users) so every test sees them
"""

from __future__ import annotations

import os

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (set BEFORE importing app modules so import-time config sees it)
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_TO_FILE", "0")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")

# ──────────────────────────────────────────────────────────────────────────────
# 📦 Fixtures
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.db import *          # noqa: F401,F403,E402
from tests.fixtures.redis import *       # noqa: F401,F403,E402
from tests.fixtures.app import *         # noqa: F401,F403,E402
from tests.fixtures.users import *       # noqa: F401,F403,E402
