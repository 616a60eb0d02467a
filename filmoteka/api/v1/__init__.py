"""Versioned API (v1).

Import the aggregated router from the routers subpackage:

    from filmoteka.api.v1.routers import build_v1_router
"""

__all__ = []
