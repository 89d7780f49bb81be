"""
Top‑level router for version 1 of the API.

Domain routers are included here under their own prefix.  The
application mounts this router at the root, so reference values are
served from ``/values``.
"""

from fastapi import APIRouter

from .endpoints import values

router = APIRouter()

router.include_router(values.router, prefix="/values", tags=["values"])
