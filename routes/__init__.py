"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.case_packs import router as case_packs_router
from routes.auth import router as auth_router

__all__ = [
    "case_packs_router",
    "auth_router",
]
