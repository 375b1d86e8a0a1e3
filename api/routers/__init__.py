"""
Router package for the Program Conversion API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- programs: Program conversion, periodization toggle, orphan report
- clients: Linked client listing
"""

from api.routers.health import router as health_router
from api.routers.programs import router as programs_router
from api.routers.clients import router as clients_router

__all__ = [
    "health_router",
    "programs_router",
    "clients_router",
]
