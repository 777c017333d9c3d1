"""
app/api/routers package marker.
"""

from app.api.routers.analytics import router as analytics_router
from app.api.routers.imports import router as imports_router

__all__ = [
    "analytics_router",
    "imports_router",
]
