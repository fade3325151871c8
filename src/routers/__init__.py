"""
API routers for endpoint organization.
"""
from .health import router as health_router
from .analysis import router as analysis_router

__all__ = [
    "health_router",
    "analysis_router",
]
