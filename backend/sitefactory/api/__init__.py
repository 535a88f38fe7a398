# backend/sitefactory/api/__init__.py
from .projects import router as projects_router
from .proxies import router as proxies_router

__all__ = ["projects_router", "proxies_router"]
