# Routes package __init__.py - re-exports routers for main.py convenience
from .catalog import router as catalog_router
from .items import router as items_router
from .lessons import router as lessons_router
from .user import router as user_router
from .static import router as static_router

__all__ = ['catalog_router', 'items_router', 'lessons_router', 'user_router', 'static_router']
