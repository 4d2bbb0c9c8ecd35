"""
API Routers

Each module exposes ``router``; app.main mounts them under /api.
"""

from app.routers import auth, categories, dishes, public, restaurants

__all__ = ["auth", "categories", "dishes", "public", "restaurants"]
