"""
                        Services Module

Business logic behind the API routers.

Services:
    - auth: Email verification codes, sessions, maintenance purge
    - ownership: Ownership guard for restaurant-scoped resources
    - menu: Restaurant / category / dish management and the public menu
    - notifications: Mock and SendGrid email delivery
"""

from app.services.auth import AuthConfig, AuthService
from app.services.menu import MenuService

__all__ = ["AuthConfig", "AuthService", "MenuService"]
