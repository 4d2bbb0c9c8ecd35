"""
Core module initialization.
Exports configuration, logging utilities and domain exceptions.
"""

from app.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from app.core.exceptions import (
    AppError,
    BadRequestError,
    UnauthorizedError,
    NotFoundError,
    InternalServiceError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "AppError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "InternalServiceError",
]
