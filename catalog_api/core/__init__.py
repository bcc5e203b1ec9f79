# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Exceptions, Constants
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for the application:
- settings: Environment configuration management
- exceptions: Custom exception classes
- constants: Application-wide constants
"""

from catalog_api.core.settings import settings, get_settings, DatabaseType
from catalog_api.core.exceptions import (
    AlreadyExistsError,
    AppException,
    BadRequestError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "settings",
    "get_settings",
    "DatabaseType",
    "AlreadyExistsError",
    "AppException",
    "BadRequestError",
    "DatabaseError",
    "NotFoundError",
    "ValidationError",
]
