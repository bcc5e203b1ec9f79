# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# Organized by category for easy maintenance
# ==============================================================================

from __future__ import annotations

import re
from typing import Final, Pattern


# ==============================================================================
# API CONSTANTS
# ==============================================================================

class APIConstants:
    """API-related constants."""

    REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
    RESPONSE_TIME_HEADER: Final[str] = "X-Response-Time"


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Database-related constants."""

    # Collection/Table names
    PRODUCTS_COLLECTION: Final[str] = "products"
    CATEGORIES_COLLECTION: Final[str] = "categories"
    PRODUCT_COMPONENTS_COLLECTION: Final[str] = "products_cmps"
    CATEGORY_COMPONENTS_COLLECTION: Final[str] = "categories_cmps"
    FULL_PRICES_COLLECTION: Final[str] = "components_products_full_prices"
    CARD_TAGS_COLLECTION: Final[str] = "components_cards_card_tags"

    # Name of the synthetic relation holding component link rows
    COMPONENTS_RELATION: Final[str] = "components"


# ==============================================================================
# INCLUDE PARAMETER CONSTANTS
# ==============================================================================

class IncludeConstants:
    """Defaults and patterns for the ``include`` query parameter."""

    MAX_DEPTH: Final[int] = 3
    MAX_RELATIONS: Final[int] = 10
    SEPARATOR: Final[str] = ","
    NESTED_SEPARATOR: Final[str] = "."

    DANGEROUS_CHARS: Final[Pattern[str]] = re.compile(r"[;'\"\\]")


# ==============================================================================
# MESSAGE TEMPLATES
# ==============================================================================

class ErrorMessages:
    """Standard error messages."""

    INVALID_INCLUDE_CHARACTERS: Final[str] = (
        "Include parameter contains invalid characters. "
        "Only alphanumeric, dots, and underscores are allowed"
    )
    MAX_RELATIONS_EXCEEDED: Final[str] = (
        "Cannot include more than {max_relations} relations at once. Found: {found}"
    )
    INVALID_RELATION_FORMAT: Final[str] = (
        "Invalid relation format: '{relation}'. "
        "Only alphanumeric characters, underscores and '{separator}' are allowed"
    )
    MAX_DEPTH_EXCEEDED: Final[str] = (
        "Include depth cannot exceed {max_depth} levels. Found: {depth} levels"
    )
    INTERNAL_RELATION: Final[str] = (
        "'{name}' cannot be included; request components by their name instead"
    )
    RESOURCE_NOT_FOUND: Final[str] = "{resource} with ID {id} not found"
    RESOURCE_ALREADY_EXISTS: Final[str] = "{resource} with {field} '{value}' already exists"
    INTERNAL_ERROR: Final[str] = "An unexpected error occurred"


class SuccessMessages:
    """Standard success messages."""

    RESOURCES_RETRIEVED: Final[str] = "{resource} retrieved successfully"
    RESOURCE_CREATED: Final[str] = "{resource} created successfully"
    RESOURCE_UPDATED: Final[str] = "{resource} updated successfully"
    RESOURCE_DELETED: Final[str] = "{resource} deleted successfully"
