# ==============================================================================
# CATALOG API PACKAGE INITIALIZATION
# ==============================================================================
# Catalog REST backend with FastAPI and SQLAlchemy
# Supports: SQLite, PostgreSQL
# Architecture: Adapter Pattern, Generic Service, Component Registry
# ==============================================================================

"""
Catalog API
===========

A FastAPI backend exposing catalog resources (products, categories)
through a generic service layer.

Features:
---------
- ``include`` query parameter for eager loading nested relations
- Polymorphic components resolved in batches onto their owners
- SQLite and PostgreSQL through the same adapter contract
- Request logging and uniform error envelopes

Usage:
------
    from catalog_api.main import app

    # Run with uvicorn
    uvicorn catalog_api.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
