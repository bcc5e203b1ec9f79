# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

"""
API Module
==========

FastAPI routers and endpoint definitions:
- Dependencies: Database access, services, shared query parameters
- Routers: Products, Categories
"""

from catalog_api.api.router import api_router

__all__ = ["api_router"]
