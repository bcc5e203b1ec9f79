# ==============================================================================
# PRODUCTS ENDPOINTS - Catalog Product Routes
# ==============================================================================
# CRUD endpoints with ``include`` support for relations and components
# ==============================================================================

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from fastapi import APIRouter, Path, Query, status

from catalog_api.api.dependencies import IncludeQuery, ProductServiceDep, SortOrderQuery
from catalog_api.core.constants import ErrorMessages, SuccessMessages
from catalog_api.core.exceptions import NotFoundError
from catalog_api.domain_models.enums import ProductType
from catalog_api.schemas.base import APIResponse
from catalog_api.schemas.product import ProductCreate, ProductUpdate

router = APIRouter(prefix="/products", tags=["Products"])

RESOURCE = "Product"
RESOURCES = "Products"

ProductId = Annotated[int, Path(ge=1, description="Product ID")]


def _not_found(product_id: int) -> NotFoundError:
    return NotFoundError(
        message=ErrorMessages.RESOURCE_NOT_FOUND.format(resource=RESOURCE, id=product_id),
        resource_type=RESOURCE,
        resource_id=product_id,
    )


@router.get(
    "",
    response_model=APIResponse[List[Dict[str, Any]]],
    summary="List products",
    description="Retrieve all products with optional relations (categories, components).",
)
async def list_products(
    service: ProductServiceDep,
    include: IncludeQuery = None,
    type: Annotated[Optional[ProductType], Query(description="Product type")] = None,
    sku: Annotated[Optional[str], Query(description="Stock Keeping Unit")] = None,
    slug: Annotated[Optional[str], Query(description="URL slug")] = None,
    is_premium: Annotated[Optional[bool], Query(description="Premium-only products")] = None,
    sort_by: Annotated[Optional[str], Query(description="Field to sort by")] = None,
    sort_order: SortOrderQuery = "asc",
) -> APIResponse[List[Dict[str, Any]]]:
    """List products."""
    filters = {
        key: value
        for key, value in {
            "type": type,
            "sku": sku,
            "slug": slug,
            "is_premium": is_premium,
        }.items()
        if value is not None
    }
    products = await service.find_all(
        include=include,
        filters=filters or None,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return APIResponse.ok(
        data=products,
        message=SuccessMessages.RESOURCES_RETRIEVED.format(resource=RESOURCES),
    )


@router.get(
    "/{product_id}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Get product by ID",
    description="Retrieve a single product by ID with optional relations.",
)
async def get_product(
    product_id: ProductId,
    service: ProductServiceDep,
    include: IncludeQuery = None,
) -> APIResponse[Dict[str, Any]]:
    """Get product by ID."""
    product = await service.find_by_id(product_id, include=include)
    if product is None:
        raise _not_found(product_id)
    return APIResponse.ok(
        data=product,
        message=SuccessMessages.RESOURCES_RETRIEVED.format(resource=RESOURCE),
    )


@router.post(
    "",
    response_model=APIResponse[Dict[str, Any]],
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(
    schema: ProductCreate,
    service: ProductServiceDep,
) -> APIResponse[Dict[str, Any]]:
    """Create a product. SKU, slug and order are unique."""
    product = await service.create(schema)
    return APIResponse.ok(
        data=product,
        message=SuccessMessages.RESOURCE_CREATED.format(resource=RESOURCE),
    )


async def _update(
    product_id: int,
    schema: ProductUpdate,
    service: ProductServiceDep,
) -> APIResponse[Dict[str, Any]]:
    product = await service.update(product_id, schema)
    if product is None:
        raise _not_found(product_id)
    return APIResponse.ok(
        data=product,
        message=SuccessMessages.RESOURCE_UPDATED.format(resource=RESOURCE),
    )


@router.put(
    "/{product_id}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Update product",
)
async def update_product(
    product_id: ProductId,
    schema: ProductUpdate,
    service: ProductServiceDep,
) -> APIResponse[Dict[str, Any]]:
    """Update a product."""
    return await _update(product_id, schema, service)


@router.patch(
    "/{product_id}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Partially update product",
)
async def patch_product(
    product_id: ProductId,
    schema: ProductUpdate,
    service: ProductServiceDep,
) -> APIResponse[Dict[str, Any]]:
    """Partially update a product."""
    return await _update(product_id, schema, service)


@router.delete(
    "/{product_id}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Delete product",
    description="Delete a product and return the removed record.",
)
async def delete_product(
    product_id: ProductId,
    service: ProductServiceDep,
) -> APIResponse[Dict[str, Any]]:
    """Delete a product."""
    product = await service.find_by_id(product_id)
    if product is None:
        raise _not_found(product_id)
    await service.delete(product_id)
    return APIResponse.ok(
        data=product,
        message=SuccessMessages.RESOURCE_DELETED.format(resource=RESOURCE),
    )
