# ==============================================================================
# CATEGORIES ENDPOINTS - Catalog Category Routes
# ==============================================================================

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from fastapi import APIRouter, Path, Query, status

from catalog_api.api.dependencies import CategoryServiceDep, IncludeQuery, SortOrderQuery
from catalog_api.core.constants import ErrorMessages, SuccessMessages
from catalog_api.core.exceptions import NotFoundError
from catalog_api.schemas.base import APIResponse
from catalog_api.schemas.category import CategoryCreate, CategoryUpdate

router = APIRouter(prefix="/categories", tags=["Categories"])

RESOURCE = "Category"
RESOURCES = "Categories"

CategoryId = Annotated[int, Path(ge=1, description="Category ID")]


def _not_found(category_id: int) -> NotFoundError:
    return NotFoundError(
        message=ErrorMessages.RESOURCE_NOT_FOUND.format(resource=RESOURCE, id=category_id),
        resource_type=RESOURCE,
        resource_id=category_id,
    )


@router.get(
    "",
    response_model=APIResponse[List[Dict[str, Any]]],
    summary="List categories",
    description="Retrieve all categories with optional relations (products, components).",
)
async def list_categories(
    service: CategoryServiceDep,
    include: IncludeQuery = None,
    slug: Annotated[Optional[str], Query(description="URL slug")] = None,
    locale: Annotated[Optional[str], Query(description="Content locale")] = None,
    sort_by: Annotated[Optional[str], Query(description="Field to sort by")] = None,
    sort_order: SortOrderQuery = "asc",
) -> APIResponse[List[Dict[str, Any]]]:
    """List categories."""
    filters = {
        key: value
        for key, value in {"slug": slug, "locale": locale}.items()
        if value is not None
    }
    categories = await service.find_all(
        include=include,
        filters=filters or None,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return APIResponse.ok(
        data=categories,
        message=SuccessMessages.RESOURCES_RETRIEVED.format(resource=RESOURCES),
    )


@router.get(
    "/{category_id}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Get category by ID",
)
async def get_category(
    category_id: CategoryId,
    service: CategoryServiceDep,
    include: IncludeQuery = None,
) -> APIResponse[Dict[str, Any]]:
    """Get category by ID."""
    category = await service.find_by_id(category_id, include=include)
    if category is None:
        raise _not_found(category_id)
    return APIResponse.ok(
        data=category,
        message=SuccessMessages.RESOURCES_RETRIEVED.format(resource=RESOURCE),
    )


@router.post(
    "",
    response_model=APIResponse[Dict[str, Any]],
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(
    schema: CategoryCreate,
    service: CategoryServiceDep,
) -> APIResponse[Dict[str, Any]]:
    """Create a category. Slugs are unique."""
    category = await service.create(schema)
    return APIResponse.ok(
        data=category,
        message=SuccessMessages.RESOURCE_CREATED.format(resource=RESOURCE),
    )


async def _update(
    category_id: int,
    schema: CategoryUpdate,
    service: CategoryServiceDep,
) -> APIResponse[Dict[str, Any]]:
    category = await service.update(category_id, schema)
    if category is None:
        raise _not_found(category_id)
    return APIResponse.ok(
        data=category,
        message=SuccessMessages.RESOURCE_UPDATED.format(resource=RESOURCE),
    )


@router.put(
    "/{category_id}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Update category",
)
async def update_category(
    category_id: CategoryId,
    schema: CategoryUpdate,
    service: CategoryServiceDep,
) -> APIResponse[Dict[str, Any]]:
    """Update a category."""
    return await _update(category_id, schema, service)


@router.patch(
    "/{category_id}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Partially update category",
)
async def patch_category(
    category_id: CategoryId,
    schema: CategoryUpdate,
    service: CategoryServiceDep,
) -> APIResponse[Dict[str, Any]]:
    return await _update(category_id, schema, service)


@router.delete(
    "/{category_id}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Delete category",
)
async def delete_category(
    category_id: CategoryId,
    service: CategoryServiceDep,
) -> APIResponse[Dict[str, Any]]:
    """Delete a category and return the removed record."""
    category = await service.find_by_id(category_id)
    if category is None:
        raise _not_found(category_id)
    await service.delete(category_id)
    return APIResponse.ok(
        data=category,
        message=SuccessMessages.RESOURCE_DELETED.format(resource=RESOURCE),
    )
