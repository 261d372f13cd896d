"""Category endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from catalog.configs import API_PREFIX, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from catalog.decorators import timed
from catalog.dependencies import MediatorDep
from catalog.managers.rate_limiter import limiter
from catalog.routes.responses import result_response
from catalog.schemas import (
    CategoryCreate,
    CategoryDto,
    CategoryUpdate,
    CreateCategoryCommand,
    DeleteCategoryCommand,
    GetAllCategoriesQuery,
    GetCategoryByIdQuery,
    PaginatedResult,
    Result,
    UpdateCategoryCommand,
)

router = APIRouter(prefix=f"{API_PREFIX}/categories", tags=["🗂️ Categories"])


@router.get(
    "",
    response_model=Result[PaginatedResult[CategoryDto]],
    summary="List categories",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("60/minute")
async def get_categories(
    request: Request,
    mediator: MediatorDep,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> ORJSONResponse:
    return result_response(
        await mediator.send(GetAllCategoriesQuery(page=page, page_size=page_size)),
    )


@router.get(
    "/{category_id}",
    response_model=Result[CategoryDto],
    summary="Get a category by ID",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("60/minute")
async def get_category(request: Request, category_id: UUID, mediator: MediatorDep) -> ORJSONResponse:
    return result_response(await mediator.send(GetCategoryByIdQuery(id=category_id)))


@router.post(
    "",
    response_model=Result[CategoryDto],
    status_code=HTTP_201_CREATED,
    summary="Create a category",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("10/minute")
async def create_category(
    request: Request,
    body: CategoryCreate,
    mediator: MediatorDep,
) -> ORJSONResponse:
    """
    Create a category.

    Returns
    -------
    ORJSONResponse
        201 with the category; 400 when the name is invalid or already taken.
    """
    result = await mediator.send(
        CreateCategoryCommand(name=body.name, minimum_stock_quantity=body.minimum_stock_quantity),
    )
    headers = {"Location": f"{router.prefix}/{result.data.id}"} if result.is_success else None
    return result_response(result, write=True, success_status=HTTP_201_CREATED, headers=headers)


@router.put(
    "/{category_id}",
    response_model=Result[CategoryDto],
    summary="Update a category",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("10/minute")
async def update_category(
    request: Request,
    category_id: UUID,
    body: CategoryUpdate,
    mediator: MediatorDep,
) -> ORJSONResponse:
    """Partially update a category; a new minimum stock re-evaluates its products."""
    result = await mediator.send(
        UpdateCategoryCommand(
            id=category_id,
            name=body.name,
            minimum_stock_quantity=body.minimum_stock_quantity,
        ),
    )
    return result_response(result, write=True)


@router.delete(
    "/{category_id}",
    response_model=Result[bool],
    summary="Delete an empty category",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("10/minute")
async def delete_category(request: Request, category_id: UUID, mediator: MediatorDep) -> ORJSONResponse:
    return result_response(await mediator.send(DeleteCategoryCommand(id=category_id)), write=True)
