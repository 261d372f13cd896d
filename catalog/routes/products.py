"""Product endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from catalog.configs import API_PREFIX, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from catalog.decorators import timed
from catalog.dependencies import MediatorDep
from catalog.managers.rate_limiter import limiter
from catalog.routes.responses import result_response
from catalog.schemas import (
    CreateProductCommand,
    DeleteProductCommand,
    DeleteProductResponse,
    GetAllProductsQuery,
    GetFilteredProductsQuery,
    GetProductByIdQuery,
    PaginatedResult,
    ProductCreate,
    ProductDto,
    ProductUpdate,
    Result,
    UpdateProductCommand,
)

router = APIRouter(prefix=f"{API_PREFIX}/products", tags=["📦 Products"])


def get_product_filters(
    search_term: Annotated[str | None, Query(alias="searchTerm", max_length=200)] = None,
    min_stock_quantity: Annotated[int | None, Query(alias="minStockQuantity", ge=0)] = None,
    max_stock_quantity: Annotated[int | None, Query(alias="maxStockQuantity", ge=0)] = None,
    is_live: Annotated[bool | None, Query(alias="isLive")] = None,
    category_id: Annotated[UUID | None, Query(alias="categoryId")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> GetFilteredProductsQuery:
    """Collect the filter query parameters (camelCase on the wire)."""
    return GetFilteredProductsQuery(
        search_term=search_term,
        min_stock_quantity=min_stock_quantity,
        max_stock_quantity=max_stock_quantity,
        is_live=is_live,
        category_id=category_id,
        page=page,
        page_size=page_size,
    )


@router.post(
    "",
    response_model=Result[ProductDto],
    status_code=HTTP_201_CREATED,
    summary="Create a product",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("30/minute")
async def create_product(
    request: Request,
    body: ProductCreate,
    mediator: MediatorDep,
) -> ORJSONResponse:
    """
    Create a product in an existing category.

    Parameters
    ----------
    request : Request
        Current request context.
    body : ProductCreate
        Title, optional description, category and initial stock.
    mediator : Mediator
        Request dispatcher.

    Returns
    -------
    ORJSONResponse
        201 with the created product; 400 on validation failure; 404 when
        the category does not exist.
    """
    result = await mediator.send(
        CreateProductCommand(
            title=body.title,
            description=body.description,
            category_id=body.category_id,
            stock_quantity=body.stock_quantity,
        ),
    )
    headers = {"Location": f"{router.prefix}/{result.data.id}"} if result.is_success else None
    return result_response(result, write=True, success_status=HTTP_201_CREATED, headers=headers)


@router.get(
    "",
    response_model=Result[PaginatedResult[ProductDto]],
    summary="List products with filters",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("60/minute")
async def get_filtered_products(
    request: Request,
    filters: Annotated[GetFilteredProductsQuery, Depends(get_product_filters)],
    mediator: MediatorDep,
) -> ORJSONResponse:
    """
    Search, filter and page through products.

    Filters combine with AND; the search term matches title, description
    or category name, case-insensitively.
    """
    return result_response(await mediator.send(filters))


@router.get(
    "/all",
    response_model=Result[list[ProductDto]],
    summary="List every product",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("30/minute")
async def get_all_products(request: Request, mediator: MediatorDep) -> ORJSONResponse:
    return result_response(await mediator.send(GetAllProductsQuery()))


@router.get(
    "/{product_id}",
    response_model=Result[ProductDto],
    summary="Get a product by ID",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("60/minute")
async def get_product(request: Request, product_id: UUID, mediator: MediatorDep) -> ORJSONResponse:
    return result_response(await mediator.send(GetProductByIdQuery(id=product_id)))


@router.put(
    "/{product_id}",
    response_model=Result[ProductDto],
    summary="Update a product",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("30/minute")
async def update_product(
    request: Request,
    product_id: UUID,
    body: ProductUpdate,
    mediator: MediatorDep,
) -> ORJSONResponse:
    """Partially update a product; omitted fields keep their value."""
    result = await mediator.send(
        UpdateProductCommand(
            id=product_id,
            title=body.title,
            description=body.description,
            category_id=body.category_id,
            stock_quantity=body.stock_quantity,
        ),
    )
    return result_response(result, write=True)


@router.delete(
    "/{product_id}",
    response_model=DeleteProductResponse,
    summary="Delete a product",
    response_class=ORJSONResponse,
)
@timed()
@limiter.limit("30/minute")
async def delete_product(request: Request, product_id: UUID, mediator: MediatorDep) -> ORJSONResponse:
    result = await mediator.send(DeleteProductCommand(id=product_id))
    if not result.is_success:
        return result_response(result, write=True)
    return ORJSONResponse(content=DeleteProductResponse().model_dump())
