"""Category management endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from workshop.interfaces.http.deps import get_category_service, get_db_session
from workshop.interfaces.http.errors import http_error
from workshop.modules.categories.service import CategoryService
from workshop.modules.common import WorkshopError
from workshop.schemas import CategoryCreate, CategoryResponse, CategoryUpdate

router = APIRouter()


@router.get("", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(service: CategoryService = Depends(get_category_service)):
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(category) for category in categories]


@router.get("/{category_id}", response_model=CategoryResponse, summary="Get a category")
async def get_category(category_id: str, service: CategoryService = Depends(get_category_service)):
    try:
        category = await service.get_category(category_id)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    return CategoryResponse.model_validate(category)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED, summary="Create a category")
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db_session),
    service: CategoryService = Depends(get_category_service),
):
    try:
        category = await service.create_category(payload.to_domain())
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse, summary="Update a category")
async def update_category(
    category_id: str,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db_session),
    service: CategoryService = Depends(get_category_service),
):
    try:
        category = await service.update_category(category_id, payload.to_domain())
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a category")
async def delete_category(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
    service: CategoryService = Depends(get_category_service),
):
    try:
        await service.delete_category(category_id)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
