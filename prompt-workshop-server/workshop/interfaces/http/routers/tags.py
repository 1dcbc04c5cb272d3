"""Tag management endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from workshop.interfaces.http.deps import get_db_session, get_tag_service
from workshop.interfaces.http.errors import http_error
from workshop.modules.common import WorkshopError
from workshop.modules.tags.service import TagService
from workshop.schemas import TagCreate, TagResponse, TagUpdate

router = APIRouter()


@router.get("", response_model=list[TagResponse], summary="List tags")
async def list_tags(service: TagService = Depends(get_tag_service)):
    tags = await service.list_tags()
    return [TagResponse.model_validate(tag) for tag in tags]


@router.get("/{tag_id}", response_model=TagResponse, summary="Get a tag")
async def get_tag(tag_id: str, service: TagService = Depends(get_tag_service)):
    try:
        tag = await service.get_tag(tag_id)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    return TagResponse.model_validate(tag)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED, summary="Create a tag")
async def create_tag(
    payload: TagCreate,
    db: AsyncSession = Depends(get_db_session),
    service: TagService = Depends(get_tag_service),
):
    try:
        tag = await service.create_tag(payload.to_domain())
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
    return TagResponse.model_validate(tag)


@router.put("/{tag_id}", response_model=TagResponse, summary="Update a tag")
async def update_tag(
    tag_id: str,
    payload: TagUpdate,
    db: AsyncSession = Depends(get_db_session),
    service: TagService = Depends(get_tag_service),
):
    try:
        tag = await service.update_tag(tag_id, payload.to_domain())
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
    return TagResponse.model_validate(tag)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a tag")
async def delete_tag(
    tag_id: str,
    db: AsyncSession = Depends(get_db_session),
    service: TagService = Depends(get_tag_service),
):
    try:
        await service.delete_tag(tag_id)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
