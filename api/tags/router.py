"""
Tag API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from core.schemas import DeleteRequest, DeleteResponse
from pageable.parser import parse_query_params
from pageable.schemas import PageableResponse

from . import schemas, service

router = APIRouter()


@router.get("/api/tag/{tag_id}")
async def get_tag(tag_id: int) -> schemas.Tag:
    return await service.get_tag(tag_id)


@router.get("/api/tag/")
async def list_tags(request: Request) -> PageableResponse[schemas.Tag]:
    """
    Paged list. Query string: `page`, `size`, `sort=<field>,<ASC|DESC>` and
    `<field>=<op>(<value>)` filters on id, name, hex_color.
    """
    pageable_request = parse_query_params(request.query_params)
    return await service.list_tags(pageable_request)


@router.post("/api/tag/", status_code=status.HTTP_201_CREATED)
async def create_tag(payload: schemas.TagCreate) -> schemas.Tag:
    return await service.create_tag(payload)


@router.put("/api/tag/")
async def update_tag(payload: schemas.TagUpdate) -> schemas.Tag:
    return await service.update_tag(payload)


@router.delete("/api/tag/")
async def delete_tags(payload: DeleteRequest) -> DeleteResponse:
    return await service.delete_tags(payload.ids)
