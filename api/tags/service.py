"""
Tag business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core import db
from core.schemas import DeleteResponse
from pageable.schemas import PageableRequest, PageableResponse

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_tag(row: dict) -> schemas.Tag:
    return schemas.Tag(
        id=int(row["id"]),
        name=str(row["name"]),
        hex_color=str(row["hex_color"]),
    )


def _require_id(tag_id: int) -> None:
    if tag_id <= 0 or tag_id > db.MAX_BIGINT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tag ID: {tag_id}",
        )


def _validate(payload: schemas.TagCreate) -> tuple[str, str]:
    name = (payload.name or "").strip()
    hex_color = (payload.hex_color or "").strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tag name is required.")
    if not hex_color:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tag hex color is required.")
    return name, hex_color


def _not_found(tag_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Tag with id {tag_id} not found.",
    )


async def get_tag(tag_id: int) -> schemas.Tag:
    _require_id(tag_id)
    row = await repository.get_tag(tag_id)
    if row is None:
        raise _not_found(tag_id)
    return _to_tag(row)


async def list_tags(request: PageableRequest) -> PageableResponse[schemas.Tag]:
    try:
        total, rows = await repository.list_tags(request)
    except db.FILTER_VALUE_ERRORS as exc:
        logger.warning("tag_list_bad_filter error=%s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid filter value.") from exc

    return PageableResponse[schemas.Tag](
        total=total,
        content=[_to_tag(row) for row in rows],
        page=request.page,
        size=request.size,
        sort=request.sort,
    )


async def create_tag(payload: schemas.TagCreate) -> schemas.Tag:
    name, hex_color = _validate(payload)
    row = await repository.create_tag(name=name, hex_color=hex_color)
    return _to_tag(row)


async def update_tag(payload: schemas.TagUpdate) -> schemas.Tag:
    _require_id(payload.id)
    name, hex_color = _validate(payload)
    row = await repository.update_tag(tag_id=payload.id, name=name, hex_color=hex_color)
    if row is None:
        raise _not_found(payload.id)
    return _to_tag(row)


async def delete_tags(tag_ids: list[int]) -> DeleteResponse:
    if len(tag_ids) == 1:
        tag_id = tag_ids[0]
        _require_id(tag_id)
        if not await repository.delete_tag(tag_id):
            raise _not_found(tag_id)
        deleted = [tag_id]
    else:
        deleted = await repository.delete_tags(tag_ids)

    logger.info("tags_deleted requested=%s deleted=%s", len(tag_ids), len(deleted))
    return DeleteResponse(deleted_ids=deleted, count=len(deleted))
