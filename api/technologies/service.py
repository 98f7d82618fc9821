"""
Technology business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core import db
from core.schemas import DeleteResponse
from pageable.schemas import PageableRequest, PageableResponse

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_technology(row: dict) -> schemas.Technology:
    return schemas.Technology(
        id=int(row["id"]),
        title=str(row["title"]),
        description=row.get("description"),
        logo_url=row.get("logo_url"),
    )


def _require_id(technology_id: int) -> None:
    if technology_id <= 0 or technology_id > db.MAX_BIGINT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid technology ID: {technology_id}",
        )


def _not_found(technology_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Technology with id {technology_id} not found.",
    )


def _title(payload: schemas.TechnologyCreate) -> str:
    title = (payload.title or "").strip()
    if not title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Technology title is required.")
    return title


async def get_technology(technology_id: int) -> schemas.Technology:
    _require_id(technology_id)
    row = await repository.get_technology(technology_id)
    if row is None:
        raise _not_found(technology_id)
    return _to_technology(row)


async def list_technologies(request: PageableRequest) -> PageableResponse[schemas.Technology]:
    try:
        total, rows = await repository.list_technologies(request)
    except db.FILTER_VALUE_ERRORS as exc:
        logger.warning("technology_list_bad_filter error=%s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid filter value.") from exc

    return PageableResponse[schemas.Technology](
        total=total,
        content=[_to_technology(row) for row in rows],
        page=request.page,
        size=request.size,
        sort=request.sort,
    )


async def create_technology(payload: schemas.TechnologyCreate) -> schemas.Technology:
    row = await repository.create_technology(
        title=_title(payload),
        description=payload.description,
        logo_url=payload.logo_url,
    )
    return _to_technology(row)


async def update_technology(payload: schemas.TechnologyUpdate) -> schemas.Technology:
    _require_id(payload.id)
    row = await repository.update_technology(
        technology_id=payload.id,
        title=_title(payload),
        description=payload.description,
        logo_url=payload.logo_url,
    )
    if row is None:
        raise _not_found(payload.id)
    return _to_technology(row)


async def delete_technologies(technology_ids: list[int]) -> DeleteResponse:
    if len(technology_ids) == 1:
        technology_id = technology_ids[0]
        _require_id(technology_id)
        if not await repository.delete_technology(technology_id):
            raise _not_found(technology_id)
        deleted = [technology_id]
    else:
        deleted = await repository.delete_technologies(technology_ids)

    logger.info("technologies_deleted requested=%s deleted=%s", len(technology_ids), len(deleted))
    return DeleteResponse(deleted_ids=deleted, count=len(deleted))
