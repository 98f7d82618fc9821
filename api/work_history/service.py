"""
Work history business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core import db
from core.schemas import DeleteResponse
from pageable.schemas import PageableRequest, PageableResponse

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_work_history(row: dict) -> schemas.WorkHistory:
    return schemas.WorkHistory(
        id=int(row["id"]),
        name=str(row["name"]),
        about=str(row["about"]),
        logo_url=row.get("logo_url"),
        period_start=row.get("period_start"),
        period_end=row.get("period_end"),
        what_i_did=list(row.get("what_i_did") or []),
        projects=list(row.get("projects") or []),
    )


def _require_id(work_history_id: int) -> None:
    if work_history_id <= 0 or work_history_id > db.MAX_BIGINT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid work history ID: {work_history_id}",
        )


def _not_found(work_history_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Work history with id {work_history_id} not found.",
    )


def _fields(payload: schemas.WorkHistoryCreate) -> dict:
    name = (payload.name or "").strip()
    about = (payload.about or "").strip()
    if not name or not about:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name and about are required fields.",
        )
    return {
        "name": name,
        "about": about,
        "logo_url": payload.logo_url,
        "period_start": payload.period_start,
        "period_end": payload.period_end,
        "what_i_did": list(payload.what_i_did),
        "projects": list(payload.projects),
    }


async def get_work_history(work_history_id: int) -> schemas.WorkHistory:
    _require_id(work_history_id)
    row = await repository.get_work_history(work_history_id)
    if row is None:
        raise _not_found(work_history_id)
    return _to_work_history(row)


async def list_work_history(request: PageableRequest) -> PageableResponse[schemas.WorkHistory]:
    try:
        total, rows = await repository.list_work_history(request)
    except db.FILTER_VALUE_ERRORS as exc:
        logger.warning("work_history_list_bad_filter error=%s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid filter value.") from exc

    return PageableResponse[schemas.WorkHistory](
        total=total,
        content=[_to_work_history(row) for row in rows],
        page=request.page,
        size=request.size,
        sort=request.sort,
    )


async def create_work_history(payload: schemas.WorkHistoryCreate) -> schemas.WorkHistory:
    row = await repository.create_work_history(**_fields(payload))
    return _to_work_history(row)


async def update_work_history(payload: schemas.WorkHistoryUpdate) -> schemas.WorkHistory:
    _require_id(payload.id)
    row = await repository.update_work_history(work_history_id=payload.id, **_fields(payload))
    if row is None:
        raise _not_found(payload.id)
    return _to_work_history(row)


async def delete_work_history(work_history_ids: list[int]) -> DeleteResponse:
    if len(work_history_ids) == 1:
        work_history_id = work_history_ids[0]
        _require_id(work_history_id)
        if not await repository.delete_work_history(work_history_id):
            raise _not_found(work_history_id)
        deleted = [work_history_id]
    else:
        deleted = await repository.delete_work_history_list(work_history_ids)

    logger.info("work_history_deleted requested=%s deleted=%s", len(work_history_ids), len(deleted))
    return DeleteResponse(deleted_ids=deleted, count=len(deleted))
