"""
Education business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core import db
from core.schemas import DeleteResponse
from pageable.schemas import PageableRequest, PageableResponse

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_education(row: dict) -> schemas.Education:
    year = row.get("year")
    return schemas.Education(
        id=int(row["id"]),
        name=row.get("name"),
        year=int(year) if year is not None else None,
        course=str(row["course"]),
        organization=str(row["organization"]),
    )


def _require_id(education_id: int) -> None:
    if education_id <= 0 or education_id > db.MAX_BIGINT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid education ID: {education_id}",
        )


def _not_found(education_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Education with id {education_id} not found.",
    )


def _validate(payload: schemas.EducationCreate) -> tuple[str, str]:
    course = (payload.course or "").strip()
    organization = (payload.organization or "").strip()
    if not course or not organization:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Course and organization are required fields.",
        )
    return course, organization


async def get_education(education_id: int) -> schemas.Education:
    _require_id(education_id)
    row = await repository.get_education(education_id)
    if row is None:
        raise _not_found(education_id)
    return _to_education(row)


async def list_education(request: PageableRequest) -> PageableResponse[schemas.Education]:
    try:
        total, rows = await repository.list_education(request)
    except db.FILTER_VALUE_ERRORS as exc:
        logger.warning("education_list_bad_filter error=%s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid filter value.") from exc

    return PageableResponse[schemas.Education](
        total=total,
        content=[_to_education(row) for row in rows],
        page=request.page,
        size=request.size,
        sort=request.sort,
    )


async def create_education(payload: schemas.EducationCreate) -> schemas.Education:
    course, organization = _validate(payload)
    row = await repository.create_education(
        name=payload.name,
        year=payload.year,
        course=course,
        organization=organization,
    )
    return _to_education(row)


async def update_education(payload: schemas.EducationUpdate) -> schemas.Education:
    _require_id(payload.id)
    course, organization = _validate(payload)
    row = await repository.update_education(
        education_id=payload.id,
        name=payload.name,
        year=payload.year,
        course=course,
        organization=organization,
    )
    if row is None:
        raise _not_found(payload.id)
    return _to_education(row)


async def delete_education(education_ids: list[int]) -> DeleteResponse:
    if len(education_ids) == 1:
        education_id = education_ids[0]
        _require_id(education_id)
        if not await repository.delete_education(education_id):
            raise _not_found(education_id)
        deleted = [education_id]
    else:
        deleted = await repository.delete_education_list(education_ids)

    logger.info("education_deleted requested=%s deleted=%s", len(education_ids), len(deleted))
    return DeleteResponse(deleted_ids=deleted, count=len(deleted))
