"""
Work history API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from core.schemas import DeleteRequest, DeleteResponse
from pageable.parser import parse_query_params
from pageable.schemas import PageableResponse

from . import schemas, service

router = APIRouter()


@router.get("/api/wh/{work_history_id}")
async def get_work_history(work_history_id: int) -> schemas.WorkHistory:
    return await service.get_work_history(work_history_id)


@router.get("/api/wh/")
async def list_work_history(request: Request) -> PageableResponse[schemas.WorkHistory]:
    """
    Dates filter as ISO strings: `?period_start=anf(gte(2020-01-01),lt(2023-01-01))`.
    """
    return await service.list_work_history(parse_query_params(request.query_params))


@router.post("/api/wh/", status_code=status.HTTP_201_CREATED)
async def create_work_history(payload: schemas.WorkHistoryCreate) -> schemas.WorkHistory:
    return await service.create_work_history(payload)


@router.put("/api/wh/")
async def update_work_history(payload: schemas.WorkHistoryUpdate) -> schemas.WorkHistory:
    return await service.update_work_history(payload)


@router.delete("/api/wh/")
async def delete_work_history(payload: DeleteRequest) -> DeleteResponse:
    return await service.delete_work_history(payload.ids)
