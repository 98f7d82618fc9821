"""
Education API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from core.schemas import DeleteRequest, DeleteResponse
from pageable.parser import parse_query_params
from pageable.schemas import PageableResponse

from . import schemas, service

router = APIRouter()


@router.get("/api/edu/{education_id}")
async def get_education(education_id: int) -> schemas.Education:
    return await service.get_education(education_id)


@router.get("/api/edu/")
async def list_education(request: Request) -> PageableResponse[schemas.Education]:
    return await service.list_education(parse_query_params(request.query_params))


@router.post("/api/edu/", status_code=status.HTTP_201_CREATED)
async def create_education(payload: schemas.EducationCreate) -> schemas.Education:
    return await service.create_education(payload)


@router.put("/api/edu/")
async def update_education(payload: schemas.EducationUpdate) -> schemas.Education:
    return await service.update_education(payload)


@router.delete("/api/edu/")
async def delete_education(payload: DeleteRequest) -> DeleteResponse:
    return await service.delete_education(payload.ids)
