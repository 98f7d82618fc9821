"""
Technology API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from core.schemas import DeleteRequest, DeleteResponse
from pageable.parser import parse_query_params
from pageable.schemas import PageableResponse

from . import schemas, service

router = APIRouter()


@router.get("/api/tech/{technology_id}")
async def get_technology(technology_id: int) -> schemas.Technology:
    return await service.get_technology(technology_id)


@router.get("/api/tech/")
async def list_technologies(request: Request) -> PageableResponse[schemas.Technology]:
    return await service.list_technologies(parse_query_params(request.query_params))


@router.post("/api/tech/", status_code=status.HTTP_201_CREATED)
async def create_technology(payload: schemas.TechnologyCreate) -> schemas.Technology:
    return await service.create_technology(payload)


@router.put("/api/tech/")
async def update_technology(payload: schemas.TechnologyUpdate) -> schemas.Technology:
    return await service.update_technology(payload)


@router.delete("/api/tech/")
async def delete_technologies(payload: DeleteRequest) -> DeleteResponse:
    return await service.delete_technologies(payload.ids)
