"""
Education persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from pageable.builder import build_list_query
from pageable.schemas import PageableRequest

BASE_SELECT = "SELECT id, name, year, course, organization FROM education"

LIST_FIELDS = frozenset({"id", "name", "year", "course", "organization"})

_convert = db.column_converter({"id": int, "year": int})


def is_valid_field(column: str) -> bool:
    return column in LIST_FIELDS


async def list_education(request: PageableRequest) -> tuple[int, list[dict[str, Any]]]:
    plan = build_list_query(request, BASE_SELECT, is_valid_field, convert=_convert)
    return await db.fetch_page(plan, dict)


async def get_education(education_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, name, year, course, organization
        FROM education
        WHERE id = $1
        """,
        education_id,
    )


async def create_education(
    *,
    name: str | None,
    year: int | None,
    course: str,
    organization: str,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO education (name, year, course, organization)
        VALUES ($1, $2, $3, $4)
        RETURNING id, name, year, course, organization
        """,
        name,
        year,
        course,
        organization,
    )
    if row is None:
        raise RuntimeError("Failed to create education.")
    return row


async def update_education(
    *,
    education_id: int,
    name: str | None,
    year: int | None,
    course: str,
    organization: str,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        UPDATE education
        SET name = $2, year = $3, course = $4, organization = $5
        WHERE id = $1
        RETURNING id, name, year, course, organization
        """,
        education_id,
        name,
        year,
        course,
        organization,
    )


async def delete_education(education_id: int) -> bool:
    status = await db.execute("DELETE FROM education WHERE id = $1", education_id)
    return db.affected_rows(status) > 0


async def delete_education_list(education_ids: list[int]) -> list[int]:
    # Ids outside the bigint range cannot match a row.
    education_ids = [row_id for row_id in education_ids if 0 < row_id <= db.MAX_BIGINT]
    if not education_ids:
        return []
    rows = await db.fetch_all(
        "DELETE FROM education WHERE id = ANY($1::bigint[]) RETURNING id",
        education_ids,
    )
    return [int(row["id"]) for row in rows]
