"""
Technology persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from pageable.builder import build_list_query
from pageable.schemas import PageableRequest

BASE_SELECT = "SELECT id, title, description, logo_url FROM technology"

LIST_FIELDS = frozenset({"id", "title", "description", "logo_url"})

_convert = db.column_converter({"id": int})


def is_valid_field(column: str) -> bool:
    return column in LIST_FIELDS


async def list_technologies(request: PageableRequest) -> tuple[int, list[dict[str, Any]]]:
    plan = build_list_query(request, BASE_SELECT, is_valid_field, convert=_convert)
    return await db.fetch_page(plan, dict)


async def get_technology(technology_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, title, description, logo_url
        FROM technology
        WHERE id = $1
        """,
        technology_id,
    )


async def create_technology(*, title: str, description: str | None, logo_url: str | None) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO technology (title, description, logo_url)
        VALUES ($1, $2, $3)
        RETURNING id, title, description, logo_url
        """,
        title,
        description,
        logo_url,
    )
    if row is None:
        raise RuntimeError("Failed to create technology.")
    return row


async def update_technology(
    *,
    technology_id: int,
    title: str,
    description: str | None,
    logo_url: str | None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        UPDATE technology
        SET title = $2, description = $3, logo_url = $4
        WHERE id = $1
        RETURNING id, title, description, logo_url
        """,
        technology_id,
        title,
        description,
        logo_url,
    )


async def delete_technology(technology_id: int) -> bool:
    status = await db.execute("DELETE FROM technology WHERE id = $1", technology_id)
    return db.affected_rows(status) > 0


async def delete_technologies(technology_ids: list[int]) -> list[int]:
    # Ids outside the bigint range cannot match a row.
    technology_ids = [row_id for row_id in technology_ids if 0 < row_id <= db.MAX_BIGINT]
    if not technology_ids:
        return []
    rows = await db.fetch_all(
        "DELETE FROM technology WHERE id = ANY($1::bigint[]) RETURNING id",
        technology_ids,
    )
    return [int(row["id"]) for row in rows]
