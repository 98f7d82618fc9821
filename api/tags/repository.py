"""
Tag persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from pageable.builder import build_list_query
from pageable.schemas import PageableRequest

BASE_SELECT = "SELECT id, name, hex_color FROM tag"

# Columns clients may filter and sort on.
LIST_FIELDS = frozenset({"id", "name", "hex_color"})

_convert = db.column_converter({"id": int})


def is_valid_field(column: str) -> bool:
    return column in LIST_FIELDS


async def list_tags(request: PageableRequest) -> tuple[int, list[dict[str, Any]]]:
    plan = build_list_query(request, BASE_SELECT, is_valid_field, convert=_convert)
    return await db.fetch_page(plan, dict)


async def get_tag(tag_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, name, hex_color
        FROM tag
        WHERE id = $1
        """,
        tag_id,
    )


async def create_tag(*, name: str, hex_color: str) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO tag (name, hex_color)
        VALUES ($1, $2)
        RETURNING id, name, hex_color
        """,
        name,
        hex_color,
    )
    if row is None:
        raise RuntimeError("Failed to create tag.")
    return row


async def update_tag(*, tag_id: int, name: str, hex_color: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        UPDATE tag
        SET name = $2, hex_color = $3
        WHERE id = $1
        RETURNING id, name, hex_color
        """,
        tag_id,
        name,
        hex_color,
    )


async def delete_tag(tag_id: int) -> bool:
    status = await db.execute("DELETE FROM tag WHERE id = $1", tag_id)
    return db.affected_rows(status) > 0


async def delete_tags(tag_ids: list[int]) -> list[int]:
    # Ids outside the bigint range cannot match a row.
    tag_ids = [row_id for row_id in tag_ids if 0 < row_id <= db.MAX_BIGINT]
    if not tag_ids:
        return []
    rows = await db.fetch_all(
        "DELETE FROM tag WHERE id = ANY($1::bigint[]) RETURNING id",
        tag_ids,
    )
    return [int(row["id"]) for row in rows]
