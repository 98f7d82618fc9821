"""
Work history persistence (raw SQL).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from core import db
from pageable.builder import build_list_query
from pageable.schemas import PageableRequest

_COLUMNS = "id, name, about, logo_url, period_start, period_end, what_i_did, projects"

BASE_SELECT = f"SELECT {_COLUMNS} FROM work_history"

# logo_url and the array columns are not filterable/sortable.
LIST_FIELDS = frozenset({"id", "name", "about", "period_start", "period_end"})

_convert = db.column_converter(
    {
        "id": int,
        "period_start": date.fromisoformat,
        "period_end": date.fromisoformat,
    }
)


def is_valid_field(column: str) -> bool:
    return column in LIST_FIELDS


async def list_work_history(request: PageableRequest) -> tuple[int, list[dict[str, Any]]]:
    plan = build_list_query(request, BASE_SELECT, is_valid_field, convert=_convert)
    return await db.fetch_page(plan, dict)


async def get_work_history(work_history_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM work_history
        WHERE id = $1
        """,
        work_history_id,
    )


async def create_work_history(
    *,
    name: str,
    about: str,
    logo_url: str | None,
    period_start: date | None,
    period_end: date | None,
    what_i_did: list[str],
    projects: list[str],
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO work_history (name, about, logo_url, period_start, period_end, what_i_did, projects)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        RETURNING {_COLUMNS}
        """,
        name,
        about,
        logo_url,
        period_start,
        period_end,
        what_i_did,
        projects,
    )
    if row is None:
        raise RuntimeError("Failed to create work history.")
    return row


async def update_work_history(
    *,
    work_history_id: int,
    name: str,
    about: str,
    logo_url: str | None,
    period_start: date | None,
    period_end: date | None,
    what_i_did: list[str],
    projects: list[str],
) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE work_history
        SET name = $2, about = $3, logo_url = $4, period_start = $5,
            period_end = $6, what_i_did = $7, projects = $8
        WHERE id = $1
        RETURNING {_COLUMNS}
        """,
        work_history_id,
        name,
        about,
        logo_url,
        period_start,
        period_end,
        what_i_did,
        projects,
    )


async def delete_work_history(work_history_id: int) -> bool:
    status = await db.execute("DELETE FROM work_history WHERE id = $1", work_history_id)
    return db.affected_rows(status) > 0


async def delete_work_history_list(work_history_ids: list[int]) -> list[int]:
    # Ids outside the bigint range cannot match a row.
    work_history_ids = [row_id for row_id in work_history_ids if 0 < row_id <= db.MAX_BIGINT]
    if not work_history_ids:
        return []
    rows = await db.fetch_all(
        "DELETE FROM work_history WHERE id = ANY($1::bigint[]) RETURNING id",
        work_history_ids,
    )
    return [int(row["id"]) for row in rows]
