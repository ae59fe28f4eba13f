"""Ordering and paging shared by the subject repositories."""
from __future__ import annotations

from typing import Any

from sqlalchemy import Select

from threadvote.schemas.common import ListingParams, SortBy


def apply_sort(stmt: Select[Any], model: Any, sort: SortBy | None) -> Select[Any]:
    """Order ``stmt`` by the column pair behind ``sort``.

    NEW is creation time descending, OLD ascending, TOP score descending.
    Ties keep whatever order the database returns.
    """
    if sort is SortBy.NEW:
        return stmt.order_by(model.created_at.desc())
    if sort is SortBy.OLD:
        return stmt.order_by(model.created_at.asc())
    if sort is SortBy.TOP:
        return stmt.order_by(model.score.desc())
    return stmt


def apply_page(stmt: Select[Any], model: Any, params: ListingParams) -> Select[Any]:
    """Apply ``params`` sort, offset and limit to ``stmt``."""
    stmt = apply_sort(stmt, model, params.sort)
    return stmt.offset(params.offset).limit(params.limit)
