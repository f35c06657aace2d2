"""Shared sorting utilities for repository queries."""

from __future__ import annotations

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from bdc.core.database import Base


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    sort_field: str | None,
    sort_direction: str | None = None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> Query:  # type: ignore[type-arg]
    """Apply ordering to a SQLAlchemy query.

    Args:
        query: The SQLAlchemy query to sort.
        model: The SQLAlchemy model class.
        sort_field: Column name to sort by. Unknown columns fall back to
            default_field.
        sort_direction: "asc" or "desc". Anything else uses default_direction.
        default_field: Default column to sort by.
        default_direction: Default sort direction ("asc" or "desc").

    Returns:
        The query with ordering applied.
    """
    field = default_field
    direction = default_direction

    # Only real columns are accepted, never arbitrary attributes
    if sort_field and sort_field in model.__table__.columns:
        field = sort_field
    if sort_direction in ("asc", "desc"):
        direction = sort_direction

    column = getattr(model, field)
    order_func = asc if direction == "asc" else desc
    return query.order_by(order_func(column))
