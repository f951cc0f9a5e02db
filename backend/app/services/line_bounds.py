from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Subquery, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.alternate import Alternate


@dataclass(frozen=True, slots=True)
class LineBounds:
    low_line: float | None
    high_line: float | None


def line_bounds_subquery(name: str = "line_bounds") -> Subquery:
    """Lowest and highest alternate line per (player, stat type)."""
    return (
        select(
            Alternate.player_id.label("player_id"),
            Alternate.stat_type_id.label("stat_type_id"),
            func.min(Alternate.line).label("low_line"),
            func.max(Alternate.line).label("high_line"),
        )
        .group_by(Alternate.player_id, Alternate.stat_type_id)
        .subquery(name)
    )


async def get_line_bounds(db: AsyncSession, player_id: int, stat_type_id: int) -> LineBounds:
    stmt = select(func.min(Alternate.line), func.max(Alternate.line)).where(
        Alternate.player_id == player_id,
        Alternate.stat_type_id == stat_type_id,
    )
    low_line, high_line = (await db.execute(stmt)).one()
    return LineBounds(low_line=low_line, high_line=high_line)


def with_line_fallback(bounds: LineBounds, line: float) -> LineBounds:
    """Fill missing bounds with the market's optimal line.

    A bound of 0.0 is a real bound and is kept.
    """
    return LineBounds(
        low_line=bounds.low_line if bounds.low_line is not None else line,
        high_line=bounds.high_line if bounds.high_line is not None else line,
    )
