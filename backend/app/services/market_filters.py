"""Typed filter predicates for the market query.

Each supplied filter becomes one predicate object; the query builder ANDs
their clauses against the projected ``market_data`` columns. An absent or
empty filter yields no predicate at all, so it imposes no constraint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from sqlalchemy import or_
from sqlalchemy.sql.base import ColumnCollection
from sqlalchemy.sql.elements import ColumnElement


class SuspensionStatus(StrEnum):
    SUSPENDED = "suspended"
    ACTIVE = "active"


SUSPENSION_STATUSES: list[str] = [status.value for status in SuspensionStatus]


def parse_suspension_status(value: str | None) -> SuspensionStatus | None:
    """Map a raw filter value to a status; only exact matches constrain the board."""
    if not value:
        return None
    try:
        return SuspensionStatus(value)
    except ValueError:
        return None


def _clean(value: str | None) -> str | None:
    return value or None


class MarketPredicate(Protocol):
    def clause(self, columns: ColumnCollection[str, Any]) -> ColumnElement[bool]:
        ...


@dataclass(frozen=True, slots=True)
class PositionEquals:
    position: str

    def clause(self, columns: ColumnCollection[str, Any]) -> ColumnElement[bool]:
        return columns.position == self.position


@dataclass(frozen=True, slots=True)
class StatTypeEquals:
    stat_type: str

    def clause(self, columns: ColumnCollection[str, Any]) -> ColumnElement[bool]:
        return columns.stat_type_name == self.stat_type


@dataclass(frozen=True, slots=True)
class SearchText:
    """Case-insensitive substring on player name or team nickname."""

    term: str

    def clause(self, columns: ColumnCollection[str, Any]) -> ColumnElement[bool]:
        return or_(
            columns.player_name.icontains(self.term, autoescape=True),
            columns.team_nickname.icontains(self.term, autoescape=True),
        )


@dataclass(frozen=True, slots=True)
class SuspensionStateEquals:
    suspended: bool

    def clause(self, columns: ColumnCollection[str, Any]) -> ColumnElement[bool]:
        return columns.is_suspended.is_(self.suspended)


@dataclass(frozen=True, slots=True)
class MarketFilters:
    position: str | None = None
    stat_type: str | None = None
    search: str | None = None
    suspension_status: str | None = None

    @classmethod
    def from_params(
        cls,
        *,
        position: str | None = None,
        stat_type: str | None = None,
        search: str | None = None,
        suspension_status: str | None = None,
    ) -> "MarketFilters":
        """Empty strings count as absent; other values are kept verbatim."""
        return cls(
            position=_clean(position),
            stat_type=_clean(stat_type),
            search=_clean(search),
            suspension_status=_clean(suspension_status),
        )

    def predicates(self) -> list[MarketPredicate]:
        predicates: list[MarketPredicate] = []
        if self.position:
            predicates.append(PositionEquals(self.position))
        if self.stat_type:
            predicates.append(StatTypeEquals(self.stat_type))
        if self.search:
            predicates.append(SearchText(self.search))
        status = parse_suspension_status(self.suspension_status)
        if status is not None:
            predicates.append(SuspensionStateEquals(status is SuspensionStatus.SUSPENDED))
        return predicates

    def as_log_fields(self) -> dict[str, str | None]:
        return {
            "position": self.position,
            "stat_type": self.stat_type,
            "search": self.search,
            "suspension_status": self.suspension_status,
        }
