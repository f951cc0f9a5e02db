"""Filtered, ordered market board reads.

``list_markets`` resolves suspension in SQL (CASE built from the shared rule
table) and filters on the resolved value. ``get_market`` reads one raw market
row and resolves it in memory with ``resolve_suspension``; both paths produce
the same ``EnrichedMarket``.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import Select, Subquery, and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.models.alternate import Alternate
from app.models.market import Market
from app.models.player import Player
from app.models.stat_type import StatType
from app.services.line_bounds import LineBounds, get_line_bounds, line_bounds_subquery, with_line_fallback
from app.services.market_errors import MarketStoreError, validate_market_id
from app.services.market_filters import SUSPENSION_STATUSES, MarketFilters
from app.services.suspension import (
    SuspensionColumns,
    SuspensionInputs,
    SuspensionReason,
    resolve_suspension,
    suspension_case,
    suspension_reason_case,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnrichedMarket:
    id: int
    player_id: int
    stat_type_id: int
    line: float
    market_suspended: bool
    manual_suspension: bool | None
    updated_at: datetime
    player_name: str
    team_nickname: str
    team_abbr: str
    position: str
    stat_type_name: str
    low_line: float
    high_line: float
    under_odds: float | None
    over_odds: float | None
    push_odds: float | None
    is_suspended: bool
    suspension_reason: SuspensionReason


@dataclass(frozen=True)
class FilterOptions:
    positions: list[str]
    stat_types: list[str]
    suspension_statuses: list[str] = field(default_factory=lambda: list(SUSPENSION_STATUSES))


@dataclass(frozen=True)
class MarketSummary:
    total: int
    suspended: int
    active: int
    by_reason: dict[str, int]


def _optimal_line_alternate() -> ColumnElement[bool]:
    return and_(
        Alternate.player_id == Market.player_id,
        Alternate.stat_type_id == Market.stat_type_id,
        Alternate.line == Market.line,
    )


def market_data_subquery() -> Subquery:
    """Markets joined with player, stat type, line bounds and optimal-line odds."""
    bounds = line_bounds_subquery()
    suspension_columns = SuspensionColumns(
        manual_suspension=Market.manual_suspension,
        market_suspended=Market.market_suspended,
        under_odds=Alternate.under_odds,
        over_odds=Alternate.over_odds,
        push_odds=Alternate.push_odds,
    )
    stmt = (
        select(
            Market.id,
            Market.player_id,
            Market.stat_type_id,
            Market.line,
            Market.market_suspended,
            Market.manual_suspension,
            Market.updated_at,
            Player.name.label("player_name"),
            Player.team_nickname,
            Player.team_abbr,
            Player.position,
            StatType.name.label("stat_type_name"),
            bounds.c.low_line,
            bounds.c.high_line,
            Alternate.under_odds,
            Alternate.over_odds,
            Alternate.push_odds,
            suspension_case(suspension_columns).label("is_suspended"),
            suspension_reason_case(suspension_columns).label("suspension_reason"),
        )
        .select_from(Market)
        .join(Player, Player.id == Market.player_id)
        .join(StatType, StatType.id == Market.stat_type_id)
        .outerjoin(
            bounds,
            and_(
                bounds.c.player_id == Market.player_id,
                bounds.c.stat_type_id == Market.stat_type_id,
            ),
        )
        .outerjoin(Alternate, _optimal_line_alternate())
    )
    return stmt.subquery("market_data")


def build_market_query(filters: MarketFilters) -> Select:
    market_data = market_data_subquery()
    stmt = select(market_data)
    for predicate in filters.predicates():
        stmt = stmt.where(predicate.clause(market_data.c))
    return stmt.order_by(
        market_data.c.player_name.asc(),
        market_data.c.stat_type_name.asc(),
        market_data.c.id.asc(),
    )


def _from_market_data_row(row) -> EnrichedMarket:
    bounds = with_line_fallback(LineBounds(row.low_line, row.high_line), row.line)
    return EnrichedMarket(
        id=row.id,
        player_id=row.player_id,
        stat_type_id=row.stat_type_id,
        line=row.line,
        market_suspended=bool(row.market_suspended),
        manual_suspension=row.manual_suspension,
        updated_at=row.updated_at,
        player_name=row.player_name,
        team_nickname=row.team_nickname,
        team_abbr=row.team_abbr,
        position=row.position,
        stat_type_name=row.stat_type_name,
        low_line=bounds.low_line,
        high_line=bounds.high_line,
        under_odds=row.under_odds,
        over_odds=row.over_odds,
        push_odds=row.push_odds,
        is_suspended=bool(row.is_suspended),
        suspension_reason=SuspensionReason(row.suspension_reason),
    )


def enrich_market(
    market: Market,
    player: Player,
    stat_type: StatType,
    alternate: Alternate | None,
    bounds: LineBounds,
) -> EnrichedMarket:
    decision = resolve_suspension(SuspensionInputs.from_market(market, alternate))
    bounds = with_line_fallback(bounds, market.line)
    return EnrichedMarket(
        id=market.id,
        player_id=market.player_id,
        stat_type_id=market.stat_type_id,
        line=market.line,
        market_suspended=bool(market.market_suspended),
        manual_suspension=market.manual_suspension,
        updated_at=market.updated_at,
        player_name=player.name,
        team_nickname=player.team_nickname,
        team_abbr=player.team_abbr,
        position=player.position,
        stat_type_name=stat_type.name,
        low_line=bounds.low_line,
        high_line=bounds.high_line,
        under_odds=alternate.under_odds if alternate is not None else None,
        over_odds=alternate.over_odds if alternate is not None else None,
        push_odds=alternate.push_odds if alternate is not None else None,
        is_suspended=decision.is_suspended,
        suspension_reason=decision.reason,
    )


async def list_markets(db: AsyncSession, filters: MarketFilters | None = None) -> list[EnrichedMarket]:
    filters = filters or MarketFilters()
    stmt = build_market_query(filters)
    try:
        rows = (await db.execute(stmt)).all()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Market query failed", extra=filters.as_log_fields())
        raise MarketStoreError("list_markets") from exc

    markets = [_from_market_data_row(row) for row in rows]
    logger.debug("Market query complete", extra={**filters.as_log_fields(), "count": len(markets)})
    return markets


async def get_market(db: AsyncSession, market_id: int) -> EnrichedMarket | None:
    market_id = validate_market_id(market_id)
    stmt = (
        select(Market, Player, StatType, Alternate)
        .join(Player, Player.id == Market.player_id)
        .join(StatType, StatType.id == Market.stat_type_id)
        .outerjoin(Alternate, _optimal_line_alternate())
        .where(Market.id == market_id)
        .execution_options(populate_existing=True)
    )
    try:
        row = (await db.execute(stmt)).first()
        if row is None:
            return None
        market, player, stat_type, alternate = row
        bounds = await get_line_bounds(db, market.player_id, market.stat_type_id)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Market lookup failed", extra={"market_id": market_id})
        raise MarketStoreError("get_market", market_id) from exc

    return enrich_market(market, player, stat_type, alternate, bounds)


async def list_filter_options(db: AsyncSession) -> FilterOptions:
    positions_stmt = (
        select(Player.position)
        .join(Market, Market.player_id == Player.id)
        .distinct()
        .order_by(Player.position.asc())
    )
    stat_types_stmt = (
        select(StatType.name)
        .join(Market, Market.stat_type_id == StatType.id)
        .distinct()
        .order_by(StatType.name.asc())
    )
    try:
        positions = (await db.execute(positions_stmt)).scalars().all()
        stat_types = (await db.execute(stat_types_stmt)).scalars().all()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Filter options query failed")
        raise MarketStoreError("list_filter_options") from exc

    return FilterOptions(positions=list(positions), stat_types=list(stat_types))


def summarize_markets(markets: list[EnrichedMarket]) -> MarketSummary:
    suspended = sum(1 for market in markets if market.is_suspended)
    reasons = Counter(market.suspension_reason for market in markets)
    return MarketSummary(
        total=len(markets),
        suspended=suspended,
        active=len(markets) - suspended,
        by_reason={reason.value: reasons.get(reason, 0) for reason in SuspensionReason},
    )
