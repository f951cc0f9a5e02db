"""Manual suspension override commands.

Both commands are a single conditional row update; the return value says
whether a market with that id existed. Neither re-derives the effective
state: callers re-read through ``market_query`` when they need it.
Concurrent writes to one market resolve last-write-wins in the store.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.market import Market
from app.services.market_errors import MarketStoreError, validate_market_id, validate_suspended_flag

logger = logging.getLogger(__name__)


async def _write_manual_suspension(
    db: AsyncSession,
    market_id: int,
    manual_suspension: bool | None,
    *,
    operation: str,
) -> bool:
    stmt = (
        update(Market)
        .where(Market.id == market_id)
        .values(manual_suspension=manual_suspension, updated_at=datetime.now(UTC))
    )
    try:
        result = await db.execute(stmt)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception(
            "Manual suspension write failed",
            extra={"market_id": market_id, "operation": operation},
        )
        raise MarketStoreError(operation, market_id) from exc

    matched = result.rowcount > 0
    logger.info(
        "Manual suspension written",
        extra={
            "market_id": market_id,
            "operation": operation,
            "manual_suspension": manual_suspension,
            "matched": matched,
        },
    )
    return matched


async def set_manual_suspension(db: AsyncSession, market_id: int, suspended: bool) -> bool:
    market_id = validate_market_id(market_id)
    suspended = validate_suspended_flag(suspended)
    return await _write_manual_suspension(db, market_id, suspended, operation="set_manual_suspension")


async def clear_manual_suspension(db: AsyncSession, market_id: int) -> bool:
    market_id = validate_market_id(market_id)
    return await _write_manual_suspension(db, market_id, None, operation="clear_manual_suspension")
