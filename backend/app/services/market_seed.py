"""Load a board snapshot (players, stat types, markets, alternates) from JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.alternate import Alternate
from app.models.market import Market
from app.models.player import Player
from app.models.stat_type import StatType
from app.schemas.seed import SeedPayload
from app.services.market_errors import MarketStoreError

logger = logging.getLogger(__name__)


def read_seed_file(path: str | Path) -> SeedPayload:
    raw = Path(path).read_text(encoding="utf-8")
    return SeedPayload.model_validate(json.loads(raw))


async def load_seed(db: AsyncSession, payload: SeedPayload) -> dict[str, int]:
    """Replace the board contents with the payload in one transaction."""
    try:
        for model in (Alternate, Market, StatType, Player):
            await db.execute(delete(model))
        db.add_all(Player(**player.model_dump()) for player in payload.players)
        db.add_all(StatType(**stat_type.model_dump()) for stat_type in payload.stat_types)
        await db.flush()
        db.add_all(Market(**market.model_dump()) for market in payload.markets)
        db.add_all(Alternate(**alternate.model_dump()) for alternate in payload.alternates)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Seed load failed")
        raise MarketStoreError("load_seed") from exc

    summary = {
        "players": len(payload.players),
        "stat_types": len(payload.stat_types),
        "markets": len(payload.markets),
        "alternates": len(payload.alternates),
    }
    logger.info("Seed loaded", extra=summary)
    return summary
