from pathlib import Path

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.alternate import Alternate
from app.models.market import Market
from app.schemas.seed import SeedPayload
from app.services.market_query import list_markets
from app.services.market_seed import load_seed, read_seed_file

SAMPLE_BOARD = Path(__file__).resolve().parents[1] / "data" / "sample_board.json"


async def test_sample_board_loads(db_session: AsyncSession) -> None:
    payload = read_seed_file(SAMPLE_BOARD)
    summary = await load_seed(db_session, payload)

    assert summary["markets"] == len(payload.markets) > 0
    markets = await list_markets(db_session)
    assert len(markets) == summary["markets"]
    for market in markets:
        assert market.low_line <= market.line <= market.high_line


async def test_seed_replaces_existing_board(seeded_board: AsyncSession) -> None:
    payload = SeedPayload.model_validate(
        {
            "players": [
                {"id": 1, "name": "Anthony Edwards", "team_nickname": "Timberwolves", "team_abbr": "MIN", "position": "SG"}
            ],
            "stat_types": [{"id": 1, "name": "Points"}],
            "markets": [{"id": 1, "player_id": 1, "stat_type_id": 1, "line": 26.5}],
        }
    )
    await load_seed(seeded_board, payload)

    market_count = (await seeded_board.execute(select(func.count(Market.id)))).scalar_one()
    alternate_count = (await seeded_board.execute(select(func.count(Alternate.id)))).scalar_one()
    assert (market_count, alternate_count) == (1, 0)


def test_seed_rejects_probabilities_outside_unit_interval() -> None:
    with pytest.raises(ValidationError):
        SeedPayload.model_validate(
            {"alternates": [{"player_id": 1, "stat_type_id": 1, "line": 10.5, "under_odds": 1.2}]}
        )
