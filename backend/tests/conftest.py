import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

# Settings are read at import time; point the engine at a throwaway SQLite file
# unless a real DATABASE_URL was provided.
os.environ["APP_ENV"] = "testing"
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'market-board-tests.sqlite3'}",
)

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.core.database import AsyncSessionLocal, engine, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base  # noqa: E402
from app.schemas.seed import SeedPayload  # noqa: E402
from app.services.market_seed import load_seed  # noqa: E402

# Expected board order (player name, then stat type name):
#   3 Jaylen Brown  Points    feed suspended
#   8 Jaylen Brown  Rebounds  push odds missing
#   1 Jayson Tatum  Points    priced, active
#   2 Jayson Tatum  Rebounds  all odds <= 0.4
#   5 Nikola Jokic  Assists   manual False over feed suspension
#   4 Nikola Jokic  Rebounds  no alternates at all
#   7 Stephen Curry Assists   no alternate at the optimal line
#   6 Stephen Curry Points    manual True over good odds
BOARD = {
    "players": [
        {"id": 1, "name": "Jayson Tatum", "team_nickname": "Celtics", "team_abbr": "BOS", "position": "SF"},
        {"id": 2, "name": "Jaylen Brown", "team_nickname": "Celtics", "team_abbr": "BOS", "position": "SG"},
        {"id": 3, "name": "Nikola Jokic", "team_nickname": "Nuggets", "team_abbr": "DEN", "position": "C"},
        {"id": 4, "name": "Stephen Curry", "team_nickname": "Warriors", "team_abbr": "GSW", "position": "PG"},
        {"id": 5, "name": "Derrick White", "team_nickname": "Celtics", "team_abbr": "BOS", "position": "PF"},
    ],
    "stat_types": [
        {"id": 1, "name": "Points"},
        {"id": 2, "name": "Rebounds"},
        {"id": 3, "name": "Assists"},
        {"id": 4, "name": "Steals"},
    ],
    "markets": [
        {"id": 1, "player_id": 1, "stat_type_id": 1, "line": 27.5},
        {"id": 2, "player_id": 1, "stat_type_id": 2, "line": 8.5},
        {"id": 3, "player_id": 2, "stat_type_id": 1, "line": 23.5, "market_suspended": True},
        {"id": 4, "player_id": 3, "stat_type_id": 2, "line": 12.5},
        {"id": 5, "player_id": 3, "stat_type_id": 3, "line": 9.5, "market_suspended": True, "manual_suspension": False},
        {"id": 6, "player_id": 4, "stat_type_id": 1, "line": 28.5, "manual_suspension": True},
        {"id": 7, "player_id": 4, "stat_type_id": 3, "line": 6.5},
        {"id": 8, "player_id": 2, "stat_type_id": 2, "line": 5.5},
    ],
    "alternates": [
        {"player_id": 1, "stat_type_id": 1, "line": 25.5, "under_odds": 0.3, "over_odds": 0.65, "push_odds": 0.05},
        {"player_id": 1, "stat_type_id": 1, "line": 27.5, "under_odds": 0.48, "over_odds": 0.47, "push_odds": 0.05},
        {"player_id": 1, "stat_type_id": 1, "line": 29.5, "under_odds": 0.62, "over_odds": 0.33, "push_odds": 0.05},
        {"player_id": 1, "stat_type_id": 2, "line": 7.5, "under_odds": 0.45, "over_odds": 0.45, "push_odds": 0.1},
        {"player_id": 1, "stat_type_id": 2, "line": 8.5, "under_odds": 0.3, "over_odds": 0.2, "push_odds": 0.1},
        {"player_id": 2, "stat_type_id": 1, "line": 23.5, "under_odds": 0.5, "over_odds": 0.45, "push_odds": 0.05},
        {"player_id": 2, "stat_type_id": 2, "line": 5.5, "under_odds": 0.5, "over_odds": 0.45, "push_odds": None},
        {"player_id": 3, "stat_type_id": 3, "line": 9.5, "under_odds": 0.2, "over_odds": 0.2, "push_odds": 0.1},
        {"player_id": 4, "stat_type_id": 1, "line": 28.5, "under_odds": 0.5, "over_odds": 0.45, "push_odds": 0.05},
        {"player_id": 4, "stat_type_id": 3, "line": 5.5, "under_odds": 0.35, "over_odds": 0.6, "push_odds": 0.05},
        {"player_id": 4, "stat_type_id": 3, "line": 7.5, "under_odds": 0.6, "over_odds": 0.35, "push_odds": 0.05},
    ],
}


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Fixture for a database session on freshly created tables.

    Also overrides the app's get_db dependency so that HTTP calls made
    through async_client share this same session. Pooled connections are
    disposed at teardown so the next test's event loop opens its own.
    """
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)

    session = AsyncSessionLocal()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db

    try:
        yield session
    finally:
        app.dependency_overrides.pop(get_db, None)
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture
async def seeded_board(db_session: AsyncSession) -> AsyncSession:
    await load_seed(db_session, SeedPayload.model_validate(BOARD))
    return db_session


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Fixture for an async HTTPX test client hooked to the FastAPI app.
    Depends on db_session so the get_db override is active before the
    client is created and the app handles requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
