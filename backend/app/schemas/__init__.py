from app.schemas.market import (
    FilterOptionsOut,
    MarketListOut,
    MarketOut,
    MarketSummaryOut,
    SuspensionClearOut,
    SuspensionUpdate,
    SuspensionUpdateOut,
)
from app.schemas.seed import AlternateSeed, MarketSeed, PlayerSeed, SeedPayload, StatTypeSeed

__all__ = [
    "AlternateSeed",
    "FilterOptionsOut",
    "MarketListOut",
    "MarketOut",
    "MarketSeed",
    "MarketSummaryOut",
    "PlayerSeed",
    "SeedPayload",
    "StatTypeSeed",
    "SuspensionClearOut",
    "SuspensionUpdate",
    "SuspensionUpdateOut",
]
