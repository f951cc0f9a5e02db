from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.market import (
    FilterOptionsOut,
    MarketListOut,
    MarketOut,
    MarketSummaryOut,
    SuspensionClearOut,
    SuspensionUpdate,
    SuspensionUpdateOut,
)
from app.services.market_filters import MarketFilters
from app.services.market_overrides import clear_manual_suspension, set_manual_suspension
from app.services.market_query import get_market, list_filter_options, list_markets, summarize_markets

router = APIRouter()


def market_filters(
    position: str | None = Query(None),
    stat_type: str | None = Query(None, alias="statType"),
    search: str | None = Query(None),
    suspension_status: str | None = Query(None, alias="suspensionStatus"),
) -> MarketFilters:
    return MarketFilters.from_params(
        position=position,
        stat_type=stat_type,
        search=search,
        suspension_status=suspension_status,
    )


@router.get("", response_model=MarketListOut)
async def get_markets(
    filters: MarketFilters = Depends(market_filters),
    db: AsyncSession = Depends(get_db),
) -> MarketListOut:
    markets = await list_markets(db, filters)
    return MarketListOut(
        data=[MarketOut.model_validate(market) for market in markets],
        count=len(markets),
    )


@router.get("/filterOptions", response_model=FilterOptionsOut)
async def get_filter_options(db: AsyncSession = Depends(get_db)) -> FilterOptionsOut:
    options = await list_filter_options(db)
    return FilterOptionsOut.model_validate(options)


@router.get("/statistics", response_model=MarketSummaryOut)
async def get_market_statistics(
    filters: MarketFilters = Depends(market_filters),
    db: AsyncSession = Depends(get_db),
) -> MarketSummaryOut:
    markets = await list_markets(db, filters)
    return MarketSummaryOut.model_validate(summarize_markets(markets))


@router.get("/{market_id}", response_model=MarketOut)
async def market_detail(
    market_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
) -> MarketOut:
    market = await get_market(db, market_id)
    if market is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Market not found")
    return MarketOut.model_validate(market)


@router.put("/{market_id}/suspension", response_model=SuspensionUpdateOut)
async def update_manual_suspension(
    payload: SuspensionUpdate,
    market_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
) -> SuspensionUpdateOut:
    matched = await set_manual_suspension(db, market_id, payload.suspended)
    if not matched:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Market not found")
    return SuspensionUpdateOut(
        id=market_id,
        suspended=payload.suspended,
        message=f"Market {market_id} suspension updated",
    )


@router.put("/{market_id}/removeManualSuspension", response_model=SuspensionClearOut)
async def remove_manual_suspension(
    market_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
) -> SuspensionClearOut:
    matched = await clear_manual_suspension(db, market_id)
    if not matched:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Market not found")
    return SuspensionClearOut(id=market_id, message=f"Market {market_id} manual suspension removed")
