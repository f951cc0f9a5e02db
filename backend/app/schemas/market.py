from datetime import datetime

from pydantic import BaseModel, Field, StrictBool


class MarketOut(BaseModel):
    model_config = {"from_attributes": True}

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
    suspension_reason: str


class MarketListOut(BaseModel):
    data: list[MarketOut]
    count: int


class FilterOptionsOut(BaseModel):
    model_config = {"from_attributes": True, "populate_by_name": True}

    positions: list[str]
    stat_types: list[str] = Field(serialization_alias="statTypes")
    suspension_statuses: list[str] = Field(serialization_alias="suspensionStatuses")


class MarketSummaryOut(BaseModel):
    model_config = {"from_attributes": True}

    total: int
    suspended: int
    active: int
    by_reason: dict[str, int]


class SuspensionUpdate(BaseModel):
    suspended: StrictBool


class SuspensionUpdateOut(BaseModel):
    id: int
    suspended: bool
    message: str


class SuspensionClearOut(BaseModel):
    id: int
    message: str
