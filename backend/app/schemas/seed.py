from pydantic import BaseModel, Field


class PlayerSeed(BaseModel):
    id: int = Field(gt=0)
    name: str
    team_nickname: str
    team_abbr: str
    position: str


class StatTypeSeed(BaseModel):
    id: int = Field(gt=0)
    name: str


class MarketSeed(BaseModel):
    id: int = Field(gt=0)
    player_id: int
    stat_type_id: int
    line: float
    market_suspended: bool = False
    manual_suspension: bool | None = None


class AlternateSeed(BaseModel):
    player_id: int
    stat_type_id: int
    line: float
    under_odds: float | None = Field(default=None, ge=0, le=1)
    over_odds: float | None = Field(default=None, ge=0, le=1)
    push_odds: float | None = Field(default=None, ge=0, le=1)


class SeedPayload(BaseModel):
    players: list[PlayerSeed] = Field(default_factory=list)
    stat_types: list[StatTypeSeed] = Field(default_factory=list)
    markets: list[MarketSeed] = Field(default_factory=list)
    alternates: list[AlternateSeed] = Field(default_factory=list)
