from app.models.alternate import Alternate
from app.models.base import Base
from app.models.market import Market
from app.models.player import Player
from app.models.stat_type import StatType

__all__ = [
    "Base",
    "Alternate",
    "Market",
    "Player",
    "StatType",
]
