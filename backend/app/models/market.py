from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Market(Base, TimestampMixin):
    __tablename__ = "markets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True
    )
    stat_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stat_types.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Optimal line; alternates at the same (player, stat type, line) carry its odds.
    line: Mapped[float] = mapped_column(Float, nullable=False)
    # Written by the upstream feed only.
    market_suspended: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    # NULL means no override.
    manual_suspension: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    player = relationship("Player", back_populates="markets")
    stat_type = relationship("StatType", back_populates="markets")


Index("ix_markets_player_stat_type", Market.player_id, Market.stat_type_id)
