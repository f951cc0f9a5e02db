from sqlalchemy import Float, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Alternate(Base):
    __tablename__ = "alternates"
    __table_args__ = (
        UniqueConstraint("player_id", "stat_type_id", "line", name="uq_alternates_player_stat_type_line"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True
    )
    stat_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stat_types.id", ondelete="CASCADE"), nullable=False, index=True
    )
    line: Mapped[float] = mapped_column(Float, nullable=False)
    # Probabilities in [0, 1] despite the column names.
    under_odds: Mapped[float | None] = mapped_column(Float, nullable=True)
    over_odds: Mapped[float | None] = mapped_column(Float, nullable=True)
    push_odds: Mapped[float | None] = mapped_column(Float, nullable=True)
