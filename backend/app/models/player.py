from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    team_nickname: Mapped[str] = mapped_column(String(120), nullable=False)
    team_abbr: Mapped[str] = mapped_column(String(8), nullable=False)
    position: Mapped[str] = mapped_column(String(16), nullable=False, index=True)

    markets = relationship("Market", back_populates="player")
