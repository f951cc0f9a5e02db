"""initial market board schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "players",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("team_nickname", sa.String(length=120), nullable=False),
        sa.Column("team_abbr", sa.String(length=8), nullable=False),
        sa.Column("position", sa.String(length=16), nullable=False),
    )
    op.create_index("ix_players_name", "players", ["name"], unique=False)
    op.create_index("ix_players_position", "players", ["position"], unique=False)

    op.create_table(
        "stat_types",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.UniqueConstraint("name", name="uq_stat_types_name"),
    )

    op.create_table(
        "markets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("player_id", sa.Integer(), sa.ForeignKey("players.id", ondelete="CASCADE"), nullable=False),
        sa.Column("stat_type_id", sa.Integer(), sa.ForeignKey("stat_types.id", ondelete="CASCADE"), nullable=False),
        sa.Column("line", sa.Float(), nullable=False),
        sa.Column("market_suspended", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("manual_suspension", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_markets_player_id", "markets", ["player_id"], unique=False)
    op.create_index("ix_markets_stat_type_id", "markets", ["stat_type_id"], unique=False)
    op.create_index("ix_markets_player_stat_type", "markets", ["player_id", "stat_type_id"], unique=False)

    op.create_table(
        "alternates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("player_id", sa.Integer(), sa.ForeignKey("players.id", ondelete="CASCADE"), nullable=False),
        sa.Column("stat_type_id", sa.Integer(), sa.ForeignKey("stat_types.id", ondelete="CASCADE"), nullable=False),
        sa.Column("line", sa.Float(), nullable=False),
        sa.Column("under_odds", sa.Float(), nullable=True),
        sa.Column("over_odds", sa.Float(), nullable=True),
        sa.Column("push_odds", sa.Float(), nullable=True),
        sa.UniqueConstraint("player_id", "stat_type_id", "line", name="uq_alternates_player_stat_type_line"),
    )
    op.create_index("ix_alternates_player_id", "alternates", ["player_id"], unique=False)
    op.create_index("ix_alternates_stat_type_id", "alternates", ["stat_type_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_alternates_stat_type_id", table_name="alternates")
    op.drop_index("ix_alternates_player_id", table_name="alternates")
    op.drop_table("alternates")

    op.drop_index("ix_markets_player_stat_type", table_name="markets")
    op.drop_index("ix_markets_stat_type_id", table_name="markets")
    op.drop_index("ix_markets_player_id", table_name="markets")
    op.drop_table("markets")

    op.drop_table("stat_types")

    op.drop_index("ix_players_position", table_name="players")
    op.drop_index("ix_players_name", table_name="players")
    op.drop_table("players")
