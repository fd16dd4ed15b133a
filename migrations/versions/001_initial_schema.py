"""Initial schema: markets and their weekly openings.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None

WEEKDAYS = (
    "LUNDI",
    "MARDI",
    "MERCREDI",
    "JEUDI",
    "VENDREDI",
    "SAMEDI",
    "DIMANCHE",
)


def upgrade() -> None:
    # ── markets ───────────────────────────────────────────────────────
    op.create_table(
        "markets",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False, server_default=""),
        sa.Column("town", sa.String(120), nullable=False),
        sa.Column("zip", sa.String(10), nullable=False),
        sa.Column("lat", sa.Float, nullable=False),
        sa.Column("lng", sa.Float, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_markets_lat_lng", "markets", ["lat", "lng"])
    op.create_index("idx_markets_name", "markets", ["name"])
    op.create_index("idx_markets_town", "markets", ["town"])
    op.create_index("idx_markets_zip", "markets", ["zip"])

    # ── market_openings ───────────────────────────────────────────────
    op.create_table(
        "market_openings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "market_id",
            sa.String(36),
            sa.ForeignKey("markets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day", sa.Enum(*WEEKDAYS, name="weekday"), nullable=False),
        sa.Column("start", sa.String(5), nullable=False),
        sa.Column("end", sa.String(5), nullable=False),
    )
    op.create_index("idx_openings_market", "market_openings", ["market_id"])
    op.create_index("idx_openings_day", "market_openings", ["day"])


def downgrade() -> None:
    op.drop_table("market_openings")
    op.drop_table("markets")
    op.execute("DROP TYPE IF EXISTS weekday")
