"""Reservations table.

One row per booked table: party contact, date/time, size and status (booked | seated | finished | cancelled).

Revision ID: 001
Revises:
Create Date: (run alembic upgrade head)
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "reservations",
        sa.Column("reservation_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("mobile_number", sa.String(32), nullable=False),
        sa.Column("reservation_date", sa.Date(), nullable=False),
        sa.Column("reservation_time", sa.Time(), nullable=False),
        sa.Column("people", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="booked"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_reservations_mobile_number", "reservations", ["mobile_number"], unique=False)
    op.create_index("ix_reservations_reservation_date", "reservations", ["reservation_date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_reservations_reservation_date", table_name="reservations")
    op.drop_index("ix_reservations_mobile_number", table_name="reservations")
    op.drop_table("reservations")
