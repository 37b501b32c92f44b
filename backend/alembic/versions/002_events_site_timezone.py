"""Add site_timezone to events so "now" is compared in each site's local time

Revision ID: 002
Revises: 001
Create Date: (run alembic upgrade head)

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "events",
        sa.Column("site_timezone", sa.String(64), nullable=False, server_default="Europe/London"),
    )


def downgrade() -> None:
    op.drop_column("events", "site_timezone")
