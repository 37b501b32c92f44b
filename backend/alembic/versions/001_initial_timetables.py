"""Initial timetable tables: sites, contacts, facilities, timetables, sessions, entries, events.

Revision ID: 001
Revises:
Create Date: (run alembic upgrade head)

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "sites",
        sa.Column("site_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("timezone", sa.String(64), nullable=False),
        sa.Column("tldc_approved", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("site_id"),
    )
    op.create_table(
        "site_contacts",
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("address_line_1", sa.String(256), nullable=False),
        sa.Column("address_line_2", sa.String(256), nullable=False),
        sa.Column("post_code", sa.String(32), nullable=False),
        sa.Column("post_town", sa.String(128), nullable=False),
        sa.Column("country", sa.String(128), nullable=True),
        sa.Column("telephone", sa.String(64), nullable=True),
        sa.Column("website", sa.String(512), nullable=True),
        sa.Column("latitude", sa.String(32), nullable=True),
        sa.Column("longitude", sa.String(32), nullable=True),
        sa.ForeignKeyConstraint(["site_id"], ["sites.site_id"]),
        sa.PrimaryKeyConstraint("site_id"),
    )
    # facility ids repeat across sites: key is (site_id, facility_id)
    op.create_table(
        "site_facilities",
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("facility_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("length", sa.Float(), nullable=True),
        sa.Column("tldc_approved", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["site_id"], ["sites.site_id"]),
        sa.PrimaryKeyConstraint("site_id", "facility_id"),
    )
    # session ids repeat across timetables: key is (timetable_id, session_id); inserted before timetables
    op.create_table(
        "timetable_sessions",
        sa.Column("timetable_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("session_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("category", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("timetable_id", "session_id"),
    )
    op.create_table(
        "timetables",
        sa.Column("timetable_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["site_id"], ["sites.site_id"]),
        sa.PrimaryKeyConstraint("timetable_id"),
    )
    op.create_index("ix_timetables_site_id", "timetables", ["site_id"])
    op.create_table(
        "timetable_session_links",
        sa.Column("timetable_id", sa.Integer(), nullable=False),
        sa.Column("session_timetable_id", sa.Integer(), nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["timetable_id"], ["timetables.timetable_id"]),
        sa.ForeignKeyConstraint(
            ["session_timetable_id", "session_id"],
            ["timetable_sessions.timetable_id", "timetable_sessions.session_id"],
        ),
        sa.PrimaryKeyConstraint("timetable_id", "session_timetable_id", "session_id"),
    )
    op.create_table(
        "timetable_entries",
        sa.Column("entry_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("timetable_id", sa.Integer(), nullable=False),
        sa.Column("session_timetable_id", sa.Integer(), nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("date_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("facility_name", sa.String(256), nullable=False),
        sa.Column("instructor_name", sa.String(256), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("is_cancelled", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["timetable_id"], ["timetables.timetable_id"]),
        sa.ForeignKeyConstraint(
            ["session_timetable_id", "session_id"],
            ["timetable_sessions.timetable_id", "timetable_sessions.session_id"],
        ),
        sa.PrimaryKeyConstraint("entry_id"),
    )
    op.create_index("ix_timetable_entries_timetable_id", "timetable_entries", ["timetable_id"])
    op.create_index("ix_timetable_entries_date_time", "timetable_entries", ["date_time"])
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entry_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("site_name", sa.String(256), nullable=True),
        sa.Column("site_facility", sa.String(256), nullable=True),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("instructor", sa.String(256), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("entry_id"),
    )
    op.create_index("ix_events_date", "events", ["date"])


def downgrade() -> None:
    op.drop_index("ix_events_date", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_timetable_entries_date_time", table_name="timetable_entries")
    op.drop_index("ix_timetable_entries_timetable_id", table_name="timetable_entries")
    op.drop_table("timetable_entries")
    op.drop_table("timetable_session_links")
    op.drop_index("ix_timetables_site_id", table_name="timetables")
    op.drop_table("timetables")
    op.drop_table("timetable_sessions")
    op.drop_table("site_facilities")
    op.drop_table("site_contacts")
    op.drop_table("sites")
