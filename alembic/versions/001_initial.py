"""
Name: 001_initial (Alembic Migration)

Responsibilities:
  - Create the portal schema from scratch: organizers, admin users and
    their roles, events, info-screens, image metadata

Collaborators:
  - infrastructure/repositories/postgres/*: use this schema as contract

Policy:
  - Baseline migration; later changes go in additive migrations (002+)
  - Naming convention:
      pk_<table>                     - Primary keys
      uq_<table>_<col>               - Unique constraints
      ix_<table>_<col>               - Indexes
      fk_<table>_<col>__<ref_table>  - Foreign keys
      ck_<table>_<name>              - Check constraints
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = ("EVENT_EDITOR", "INFO_SCREEN_EDITOR", "GLOBAL_ADMIN")


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    # =========================================================
    # 1) ORGANIZERS
    # =========================================================
    op.create_table(
        "event_organizers",
        sa.Column("id", sa.Integer, sa.Identity(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("logo_img", sa.String(64), nullable=True),
        sa.Column("cover_img", sa.String(64), nullable=True),
        sa.Column(
            "event_limit", sa.Integer, nullable=False, server_default=sa.text("10")
        ),
        sa.Column("social_website", sa.Text, nullable=True),
        sa.Column("social_email", sa.Text, nullable=True),
        sa.Column("social_phone", sa.Text, nullable=True),
        sa.Column("social_facebook", sa.Text, nullable=True),
        sa.Column("social_instagram", sa.Text, nullable=True),
        sa.Column("social_twitter", sa.Text, nullable=True),
        sa.Column("social_linkedin", sa.Text, nullable=True),
        sa.Column("social_tiktok", sa.Text, nullable=True),
        sa.Column("social_youtube", sa.Text, nullable=True),
        sa.Column("social_telegram", sa.Text, nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_event_organizers"),
        sa.CheckConstraint("event_limit >= 0", name="ck_event_organizers_event_limit"),
    )
    op.create_index("ix_event_organizers_name", "event_organizers", ["name"])

    # =========================================================
    # 2) IDENTITY (admin users + roles)
    # =========================================================
    op.create_table(
        "admin_users",
        sa.Column("id", sa.Integer, sa.Identity(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("salt", postgresql.BYTEA, nullable=False),
        sa.Column("password", postgresql.BYTEA, nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_password_change", sa.DateTime(timezone=True), nullable=True),
        sa.Column("admins_event_organizer_id", sa.Integer, nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_admin_users"),
        sa.ForeignKeyConstraint(
            ["admins_event_organizer_id"],
            ["event_organizers.id"],
            name="fk_admin_users_admins_event_organizer_id__event_organizers",
            ondelete="SET NULL",
        ),
    )
    # Emails compare case-insensitively
    op.execute("CREATE UNIQUE INDEX uq_admin_users_email ON admin_users (lower(email))")

    op.create_table(
        "admin_user_roles",
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "role", name="pk_admin_user_roles"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["admin_users.id"],
            name="fk_admin_user_roles_user_id__admin_users",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "role IN (" + ", ".join(f"'{r}'" for r in ROLES) + ")",
            name="ck_admin_user_roles_role",
        ),
    )

    # =========================================================
    # 3) IMAGES (metadata; bytes live in object storage)
    # =========================================================
    op.create_table(
        "images",
        sa.Column("id", sa.String(16), nullable=False),
        sa.Column("mime_type", sa.String(255), nullable=False),
        sa.Column("owner_id", sa.Integer, nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_images"),
        sa.ForeignKeyConstraint(
            ["owner_id"],
            ["admin_users.id"],
            name="fk_images_owner_id__admin_users",
            ondelete="SET NULL",
        ),
    )

    # =========================================================
    # 4) EVENTS
    # =========================================================
    op.create_table(
        "events",
        sa.Column("id", sa.Integer, sa.Identity(), nullable=False),
        sa.Column("organizer_id", sa.Integer, nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("online", sa.Boolean, nullable=False),
        sa.Column("event_type", sa.String(100), nullable=False),
        sa.Column("image", sa.String(64), nullable=False),
        sa.Column("venue", sa.String(300), nullable=True),
        sa.Column("venue_address", sa.String(500), nullable=True),
        sa.Column("venue_data", postgresql.JSONB, nullable=True),
        sa.Column("registration_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("registration_link", sa.Text, nullable=True),
        sa.Column("price", sa.String(100), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
        sa.ForeignKeyConstraint(
            ["organizer_id"],
            ["event_organizers.id"],
            name="fk_events_organizer_id__event_organizers",
            ondelete="CASCADE",
        ),
    )
    # Listing (date DESC) and the upcoming-event count both filter by organizer
    op.create_index("ix_events_organizer_id_date", "events", ["organizer_id", "date"])

    # =========================================================
    # 5) INFO-SCREENS
    # =========================================================
    op.create_table(
        "info_screens",
        sa.Column("id", sa.Integer, sa.Identity(), nullable=False),
        sa.Column("comment", sa.Text, nullable=False, server_default=sa.text("''")),
        sa.Column("position", sa.Float, nullable=False),
        sa.Column("campaign_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("campaign_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("media_de_id", sa.String(64), nullable=True),
        sa.Column("media_en_id", sa.String(64), nullable=True),
        sa.Column("external_link_de", sa.Text, nullable=True),
        sa.Column("external_link_en", sa.Text, nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_info_screens"),
        sa.CheckConstraint(
            "campaign_end IS NULL OR campaign_start IS NULL "
            "OR campaign_end >= campaign_start",
            name="ck_info_screens_campaign_range",
        ),
    )
    op.create_index("ix_info_screens_position", "info_screens", ["position"])


def downgrade() -> None:
    raise RuntimeError("Downgrade is not supported for the baseline migration.")
