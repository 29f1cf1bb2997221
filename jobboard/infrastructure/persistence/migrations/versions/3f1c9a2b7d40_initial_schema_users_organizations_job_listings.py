"""initial_schema_users_organizations_job_listings

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-12 09:14:27.518204

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    "job_listings_wage_interval": ("daily", "monthly", "yearly"),
    "job_listings_location_requirement": ("in-office", "hybrid", "remote"),
    "job_listings_experience_level": ("junior", "mid-level", "senior"),
    "job_listings_status": ("draft", "published", "delisted"),
    "job_listings_type": ("internship", "part-time", "full-time", "contract"),
    "job_listing_applications_stages": (
        "applied",
        "shortlisted",
        "interviewing",
        "offer",
        "hired",
        "rejected",
    ),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=False)

    op.create_table(
        "organizations",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "user_notification_settings",
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column(
            "new_job_email_notifications",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("ai_prompt", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "organization_user_settings",
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column(
            "new_application_email_notifications",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("minimum_rating", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "minimum_rating IS NULL OR (minimum_rating >= 1 AND minimum_rating <= 5)",
            name="minimum_rating_check",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("user_id", "organization_id"),
    )

    op.create_table(
        "job_listings",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("wage", sa.Integer(), nullable=True),
        sa.Column("wage_interval", _enum("job_listings_wage_interval"), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("district", sa.String(), nullable=True),
        sa.Column(
            "is_featured", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "location_requirement",
            _enum("job_listings_location_requirement"),
            nullable=False,
        ),
        sa.Column(
            "experience_level", _enum("job_listings_experience_level"), nullable=False
        ),
        sa.Column(
            "status",
            _enum("job_listings_status"),
            server_default="draft",
            nullable=False,
        ),
        sa.Column("type", _enum("job_listings_type"), nullable=False),
        sa.Column("posted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_job_listings_district", "job_listings", ["district"])
    op.create_index("idx_job_listings_region", "job_listings", ["city"])
    op.create_index("idx_job_listings_status", "job_listings", ["status"])
    op.create_index("idx_job_listings_org_id", "job_listings", ["organization_id"])
    op.create_index("idx_job_listings_posted_at", "job_listings", ["posted_at"])
    op.create_index(
        "idx_job_listings_status_district", "job_listings", ["status", "district"]
    )
    op.create_index(
        "idx_job_listings_status_posted", "job_listings", ["status", "posted_at"]
    )

    op.create_table(
        "job_listing_applications",
        sa.Column("job_listing_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("cover_letter", sa.Text(), nullable=True),
        sa.Column("resume_url", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column(
            "stage",
            _enum("job_listing_applications_stages"),
            server_default="applied",
            nullable=False,
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "rating >= 0 AND rating <= 5", name="rating_check",
        ),
        sa.ForeignKeyConstraint(
            ["job_listing_id"], ["job_listings.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("job_listing_id", "user_id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("job_listing_applications")
    op.drop_index("idx_job_listings_status_posted", table_name="job_listings")
    op.drop_index("idx_job_listings_status_district", table_name="job_listings")
    op.drop_index("idx_job_listings_posted_at", table_name="job_listings")
    op.drop_index("idx_job_listings_org_id", table_name="job_listings")
    op.drop_index("idx_job_listings_status", table_name="job_listings")
    op.drop_index("idx_job_listings_region", table_name="job_listings")
    op.drop_index("idx_job_listings_district", table_name="job_listings")
    op.drop_table("job_listings")
    op.drop_table("organization_user_settings")
    op.drop_table("user_notification_settings")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_table("organizations")
    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        postgresql.ENUM(name=name).drop(bind, checkfirst=True)
