"""Initial schema and seed genres for DashiToon

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

This is the initial migration that creates all tables of the DashiToon API
and seeds the genre vocabulary:
- Users and the Kana ledger
- Genres, series, category ratings, volumes, chapters and chapter versions
- Reviews and reports
- DashiFan tiers, subscriptions and billing details
- Commission and Kana exchange rates

Revision format: YYYYMMDD_HHMMSS_description

"""

from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum columns store member names, matching the SQLModel entity mapping.
SERIES_TYPE = sa.Enum("novel", "comic", name="seriestype")
SERIES_STATUS = sa.Enum("ongoing", "completed", "hiatus", "cancelled", name="seriesstatus")
CONTENT_CATEGORY = sa.Enum("violent", "nudity", "sexual", "profanity", "alcohol", "sensitive", name="contentcategory")
CONTENT_RATING = sa.Enum("all_ages", "teen", "young_adult", "mature", name="contentrating")
CHAPTER_STATUS = sa.Enum("draft", "published", name="chapterstatus")
REPORT_TYPE = sa.Enum("review", "comment", "series", "chapter", name="reporttype")
KANA_TYPE = sa.Enum("coin", "gold", name="kanatype")
TRANSACTION_TYPE = sa.Enum("deposit", "withdraw", "checkin", "purchase", "refund", name="transactiontype")
COMMISSION_TYPE = sa.Enum("kana", "dashi_fan", name="commissiontype")
BILLING_INTERVAL = sa.Enum("day", "week", "month", "year", name="billinginterval")
SUBSCRIPTION_STATUS = sa.Enum("pending", "active", "cancelled", "expired", name="subscriptionstatus")
PAYMENT_STATUS = sa.Enum("pending", "paid", "failed", name="paymentstatus")

ENUMS = (
    SERIES_TYPE,
    SERIES_STATUS,
    CONTENT_CATEGORY,
    CONTENT_RATING,
    CHAPTER_STATUS,
    REPORT_TYPE,
    KANA_TYPE,
    TRANSACTION_TYPE,
    COMMISSION_TYPE,
    BILLING_INTERVAL,
    SUBSCRIPTION_STATUS,
    PAYMENT_STATUS,
)

DEFAULT_GENRES = [
    ("Action", "Fights, chases and high stakes."),
    ("Adventure", "Journeys into the unknown."),
    ("Comedy", "Stories written to make readers laugh."),
    ("Drama", "Character-driven conflict and emotion."),
    ("Fantasy", "Magic, myth and invented worlds."),
    ("Horror", "Dread, monsters and the uncanny."),
    ("Mystery", "Puzzles, crimes and hidden truths."),
    ("Romance", "Relationships and love stories."),
    ("Sci-Fi", "Science, technology and the future."),
    ("Slice of Life", "Everyday moments of ordinary people."),
]


def _audit_columns() -> list:
    return [
        sa.Column("created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(450), nullable=True),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified_by", sa.String(450), nullable=True),
    ]


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.String(450), nullable=False),
        sa.Column("user_name", sa.String(256), nullable=False),
        sa.Column("email", sa.String(256), nullable=True),
        sa.Column("kana_coin", sa.Integer(), nullable=False),
        sa.Column("kana_gold", sa.Integer(), nullable=False),
        sa.Column("last_checkin", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("restrict_until", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_user_name", "user_name"),
    )

    # Create kana_transactions table
    op.create_table(
        "kana_transactions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(450), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("currency", KANA_TYPE, nullable=False),
        sa.Column("type", TRANSACTION_TYPE, nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("reason", sa.String(500), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_kana_transactions_user_id", "user_id"),
        sa.Index("ix_kana_transactions_currency", "currency"),
        sa.Index("ix_kana_transactions_timestamp", "timestamp"),
    )

    # Create genres table
    op.create_table(
        "genres",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # Create series table
    op.create_table(
        "series",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("alternative_titles", sa.JSON(), nullable=False),
        sa.Column("authors", sa.JSON(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("synopsis", sa.String(5000), nullable=False),
        sa.Column("thumbnail", sa.String(100), nullable=True),
        sa.Column("type", SERIES_TYPE, nullable=False),
        sa.Column("status", SERIES_STATUS, nullable=False),
        sa.Column("content_rating", CONTENT_RATING, nullable=False),
        sa.Column("volume_count", sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_series_title", "title"),
    )

    # Create genre_series link table
    op.create_table(
        "genre_series",
        sa.Column("genre_id", sa.Integer(), sa.ForeignKey("genres.id", ondelete="CASCADE"), nullable=False),
        sa.Column("series_id", sa.Integer(), sa.ForeignKey("series.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("genre_id", "series_id"),
    )

    # Create category_ratings table
    op.create_table(
        "category_ratings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("series_id", sa.Integer(), sa.ForeignKey("series.id", ondelete="CASCADE"), nullable=True),
        sa.Column("category", CONTENT_CATEGORY, nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_category_ratings_series_id", "series_id"),
    )

    # Create volumes table
    op.create_table(
        "volumes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("series_id", sa.Integer(), sa.ForeignKey("series.id", ondelete="CASCADE"), nullable=False),
        sa.Column("volume_number", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("introduction", sa.String(2000), nullable=True),
        sa.Column("chapter_count", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_volumes_series_id", "series_id"),
    )

    # Create chapters table
    op.create_table(
        "chapters",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("volume_id", sa.Integer(), sa.ForeignKey("volumes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("chapter_number", sa.Integer(), nullable=False),
        sa.Column("current_version_id", sa.Uuid(), nullable=False),
        sa.Column("published_version_id", sa.Uuid(), nullable=True),
        sa.Column("published_date", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_chapters_volume_id", "volume_id"),
    )

    # Create chapter_versions table
    op.create_table(
        "chapter_versions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("chapter_id", sa.Integer(), sa.ForeignKey("chapters.id", ondelete="CASCADE"), nullable=True),
        sa.Column("version_name", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("thumbnail", sa.String(100), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("note", sa.String(5000), nullable=True),
        sa.Column("is_auto_save", sa.Boolean(), nullable=False),
        sa.Column("status", CHAPTER_STATUS, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_chapter_versions_chapter_id", "chapter_id"),
    )

    # Create reviews table
    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("series_id", sa.Integer(), sa.ForeignKey("series.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(450), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_recommended", sa.Boolean(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_reviews_series_id", "series_id"),
        sa.Index("ix_reviews_user_id", "user_id"),
    )

    # Create reports table
    op.create_table(
        "reports",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("reported_id", sa.String(64), nullable=False),
        sa.Column("type", REPORT_TYPE, nullable=False),
        sa.Column("reported_by", sa.String(450), nullable=True),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("reported_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("analytics", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_reports_reported_id", "reported_id"),
        sa.Index("ix_reports_type", "type"),
        sa.Index("ix_reports_reported_at", "reported_at"),
    )

    # Create dashi_fans table
    op.create_table(
        "dashi_fans",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("series_id", sa.Integer(), sa.ForeignKey("series.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("perks", sa.Integer(), nullable=False),
        sa.Column("price_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("price_currency", sa.String(3), nullable=False),
        sa.Column("billing_interval", BILLING_INTERVAL, nullable=False),
        sa.Column("billing_interval_count", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_dashi_fans_series_id", "series_id"),
    )

    # Create subscriptions table
    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(450), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("dashi_fan_id", sa.Uuid(), sa.ForeignKey("dashi_fans.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", SUBSCRIPTION_STATUS, nullable=False),
        sa.Column("next_billing_date", sa.DateTime(timezone=True), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_subscriptions_user_id", "user_id"),
        sa.Index("ix_subscriptions_dashi_fan_id", "dashi_fan_id"),
        sa.Index("ix_subscriptions_status", "status"),
        sa.Index("ix_subscriptions_next_billing_date", "next_billing_date"),
    )

    # Create billing_details table
    op.create_table(
        "billing_details",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "subscription_id", sa.Uuid(), sa.ForeignKey("subscriptions.id", ondelete="CASCADE"), nullable=True
        ),
        sa.Column("billing_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("price_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("price_currency", sa.String(3), nullable=False),
        sa.Column("payment_status", PAYMENT_STATUS, nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_billing_details_subscription_id", "subscription_id"),
    )

    # Create rate tables
    op.create_table(
        "commission_rates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", COMMISSION_TYPE, nullable=False),
        sa.Column("rate", sa.Numeric(5, 2), nullable=False),
        sa.Column("effective_from", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(450), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_commission_rates_type", "type"),
        sa.Index("ix_commission_rates_effective_from", "effective_from"),
    )
    op.create_table(
        "kana_exchange_rates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("rate", sa.Numeric(12, 2), nullable=False),
        sa.Column("effective_from", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(450), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_kana_exchange_rates_currency", "currency"),
        sa.Index("ix_kana_exchange_rates_effective_from", "effective_from"),
    )

    # Seed genres
    genres = sa.table(
        "genres",
        sa.column("name", sa.String),
        sa.column("description", sa.Text),
        sa.column("created", sa.DateTime(timezone=True)),
        sa.column("last_modified", sa.DateTime(timezone=True)),
    )
    now = datetime.now(timezone.utc)
    op.bulk_insert(
        genres,
        [{"name": name, "description": description, "created": now, "last_modified": now} for name, description in DEFAULT_GENRES],
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("kana_exchange_rates")
    op.drop_table("commission_rates")
    op.drop_table("billing_details")
    op.drop_table("subscriptions")
    op.drop_table("dashi_fans")
    op.drop_table("reports")
    op.drop_table("reviews")
    op.drop_table("chapter_versions")
    op.drop_table("chapters")
    op.drop_table("volumes")
    op.drop_table("category_ratings")
    op.drop_table("genre_series")
    op.drop_table("series")
    op.drop_table("genres")
    op.drop_table("kana_transactions")
    op.drop_table("users")

    # Drop the enum types
    bind = op.get_bind()
    for enum in ENUMS:
        enum.drop(bind, checkfirst=True)
