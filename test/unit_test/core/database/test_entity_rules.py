"""
Unit tests for behaviour carried by the entities themselves.

These run without a database: aggregates are built in memory and their
methods exercised directly.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from dashitoon.core.database.entities import Chapter, DashiFan, Report, Series, Subscription, User
from dashitoon.core.database.entities.chapters import INITIAL_VERSION_NAME
from dashitoon.core.database.entities.reports import SYSTEM_REPORT_REASON
from dashitoon.core.database.entities.subscriptions import add_billing_cycle
from dashitoon.core.errors import (
    AlreadyCheckedInError,
    ChapterVersionInUseError,
    InsufficientKanaError,
    NotFoundError,
    ValidationError,
)
from dashitoon.core.models.domain.enums import (
    BillingInterval,
    ChapterStatus,
    ContentCategory,
    ContentRating,
    KanaType,
    PaymentStatus,
    ReportType,
    SubscriptionStatus,
    TransactionType,
)
from dashitoon.moderation import ModerationAnalysis

NOW = datetime(2026, 1, 31, 9, 30, tzinfo=timezone.utc)


def _new_chapter() -> Chapter:
    return Chapter.create(volume_id=1, chapter_number=1, title="One", content="first", now=NOW)


class TestChapterVersions:
    """Version history of a chapter."""

    def test_create_starts_with_current_draft(self):
        chapter = _new_chapter()

        assert len(chapter.versions) == 1
        assert chapter.current_version.version_name == INITIAL_VERSION_NAME
        assert chapter.current_version.status == ChapterStatus.draft
        assert chapter.is_published is False

    def test_add_version_becomes_current(self):
        chapter = _new_chapter()
        version = chapter.add_version(title="One", content="second", now=NOW)

        assert chapter.current_version_id == version.id
        assert version.version_name == "Draft 2026-01-31 09:30:00"

    def test_auto_save_name(self):
        chapter = _new_chapter()
        version = chapter.add_version(title="One", content="typing", is_auto_save=True, now=NOW)

        assert version.is_auto_save is True
        assert version.version_name.startswith("Auto-save ")

    def test_publish_keeps_first_publication_date(self):
        chapter = _new_chapter()
        first = chapter.publish(NOW)
        chapter.add_version(title="One", content="revised")
        later = datetime(2026, 2, 5, tzinfo=timezone.utc)
        second = chapter.publish(later)

        assert first.status == ChapterStatus.draft
        assert second.status == ChapterStatus.published
        assert chapter.published_version_id == second.id
        assert chapter.published_date == NOW

    def test_unpublish_clears_pointer(self):
        chapter = _new_chapter()
        version = chapter.publish(NOW)
        chapter.unpublish()

        assert version.status == ChapterStatus.draft
        assert chapter.published_version is None
        assert chapter.published_date is None

    def test_restore_copies_into_new_draft(self):
        chapter = _new_chapter()
        original = chapter.current_version
        chapter.add_version(title="One", content="rewrite")

        restored = chapter.restore_version(original.id)

        assert restored.id != original.id
        assert restored.content == "first"
        assert restored.version_name == f"Restored from {INITIAL_VERSION_NAME}"
        assert chapter.current_version_id == restored.id

    def test_remove_old_version(self):
        chapter = _new_chapter()
        old = chapter.current_version
        chapter.add_version(title="One", content="newer")

        removed = chapter.remove_version(old.id)

        assert removed is old
        assert chapter.find_version(old.id) is None

    def test_remove_current_version_rejected(self):
        chapter = _new_chapter()
        with pytest.raises(ChapterVersionInUseError) as exc_info:
            chapter.remove_version(chapter.current_version_id)
        assert exc_info.value.role == "current"

    def test_remove_published_version_rejected(self):
        chapter = _new_chapter()
        published = chapter.publish(NOW)
        chapter.add_version(title="One", content="after publish")

        with pytest.raises(ChapterVersionInUseError) as exc_info:
            chapter.remove_version(published.id)
        assert exc_info.value.role == "published"
        assert len(chapter.versions) == 2

    def test_unknown_version(self):
        with pytest.raises(NotFoundError):
            _new_chapter().get_version(uuid.uuid4())


class TestSeriesRatings:
    def test_set_category_ratings_updates_in_place(self):
        series = Series(title="T", synopsis="S")
        series.set_category_ratings({category: 0 for category in ContentCategory})
        rows = list(series.category_ratings)

        ratings = {category: 0 for category in ContentCategory}
        ratings[ContentCategory.alcohol] = 1
        assert series.set_category_ratings(ratings) == ContentRating.teen

        assert series.category_ratings == rows
        assert len(series.category_ratings) == len(ContentCategory)

    def test_ownership(self):
        series = Series(title="T", synopsis="S", created_by="author-1")
        assert series.is_owned_by("author-1")
        assert not series.is_owned_by("someone-else")
        assert not series.is_owned_by(None)


class TestUserKana:
    def test_check_in_once_per_day(self):
        user = User(id="u", user_name="u")
        entry = user.check_in(NOW, reward=10)

        assert user.kana_coin == 10
        assert entry.type == TransactionType.checkin
        with pytest.raises(AlreadyCheckedInError):
            user.check_in(NOW.replace(hour=23), reward=10)

    def test_check_in_next_day(self):
        user = User(id="u", user_name="u", last_checkin=NOW)
        user.check_in(datetime(2026, 2, 1, 0, 5, tzinfo=timezone.utc), reward=10)
        assert user.kana_coin == 10

    def test_check_in_day_uses_utc_for_offset_timestamp(self):
        # 06:00 on Feb 1 at +07:00 is still Jan 31 in UTC
        earlier = datetime(2026, 2, 1, 6, 0, tzinfo=timezone(timedelta(hours=7)))
        user = User(id="u", user_name="u", last_checkin=earlier)

        with pytest.raises(AlreadyCheckedInError):
            user.check_in(datetime(2026, 1, 31, 23, 30, tzinfo=timezone.utc), reward=10)

    def test_check_in_treats_naive_timestamp_as_utc(self):
        user = User(id="u", user_name="u", last_checkin=datetime(2026, 1, 31, 1, 0))

        with pytest.raises(AlreadyCheckedInError):
            user.check_in(NOW, reward=10)
        user.check_in(datetime(2026, 2, 1, 0, 1, tzinfo=timezone.utc), reward=10)
        assert user.kana_coin == 10

    def test_insufficient_balance(self):
        user = User(id="u", user_name="u", kana_gold=5)
        with pytest.raises(InsufficientKanaError):
            user.record_transaction(
                currency=KanaType.gold, type=TransactionType.withdraw, amount=-6, reason="unlock", now=NOW
            )
        assert user.kana_gold == 5

    def test_restriction(self):
        user = User(id="u", user_name="u", restrict_until=datetime(2026, 2, 1, tzinfo=timezone.utc))
        assert user.is_restricted(NOW)
        assert not user.is_restricted(datetime(2026, 2, 2, tzinfo=timezone.utc))


class TestSubscriptionCycle:
    @pytest.mark.parametrize(
        "interval,count,expected",
        [
            (BillingInterval.day, 3, datetime(2026, 2, 3, 9, 30, tzinfo=timezone.utc)),
            (BillingInterval.week, 1, datetime(2026, 2, 7, 9, 30, tzinfo=timezone.utc)),
            (BillingInterval.month, 1, datetime(2026, 2, 28, 9, 30, tzinfo=timezone.utc)),
            (BillingInterval.year, 1, datetime(2027, 1, 31, 9, 30, tzinfo=timezone.utc)),
        ],
    )
    def test_add_billing_cycle(self, interval, count, expected):
        assert add_billing_cycle(NOW, interval, count) == expected

    def test_start_confirm_cancel(self):
        tier = DashiFan(series_id=1, name="Fan", description="", price_amount=Decimal("50000"))
        subscription = Subscription.start(user_id="reader-1", tier=tier, now=NOW)

        assert subscription.status == SubscriptionStatus.pending
        billing = subscription.pending_billing()
        assert billing is not None and billing.price_amount == Decimal("50000")

        subscription.confirm_payment(billing.id, tier)
        assert subscription.status == SubscriptionStatus.active
        assert billing.payment_status == PaymentStatus.paid
        assert subscription.next_billing_date == datetime(2026, 2, 28, 9, 30, tzinfo=timezone.utc)

        with pytest.raises(ValidationError):
            subscription.confirm_payment(billing.id, tier)

        subscription.cancel()
        assert not subscription.is_live
        with pytest.raises(ValidationError):
            subscription.cancel()

    def test_failed_payment_expires_active_subscription(self):
        tier = DashiFan(series_id=1, name="Fan", description="", price_amount=Decimal("1"))
        subscription = Subscription.start(user_id="reader-1", tier=tier, now=NOW)
        subscription.confirm_payment(subscription.billing_details[0].id, tier)
        renewal = subscription.add_billing(tier, subscription.next_billing_date)

        subscription.fail_payment(renewal.id)

        assert subscription.status == SubscriptionStatus.expired


class TestReport:
    def test_system_report_with_analytics(self):
        review_id = uuid.uuid4()
        report = Report.create_new_system_report(ReportType.review, review_id, NOW)
        report.add_analytics(ModerationAnalysis(flagged=True, categories={"harassment": True}))

        assert report.is_system_report
        assert report.reported_id == str(review_id)
        assert report.reason == SYSTEM_REPORT_REASON
        assert report.analytics["categories"] == {"harassment": True}

    def test_user_report(self):
        report = Report.create_new_user_report(ReportType.review, "abc", reported_by="reader-1", reason="Spoilers")
        assert not report.is_system_report
