"""
Request Dependencies.

Resolves the caller from the identity header set by the upstream proxy,
records them as the audit user of the request's session, and builds the
application services on top of that session.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.database import get_session, set_audit_user
from dashitoon.core.database.entities.users import User
from dashitoon.core.errors import ForbiddenAccessError, UnauthorizedError
from dashitoon.core.models.domain.events import UserReviewedEvent
from dashitoon.moderation import ModerationClient, ModerationService
from dashitoon.services import (
    ChapterService,
    EventPublisher,
    ImageStorage,
    KanaService,
    RatesService,
    ReviewService,
    SeriesService,
    SubscriptionService,
    UserReviewedEventHandler,
)

from ..core.config import settings

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_current_user(request: Request, session: SessionDep) -> User:
    user_id = request.headers.get(settings.auth_user_header)
    if not user_id:
        raise UnauthorizedError()
    user = await session.get(User, user_id)
    if user is None:
        raise UnauthorizedError(f"Unknown user {user_id}.")
    set_audit_user(session, user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_active_user(user: CurrentUser) -> User:
    """The current user, refused while a moderation restriction is in force."""
    if user.is_restricted():
        raise ForbiddenAccessError("Your account is restricted.")
    return user


ActiveUser = Annotated[User, Depends(get_active_user)]


async def get_admin_user(user: CurrentUser) -> User:
    if not user.is_admin:
        raise ForbiddenAccessError("Administrator role required.")
    return user


AdminUser = Annotated[User, Depends(get_admin_user)]


@lru_cache
def get_moderation_service() -> ModerationService:
    config = settings.moderation
    return ModerationClient(config.base_url, api_key=config.api_key, model=config.model, timeout=config.timeout)


ModerationDep = Annotated[ModerationService, Depends(get_moderation_service)]


def get_event_publisher(session: SessionDep, moderation: ModerationDep) -> EventPublisher:
    publisher = EventPublisher()
    publisher.subscribe(UserReviewedEvent, UserReviewedEventHandler(session, moderation))
    return publisher


@lru_cache
def get_image_storage() -> ImageStorage:
    config = settings.image_storage
    return ImageStorage(config.directory, max_bytes=config.max_bytes)


def get_series_service(session: SessionDep) -> SeriesService:
    return SeriesService(session)


def get_chapter_service(session: SessionDep) -> ChapterService:
    return ChapterService(session)


def get_review_service(
    session: SessionDep, publisher: Annotated[EventPublisher, Depends(get_event_publisher)]
) -> ReviewService:
    return ReviewService(session, publisher)


def get_rates_service(session: SessionDep) -> RatesService:
    return RatesService(
        session,
        default_commission_rate=settings.default_commission_rate,
        default_exchange_rate=settings.default_kana_exchange_rate,
    )


def get_subscription_service(session: SessionDep) -> SubscriptionService:
    return SubscriptionService(session)


def get_kana_service(session: SessionDep) -> KanaService:
    return KanaService(session, checkin_reward=settings.checkin_reward)


SeriesServiceDep = Annotated[SeriesService, Depends(get_series_service)]
ChapterServiceDep = Annotated[ChapterService, Depends(get_chapter_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
RatesServiceDep = Annotated[RatesService, Depends(get_rates_service)]
SubscriptionServiceDep = Annotated[SubscriptionService, Depends(get_subscription_service)]
KanaServiceDep = Annotated[KanaService, Depends(get_kana_service)]
ImageStorageDep = Annotated[ImageStorage, Depends(get_image_storage)]
