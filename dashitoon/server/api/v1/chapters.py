"""
API endpoints for the author studio chapter editor.

Chapters live under ``/series/{series_id}/volumes/{volume_id}/chapters``.
Saving, auto-saving and restoring append versions; the history of versions
can be listed, renamed and pruned. Every endpoint requires the caller to own
the series.
"""

import uuid
from typing import List

from fastapi import APIRouter, Response, status

from dashitoon.core.database.entities.chapters import Chapter
from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.io.chapters import (
    ChapterRead,
    ChapterVersionRead,
    ChapterVersionSummary,
    ChapterWrite,
    VersionRename,
)

from ...services.deps import ActiveUser, ChapterServiceDep

logger = get_logger(__name__)

router = APIRouter()


def _version_summaries(chapter: Chapter, versions) -> List[ChapterVersionSummary]:
    summaries = []
    for version in versions:
        summary = ChapterVersionSummary.model_validate(version)
        summary.is_current = version.id == chapter.current_version_id
        summary.is_published = version.id == chapter.published_version_id
        summaries.append(summary)
    return summaries


@router.get("", response_model=List[ChapterRead], summary="List Chapters")
async def list_chapters(
    series_id: int, volume_id: int, user: ActiveUser, service: ChapterServiceDep
) -> List[ChapterRead]:
    chapters = await service.list_chapters(series_id, volume_id, user.id)
    return [ChapterRead.from_entity(chapter) for chapter in chapters]


@router.post(
    "",
    response_model=ChapterRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Chapter",
    description="Create a chapter at the end of the volume with an initial draft version.",
)
async def create_chapter(
    series_id: int, volume_id: int, data: ChapterWrite, user: ActiveUser, service: ChapterServiceDep
) -> ChapterRead:
    chapter = await service.create_chapter(series_id, volume_id, user.id, data)
    return ChapterRead.from_entity(chapter)


@router.get("/{chapter_id}", response_model=ChapterRead, summary="Get Chapter")
async def get_chapter(
    series_id: int, volume_id: int, chapter_id: int, user: ActiveUser, service: ChapterServiceDep
) -> ChapterRead:
    chapter = await service.get_chapter(series_id, volume_id, chapter_id, user.id)
    return ChapterRead.from_entity(chapter)


@router.put(
    "/{chapter_id}",
    response_model=ChapterRead,
    summary="Save Chapter",
    description="Save the editor content as a new draft version and make it current.",
)
async def update_chapter(
    series_id: int, volume_id: int, chapter_id: int, data: ChapterWrite, user: ActiveUser, service: ChapterServiceDep
) -> ChapterRead:
    chapter = await service.update_chapter(series_id, volume_id, chapter_id, user.id, data)
    return ChapterRead.from_entity(chapter)


@router.put(
    "/{chapter_id}/auto-save",
    response_model=ChapterRead,
    summary="Auto-save Chapter",
    description="Store a periodic auto-save snapshot of the editor content.",
)
async def auto_save_chapter(
    series_id: int, volume_id: int, chapter_id: int, data: ChapterWrite, user: ActiveUser, service: ChapterServiceDep
) -> ChapterRead:
    chapter = await service.auto_save_chapter(series_id, volume_id, chapter_id, user.id, data)
    return ChapterRead.from_entity(chapter)


@router.post("/{chapter_id}/publish", response_model=ChapterRead, summary="Publish Chapter")
async def publish_chapter(
    series_id: int, volume_id: int, chapter_id: int, user: ActiveUser, service: ChapterServiceDep
) -> ChapterRead:
    chapter = await service.publish_chapter(series_id, volume_id, chapter_id, user.id)
    return ChapterRead.from_entity(chapter)


@router.post("/{chapter_id}/unpublish", response_model=ChapterRead, summary="Unpublish Chapter")
async def unpublish_chapter(
    series_id: int, volume_id: int, chapter_id: int, user: ActiveUser, service: ChapterServiceDep
) -> ChapterRead:
    chapter = await service.unpublish_chapter(series_id, volume_id, chapter_id, user.id)
    return ChapterRead.from_entity(chapter)


@router.delete("/{chapter_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Chapter")
async def delete_chapter(
    series_id: int, volume_id: int, chapter_id: int, user: ActiveUser, service: ChapterServiceDep
) -> Response:
    await service.delete_chapter(series_id, volume_id, chapter_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Versions


@router.get(
    "/{chapter_id}/versions",
    response_model=List[ChapterVersionSummary],
    summary="List Chapter Versions",
    description="List the version history of a chapter, newest first.",
)
async def list_versions(
    series_id: int, volume_id: int, chapter_id: int, user: ActiveUser, service: ChapterServiceDep
) -> List[ChapterVersionSummary]:
    chapter = await service.get_chapter(series_id, volume_id, chapter_id, user.id)
    # ``versions`` is kept in timestamp order; newest first for the history panel.
    return _version_summaries(chapter, reversed(chapter.versions))


@router.get("/{chapter_id}/versions/{version_id}", response_model=ChapterVersionRead, summary="Get Chapter Version")
async def get_version(
    series_id: int, volume_id: int, chapter_id: int, version_id: uuid.UUID, user: ActiveUser, service: ChapterServiceDep
) -> ChapterVersionRead:
    version = await service.get_version(series_id, volume_id, chapter_id, version_id, user.id)
    return ChapterVersionRead.model_validate(version)


@router.post(
    "/{chapter_id}/versions/{version_id}/restore",
    response_model=ChapterVersionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Restore Chapter Version",
    description="Copy an older version into a new draft and make it current.",
)
async def restore_version(
    series_id: int, volume_id: int, chapter_id: int, version_id: uuid.UUID, user: ActiveUser, service: ChapterServiceDep
) -> ChapterVersionRead:
    version = await service.restore_version(series_id, volume_id, chapter_id, version_id, user.id)
    return ChapterVersionRead.model_validate(version)


@router.put("/{chapter_id}/versions/{version_id}", response_model=ChapterVersionRead, summary="Rename Chapter Version")
async def rename_version(
    series_id: int,
    volume_id: int,
    chapter_id: int,
    version_id: uuid.UUID,
    data: VersionRename,
    user: ActiveUser,
    service: ChapterServiceDep,
) -> ChapterVersionRead:
    version = await service.rename_version(series_id, volume_id, chapter_id, version_id, user.id, data.version_name)
    return ChapterVersionRead.model_validate(version)


@router.delete(
    "/{chapter_id}/versions/{version_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Chapter Version",
    description="Delete a version from the history. The current and the published version cannot be deleted.",
    responses={
        204: {"description": "Version deleted"},
        400: {"description": "The version is the current or published version"},
        403: {"description": "Caller does not own the series"},
        404: {"description": "Series, volume, chapter or version not found"},
    },
)
async def delete_version(
    series_id: int, volume_id: int, chapter_id: int, version_id: uuid.UUID, user: ActiveUser, service: ChapterServiceDep
) -> Response:
    await service.delete_version(series_id, volume_id, chapter_id, version_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
