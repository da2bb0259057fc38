"""
API endpoints for the volumes of a series.
"""

from typing import List

from fastapi import APIRouter, Response, status

from dashitoon.core.models.io.volumes import VolumeRead, VolumeWrite

from ...services.deps import ActiveUser, SeriesServiceDep

router = APIRouter()


@router.get("", response_model=List[VolumeRead], summary="List Volumes")
async def list_volumes(series_id: int, service: SeriesServiceDep) -> List[VolumeRead]:
    volumes = await service.list_volumes(series_id)
    return [VolumeRead.model_validate(volume) for volume in volumes]


@router.post(
    "",
    response_model=VolumeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Volume",
    description="Append a volume to the series; it is numbered after the last one.",
)
async def create_volume(series_id: int, data: VolumeWrite, user: ActiveUser, service: SeriesServiceDep) -> VolumeRead:
    volume = await service.create_volume(series_id, user.id, data)
    return VolumeRead.model_validate(volume)


@router.put("/{volume_id}", response_model=VolumeRead, summary="Update Volume")
async def update_volume(
    series_id: int, volume_id: int, data: VolumeWrite, user: ActiveUser, service: SeriesServiceDep
) -> VolumeRead:
    volume = await service.update_volume(series_id, volume_id, user.id, data)
    return VolumeRead.model_validate(volume)


@router.delete("/{volume_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Volume")
async def delete_volume(series_id: int, volume_id: int, user: ActiveUser, service: SeriesServiceDep) -> Response:
    """Delete a volume together with its chapters and their versions."""
    await service.delete_volume(series_id, volume_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
