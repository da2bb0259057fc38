"""
API endpoints for thumbnail images.
"""

from fastapi import APIRouter, File, Response, UploadFile, status

from dashitoon.core.models.io.images import ImageUploadRead

from ...services.deps import ActiveUser, ImageStorageDep

router = APIRouter()


@router.post(
    "",
    response_model=ImageUploadRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Image",
    description="Upload a JPEG, PNG or WEBP image of at most 2 MiB. Returns the generated file name.",
)
async def upload_image(user: ActiveUser, storage: ImageStorageDep, file: UploadFile = File(...)) -> ImageUploadRead:
    data = await file.read()
    content_type = file.content_type or ""
    stored_name = await storage.upload(file.filename or "", data, content_type)
    return ImageUploadRead(file_name=stored_name, content_type=content_type, size=len(data))


@router.get("/{file_name}", summary="Get Image", responses={200: {"content": {"image/*": {}}}, 404: {}})
async def get_image(file_name: str, storage: ImageStorageDep) -> Response:
    data, content_type = await storage.fetch(file_name)
    return Response(content=data, media_type=content_type)
