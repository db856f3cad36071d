"""Serve tenant images stored on the local filesystem."""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from menuscarta.services.image_store import CACHE_CONTROL, content_type_for, resolve_image_path

router: APIRouter = APIRouter()


@router.get("/{slug}/images/{filename}")
def get_image(slug: str, filename: str) -> FileResponse:
    path = resolve_image_path(slug, filename)
    return FileResponse(
        path,
        media_type=content_type_for(filename),
        headers={"Cache-Control": CACHE_CONTROL},
    )
