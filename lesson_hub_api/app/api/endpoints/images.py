"""
Static lesson images.

Files are served from the configured images directory (lesson images
live in its ``lessons`` subdirectory).  The content type follows the
file extension and responses may be cached for a day.  A missing file
answers 404 with a JSON body naming the requested path and listing the
files that do exist next to it.
"""

import logging
from pathlib import Path
from typing import List

from fastapi import APIRouter, Request, status
from fastapi.responses import FileResponse, JSONResponse


logger = logging.getLogger(__name__)

router = APIRouter()

CACHE_CONTROL = "public, max-age=86400"
MAX_SUGGESTIONS = 10


def _suggestions(directory: Path, prefix: str) -> List[str]:
    if not directory.is_dir():
        return []
    names = sorted(entry.name for entry in directory.iterdir() if entry.is_file())
    return [f"{prefix}/{name}" for name in names[:MAX_SUGGESTIONS]]


@router.get("/{image_path:path}")
async def get_image(image_path: str, request: Request):
    root = Path(request.app.state.images_dir).resolve()
    requested_path = "/" + image_path.lstrip("/")
    try:
        target = (root / image_path.lstrip("/")).resolve()
        found = target.is_relative_to(root) and target.is_file()
    except (OSError, ValueError):
        # Names the filesystem cannot represent, such as embedded NUL bytes.
        target, found = root, False

    if found:
        return FileResponse(target, headers={"Cache-Control": CACHE_CONTROL})

    logger.warning("Image not found: %r", requested_path)
    parent = target.parent if target != root and target.parent.is_relative_to(root) else root
    relative = parent.relative_to(root).as_posix()
    prefix = "/images" if relative == "." else f"/images/{relative}"
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "message": "Image not found",
            "requestedPath": requested_path,
            "suggestions": _suggestions(parent, prefix),
        },
    )
