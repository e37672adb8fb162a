from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
import logging

from contact_site.core.config import Settings, get_settings
from contact_site.core.errors import InternalError, SiteError
from contact_site.core.static_files import content_type_for, resolve_static_path

router = APIRouter()
logger = logging.getLogger(__name__)

# Every method falls through to the public root, so e.g. GET /api/contact is a plain 404
STATIC_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=STATIC_METHODS, include_in_schema=False)
async def serve_static(path: str, settings: Settings = Depends(get_settings)):
    """Serve a file from the public root; errors are rendered by the app's SiteError handler"""
    try:
        file_path = resolve_static_path(settings.public_root, path, settings.default_document)
    except SiteError:
        raise
    except Exception:
        logger.exception(f"Failed to resolve static path {path!r}")
        raise InternalError()

    return FileResponse(
        file_path,
        media_type=content_type_for(file_path),
        headers={"Cache-Control": settings.static_cache_control},
    )
