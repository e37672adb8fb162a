"""
Static file resolution for the public root.

Maps a URL path onto a file below the public root and picks its
Content-Type. A path whose canonical form (symlinks resolved) is not
inside the public root is refused before anything is opened.
"""

import logging
import os
from pathlib import Path

from contact_site.core.errors import ForbiddenError, InternalError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

MIME_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
}


def content_type_for(path) -> str:
    """Content-Type for ``path`` based on its extension"""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_static_path(public_root: Path, url_path: str, default_document: str = "index.html") -> Path:
    """
    Resolve ``url_path`` to a readable file under ``public_root``.

    Args:
        public_root: Canonical (already resolved) public directory
        url_path: Decoded request path, e.g. ``/css/site.css``
        default_document: File served for ``/``

    Returns:
        Path: Canonical path of the file to serve

    Raises:
        ForbiddenError: the path resolves outside ``public_root``
        NotFoundError: nothing servable exists at the path
        InternalError: the file exists but cannot be read
    """
    relative = url_path.lstrip("/")
    if not relative:
        relative = default_document

    try:
        candidate = (public_root / relative).resolve()
    except (ValueError, OSError):
        # NUL bytes and similar can never name a file
        raise NotFoundError()

    if not candidate.is_relative_to(public_root):
        logger.warning(f"Refused path outside public root: {url_path!r}")
        raise ForbiddenError()

    try:
        if not candidate.is_file():
            raise NotFoundError()
    except OSError:
        raise NotFoundError()

    if not os.access(candidate, os.R_OK):
        logger.error(f"Static file is not readable: {candidate}")
        raise InternalError()

    return candidate
