"""Static host for the pre-built client bundle.

Any GET that is not an API route serves the file at that path inside the
bundle directory, or falls back to index.html so client-side routes resolve.
Must be included after every API router.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from ..settings import settings

router = APIRouter()
logger = logging.getLogger("saffron.spa")

API_PREFIX = "api"


def dist_dir() -> Path:
    return Path(settings.client_dist_dir).resolve()


def resolve_bundle_file(root: Path, requested: str) -> Optional[Path]:
    """Return the bundle file for `requested`, or None if it is missing or outside `root`."""
    if not requested:
        return None
    candidate = (root / requested).resolve()
    if root not in candidate.parents:
        return None
    return candidate if candidate.is_file() else None


@router.get("/{full_path:path}", include_in_schema=False)
def serve_client(full_path: str):
    if full_path == API_PREFIX or full_path.startswith(f"{API_PREFIX}/"):
        raise HTTPException(status_code=404, detail="Not Found")

    root = dist_dir()
    asset = resolve_bundle_file(root, full_path)
    if asset is not None:
        return FileResponse(str(asset))

    index = root / "index.html"
    if not index.is_file():
        logger.warning(f"Client bundle not found at {root}")
        raise HTTPException(status_code=404, detail="Client bundle not built")
    return FileResponse(str(index), media_type="text/html")
