"""
app/api/frontend.py

Purpose: Serves the built single-page client

- Static files come from settings.STATIC_DIR when it exists
- Unknown GET paths fall back to index.html so client-side routes work
- Must be registered after every API router
"""

from pathlib import Path

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.responses import FileResponse

from app.core.logging import get_logger

logger = get_logger(__name__)


def build_frontend_router(static_dir: Path) -> APIRouter:
    """
    Builds the catch-all router for a front-end build directory.

    Args:
        static_dir: Directory holding index.html and assets

    Returns:
        Router with a single GET catch-all route
    """
    root = static_dir.resolve()
    index_file = root / "index.html"
    router = APIRouter()

    @router.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")

        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)

        if not index_file.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(index_file)

    return router


def register_frontend(app: FastAPI, static_dir: str) -> bool:
    """
    Mounts the front-end if the build directory exists.

    Returns:
        True if the front-end is served
    """
    path = Path(static_dir)
    if not path.is_dir():
        logger.info(f"No front-end build at '{static_dir}', serving API only")
        return False

    app.include_router(build_frontend_router(path), tags=["Frontend"])
    logger.info(f"Serving front-end from '{path.resolve()}'")
    return True
