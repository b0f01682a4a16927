"""
Wrapped Backend - Client Bundle Route
=======================================

What:  Serves the built single-page client in production.
How:   A catch-all GET registered after the API routers. A request for an
       existing file inside WEB_DIST gets that file; every other path gets
       `index.html` so the client-side router can handle it.

Paths under /api never fall back to the client; unknown API paths stay 404.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from wrapped.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def build_router(web_dist: str) -> APIRouter:
    """Create the catch-all router for a bundle directory."""
    dist_root = Path(web_dist).resolve()
    index_file = dist_root / "index.html"
    router = APIRouter(tags=["Client"], include_in_schema=False)

    @router.get("/{file_path:path}")
    async def serve_client(file_path: str, request: Request) -> FileResponse:
        if file_path == "api" or file_path.startswith("api/"):
            raise NotFoundError("Not found", resource="route", resource_id=request.url.path)

        candidate = (dist_root / file_path).resolve()
        # Path traversal guard: only files inside the bundle directory
        if candidate.is_relative_to(dist_root) and candidate.is_file():
            return FileResponse(path=str(candidate))

        if not index_file.is_file():
            logger.error("Client bundle missing: %s", index_file)
            raise NotFoundError("Not found", resource="file", resource_id=file_path)
        return FileResponse(path=str(index_file), media_type="text/html")

    return router
