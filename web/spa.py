"""
web/spa.py -- Serves the built browser frontend next to the API.

The frontend is a single-page app: the browser router owns paths like
/todos/3, so any GET that is not a real file under the dist directory gets
index.html back and the client-side router takes over.

Routes:
  GET /health       -- plain-text liveness probe for the frontend host
  GET /{path:path}  -- static file if it exists, else index.html

Route registration order matters. This router must be included AFTER the API
routers, or the catch-all would shadow them. Paths under /api/ never fall
back to index.html -- an unknown API path is a 404, not an HTML page.

Security: requested paths are resolved and must stay inside the dist
directory. "../" segments or symlinks pointing outside are answered with
index.html, never with the outside file.

Layer rule: web/ knows nothing about api/, auth/, or todos/. asgi.py is the
only module that joins them.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse, PlainTextResponse

logger = logging.getLogger("todoapi.web")


def build_frontend_router(dist_dir: str | Path) -> APIRouter:
    """Return a router serving the single-page app found in dist_dir.

    Raises FileNotFoundError if dist_dir has no index.html -- a
    misconfigured FRONTEND_DIST should fail at startup, not on first request.
    """
    root = Path(dist_dir).resolve()
    index = root / "index.html"
    if not index.is_file():
        raise FileNotFoundError(f"No index.html in frontend directory {root}")

    router = APIRouter()

    @router.get("/health", include_in_schema=False)
    def frontend_health() -> PlainTextResponse:
        return PlainTextResponse("healthy")

    @router.get("/{path:path}", include_in_schema=False)
    def frontend(path: str) -> FileResponse:
        if path == "api" or path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = (root / path).resolve()
        if candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(index)

    logger.info("Serving frontend from %s", root)
    return router
