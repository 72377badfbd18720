"""
asgi.py -- Application assembly for the TODO API.

This is the ONLY file that imports from both api/ and web/. It joins the two
independent layers into a single ASGI app without coupling them to each other.
api/main.py knows nothing about web/; web/spa.py knows nothing about api/.

Run with:  uvicorn asgi:app --reload
           python main.py
"""

from api.main import app
from core.config import get_settings
from web.spa import build_frontend_router

_settings = get_settings()

# Mount the frontend here, not in api/main.py, and only when a built
# frontend is configured. Included last so the catch-all never shadows /api.
if _settings.frontend_dist:
    app.include_router(build_frontend_router(_settings.frontend_dist), tags=["Frontend"])
