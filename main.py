"""
Main API module for the URL shortener.

Responsibilities:
    - Expose REST endpoints for creating, resolving and inspecting short URLs
    - Redirect short codes to their original URL (301) while counting accesses
    - Serve the single-page browser UI and its static assets
    - Report liveness

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - Each app owns its own in-memory Storage; nothing survives a restart.
    - ShortenerManager holds the validation, dedupe and collision rules;
      this module only maps its errors onto HTTP status codes.

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and a clean separation between API and business logic."
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from url_shortener.config import settings
from url_shortener.errors import CodeGenerationError, InvalidURLError, NotFoundError
from url_shortener.manager.shortener_manager import ShortenerManager
from url_shortener.storage.models import URLMapping
from url_shortener.storage.storage_factory import get_storage

STATIC_DIR = Path(__file__).resolve().parent / "static"


class CreateURLRequest(BaseModel):
    """Request payload for creating a new short URL."""
    url: str


class CreateURLResponse(BaseModel):
    short_code: str
    original_url: str
    short_url: str


class URLStats(BaseModel):
    short_code: str
    original_url: str
    created_at: datetime
    access_count: int

    @classmethod
    def from_mapping(cls, mapping: URLMapping) -> "URLStats":
        return cls(**mapping.to_dict())


class URLRecord(URLStats):
    """Admin listing entry; `id` is the short code."""
    id: str

    @classmethod
    def from_mapping(cls, mapping: URLMapping) -> "URLRecord":
        return cls(id=mapping.short_code, **mapping.to_dict())


def create_app() -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Returns:
        FastAPI: A fully configured application instance with its own
                 isolated Storage and ShortenerManager.

    Why an app factory?
        - Enables per-test isolation in pytest.
        - Encourages dependency injection and easy swapping of implementations.
        - Avoids accidental global state across workers/processes.
    """
    app = FastAPI(
        title="URL Shortener",
        description="In-memory URL shortener with access counting",
        docs_url="/docs",  # Swagger UI endpoint
    )
    log = logging.getLogger("url_shortener")

    # basic console logging (optional)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests)
    # ----------------------------------------------------------------
    storage = get_storage()  # reads SHORTENER_STORAGE_BACKEND now
    manager = ShortenerManager(storage=storage)
    log.info("URL shortener storage backend: %s", type(storage).__name__)

    def _short_url(request: Request, short_code: str) -> str:
        if settings.BASE_URL:
            return f"{settings.BASE_URL}/{short_code}"
        return str(request.url_for("redirect_short_url", short_code=short_code))

    # ----------------------------------------------------------------
    # UI
    # ----------------------------------------------------------------
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.get("/", include_in_schema=False)
    def index() -> FileResponse:
        return FileResponse(STATIC_DIR / "index.html", media_type="text/html")

    # ----------------------------------------------------------------
    # API
    # ----------------------------------------------------------------
    @app.get("/api/health")
    def health() -> Dict[str, str]:
        return {
            "status": "healthy",
            "service": "URL Shortener",
            "time": datetime.now(timezone.utc).isoformat(),
        }

    @app.post("/api/shorten", response_model=CreateURLResponse)
    def create_short_url(req: CreateURLRequest, request: Request) -> CreateURLResponse:
        """
        Create (or reuse) a short URL for the given URL.

        Raises:
            HTTPException: 400 if the URL is empty or invalid,
                           500 if no free code could be generated.
        """
        if not req.url:
            raise HTTPException(status_code=400, detail="URL is required")
        try:
            mapping = manager.create_short_url(req.url)
        except InvalidURLError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except CodeGenerationError as e:
            raise HTTPException(status_code=500, detail=str(e))

        return CreateURLResponse(
            short_code=mapping.short_code,
            original_url=mapping.original_url,
            short_url=_short_url(request, mapping.short_code),
        )

    @app.get("/api/stats/{short_code}", response_model=URLStats)
    def stats(short_code: str) -> URLStats:
        try:
            mapping = manager.get_stats(short_code)
        except NotFoundError:
            raise HTTPException(status_code=404, detail="Short URL not found")
        return URLStats.from_mapping(mapping)

    @app.get("/api/urls", response_model=List[URLRecord])
    def list_urls() -> List[URLRecord]:
        """Administrative listing of every mapping (unordered)."""
        return [URLRecord.from_mapping(m) for m in manager.list_urls()]

    # Registered last so it never shadows the routes above.
    @app.get("/{short_code}", name="redirect_short_url")
    def redirect_short_url(short_code: str) -> RedirectResponse:
        """
        Resolve a code, count the access, and redirect permanently.

        Raises:
            HTTPException: 404 if the code is unknown.
        """
        try:
            mapping = manager.resolve(short_code)
        except NotFoundError:
            raise HTTPException(status_code=404, detail="Short URL not found")
        return RedirectResponse(url=mapping.original_url, status_code=301)

    return app


# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
