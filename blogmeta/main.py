import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from blogmeta.config import Settings, configure_logging, load_settings
from blogmeta.routers.og_meta import degraded_response, router as og_meta_router
from blogmeta.services.content_store import ContentStoreClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    content_store: Optional[ContentStoreClient] = None,
) -> FastAPI:
    """Build the edge application.

    *settings* and *content_store* are created once here and shared,
    read-only, by every request.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="BlogMeta – Crawler-aware Edge",
        description=(
            "Serves social-media and search crawlers static documents with "
            "Open Graph, Twitter Card and SEO tags; redirects browsers to the SPA."
        ),
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.content_store = content_store or ContentStoreClient(settings.content_store)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
        logger.exception("Unhandled exception for %s", request.url)
        return degraded_response(request)

    app.include_router(og_meta_router)
    return app


configure_logging()
app = create_app()
