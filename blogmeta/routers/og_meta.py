"""Crawler-aware edge handler.

Crawlers receive a standalone document with every meta tag rendered
server-side.  Everyone else is redirected into the SPA at the same URL.
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from blogmeta.errors import RemoteStoreUnavailable
from blogmeta.models.route import Route
from blogmeta.services.classifier import is_crawler
from blogmeta.services.metadata import absolute_url, synthesize
from blogmeta.services.renderer import render_degraded_document, render_document
from blogmeta.services.resolver import ContentResolver
from blogmeta.services.structured_data import build_structured_data

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
}

PAGE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def get_resolver(request: Request) -> ContentResolver:
    return ContentResolver(request.app.state.content_store)


def request_url(request: Request) -> str:
    """Absolute ``https`` URL of *request*, ignoring any proxy scheme.

    The path keeps its original percent-encoding; ``request.url.path`` is
    already decoded and would not round-trip.
    """
    host = request.headers.get("host") or request.url.netloc
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = quote(request.url.path, safe="/")
    return absolute_url(host, path)


def degraded_response(request: Request) -> HTMLResponse:
    """The reduced 500 document, built from site defaults only."""
    record = synthesize(None, request_url(request), request.app.state.settings.facebook_app_id)
    return HTMLResponse(
        content=render_degraded_document(record),
        status_code=500,
        headers={"Access-Control-Allow-Origin": "*"},
    )


@router.options("/{path:path}", include_in_schema=False)
async def preflight(path: str) -> Response:
    return Response(status_code=200, content=b"", headers=CORS_HEADERS)


# Every method except OPTIONS goes through the crawler check.
@router.api_route(
    "/{path:path}",
    methods=PAGE_METHODS,
    response_class=HTMLResponse,
    summary="Crawler-aware page",
)
async def og_meta(
    request: Request,
    path: str,
    resolver: ContentResolver = Depends(get_resolver),
) -> Response:
    """Serve crawlers a static meta-tag document; redirect humans to the SPA."""
    user_agent = request.headers.get("user-agent", "")
    url = request_url(request)
    crawler = is_crawler(user_agent)
    logger.info(
        "Request for %s (crawler=%s, host=%s, user_agent=%s)",
        request.url.path,
        crawler,
        request.headers.get("host", ""),
        user_agent[:100],
    )

    if not crawler:
        return RedirectResponse(url=url, status_code=302, headers={"Cache-Control": "no-cache"})

    route = Route.parse(request.url.path)
    try:
        entity = await resolver.resolve(route)
    except RemoteStoreUnavailable as exc:
        logger.error("Content store unavailable for %s: %s", route.path, exc)
        return degraded_response(request)

    record = synthesize(entity, url, request.app.state.settings.facebook_app_id)
    return HTMLResponse(
        content=render_document(record, build_structured_data(entity, record)),
        status_code=200,
        headers={
            "Cache-Control": "public, max-age=3600",
            "Access-Control-Allow-Origin": "*",
        },
    )
