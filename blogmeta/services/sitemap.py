"""Sitemap generation for the home page, the about page and every post."""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable, List, Optional
from xml.etree import ElementTree

from blogmeta.models.content import ContentEntity
from blogmeta.models.sitemap_entry import SitemapEntry
from blogmeta.services.content_store import ContentStoreClient
from blogmeta.services.normalizer import output_slug

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _parse_date(value: Optional[str]) -> Optional[date]:
    """Return the calendar date of an ISO-8601 date or timestamp, or *None*."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    except ValueError:
        logger.warning("Ignoring unparseable timestamp %r", value)
        return None


def post_lastmod(post: ContentEntity, today: date) -> str:
    """Update time, else publish time, else *today*, as ``YYYY-MM-DD``."""
    lastmod = _parse_date(post.updated_at) or _parse_date(post.published_at) or today
    return lastmod.isoformat()


def build_entries(base_url: str, posts: List[ContentEntity], today: date) -> List[SitemapEntry]:
    base_url = base_url.rstrip("/")
    current = today.isoformat()
    entries = [
        SitemapEntry(loc=base_url, lastmod=current, changefreq="daily", priority="1.0"),
        SitemapEntry(loc=f"{base_url}/about", lastmod=current, changefreq="monthly", priority="0.8"),
    ]
    for post in posts:
        entries.append(
            SitemapEntry(
                loc=f"{base_url}/posts/{output_slug(post)}",
                lastmod=post_lastmod(post, today),
                changefreq="monthly",
                priority="0.7",
            )
        )
    return entries


def serialize(entries: List[SitemapEntry]) -> bytes:
    """Return the sitemap-protocol XML document for *entries*, UTF-8 encoded."""
    ElementTree.register_namespace("", SITEMAP_NS)
    urlset = ElementTree.Element(f"{{{SITEMAP_NS}}}urlset")
    for entry in entries:
        url = ElementTree.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        for tag in ("loc", "lastmod", "changefreq", "priority"):
            ElementTree.SubElement(url, f"{{{SITEMAP_NS}}}{tag}").text = getattr(entry, tag)
    ElementTree.indent(urlset, space="  ")
    return ElementTree.tostring(urlset, encoding="utf-8", xml_declaration=True) + b"\n"


class SitemapBuilder:
    def __init__(
        self,
        store: ContentStoreClient,
        base_url: str,
        output_path: Path,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._base_url = base_url
        self._output_path = Path(output_path)
        self._clock = clock

    async def build(self) -> List[SitemapEntry]:
        """Fetch all posts and return the sitemap entries.

        Store failures propagate so no partial sitemap is ever written.
        """
        posts = await self._store.fetch_posts()
        return build_entries(self._base_url, posts, self._clock())

    async def write(self) -> Path:
        entries = await self.build()
        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        self._output_path.write_bytes(serialize(entries))
        logger.info("Wrote sitemap with %d URLs to %s", len(entries), self._output_path)
        return self._output_path
