"""Schema.org JSON-LD for the rendered head."""

import html
import json
import re
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from blogmeta.models.content import ABOUT_ENTITY, NOT_FOUND_ENTITY, ContentEntity
from blogmeta.models.metadata import MetadataRecord
from blogmeta.services.metadata import SITE_NAME

_DIGITS_RE = re.compile(r"\d+")
_DEFAULT_READ_MINUTES = 5


def _site_root(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _organization(site_root: str) -> Dict[str, Any]:
    return {"@type": "Organization", "name": SITE_NAME, "url": site_root}


def format_read_time(read_time: Any) -> str:
    """Convert a free-form read time such as ``"5 min"`` to ``PT5M``."""
    match = _DIGITS_RE.search(str(read_time))
    minutes = int(match.group()) if match else _DEFAULT_READ_MINUTES
    return f"PT{minutes or _DEFAULT_READ_MINUTES}M"


def build_structured_data(
    entity: Optional[ContentEntity], record: MetadataRecord
) -> Dict[str, Any]:
    """Return the JSON-LD object describing the page *record* renders.

    Values are taken from *record* and unescaped, since JSON-LD is not HTML.
    """
    url = html.unescape(record.url)
    title = html.unescape(record.title)
    description = html.unescape(record.description)
    site_root = _site_root(url)

    if entity is None or entity is NOT_FOUND_ENTITY:
        return {
            "@context": "https://schema.org",
            "@type": "WebSite" if entity is None else "WebPage",
            "name": title,
            "url": url,
            "description": description,
            "publisher": _organization(site_root),
        }

    if entity is ABOUT_ENTITY:
        return {
            "@context": "https://schema.org",
            "@type": "AboutPage",
            "name": title,
            "description": description,
            "url": url,
            "mainEntity": _organization(site_root),
            "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        }

    data: Dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": title,
        "description": description,
        "image": html.unescape(record.image),
        "author": _organization(site_root),
        "publisher": _organization(site_root),
        "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        "url": url,
    }
    if entity.published_at:
        data["datePublished"] = entity.published_at
        data["dateModified"] = entity.updated_at or entity.published_at
    if entity.category:
        data["articleSection"] = entity.category
    if entity.read_time is not None and str(entity.read_time).strip():
        data["timeRequired"] = format_read_time(entity.read_time)
    return data


def dump_json_ld(data: Dict[str, Any]) -> str:
    """Serialize *data* for embedding inside a ``<script>`` element."""
    return json.dumps(data, ensure_ascii=False, indent=2).replace("<", "\\u003c")
