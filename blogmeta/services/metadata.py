"""Metadata synthesis shared by the edge handler and the build tools.

Both request-time and build-time paths call :func:`synthesize`, so titles,
descriptions and images are normalized by one policy only.
"""

import html
import mimetypes
from typing import Optional
from urllib.parse import urlparse

from blogmeta.models.content import ContentEntity
from blogmeta.models.metadata import MetadataRecord

SITE_NAME = "Super Productive"
SITE_TITLE = SITE_NAME
DEFAULT_DESCRIPTION = (
    "Bite-sized tech tips to level up your productivity. Weekly insights on AI "
    "prompts, productivity tools, and smart workflows for knowledge workers."
)
FALLBACK_SENTENCE = (
    "From Super Productive: weekly insights on AI prompts, productivity tools, "
    "and smart workflows for knowledge workers."
)
DEFAULT_OG_IMAGE = (
    "https://images.pexels.com/photos/3184433/pexels-photo-3184433.jpeg"
    "?auto=compress&cs=tinysrgb&w=1200&h=630&dpr=1"
)

MIN_DESC_LEN = 100
MAX_DESC_LEN = 300
_ELLIPSIS = "..."


def escape_html(value: str) -> str:
    """Escape ``& < > " '`` for HTML text and attribute context."""
    return html.escape(value, quote=True)


def normalize_description(candidate: str) -> str:
    """Pad short descriptions with the fallback sentence and cap long ones.

    The result is at least ``MIN_DESC_LEN`` characters unless the candidate
    plus fallback sentence is itself shorter, and never longer than
    ``MAX_DESC_LEN``.  Operates on unescaped text.
    """
    description = candidate.strip()
    if len(description) < MIN_DESC_LEN:
        description = f"{description} {FALLBACK_SENTENCE}" if description else FALLBACK_SENTENCE
    if len(description) > MAX_DESC_LEN:
        description = description[: MAX_DESC_LEN - len(_ELLIPSIS)] + _ELLIPSIS
    return description


def absolute_url(host: str, path: str) -> str:
    """Return ``https://<host><path>`` regardless of the inbound scheme."""
    if not path.startswith("/"):
        path = "/" + path
    return f"https://{host}{path}"


def image_mime_type(url: str) -> Optional[str]:
    """Guess the MIME type of an image URL from its path extension."""
    mime, _ = mimetypes.guess_type(urlparse(url).path)
    return mime if mime and mime.startswith("image/") else None


def _description_candidate(entity: Optional[ContentEntity]) -> str:
    if entity is None:
        return DEFAULT_DESCRIPTION
    return entity.excerpt or entity.subheader or ""


def synthesize(
    entity: Optional[ContentEntity],
    url: str,
    facebook_app_id: Optional[str] = None,
) -> MetadataRecord:
    """Build the escaped :class:`MetadataRecord` for *entity* at *url*.

    *entity* is *None* for the home page, which uses the site defaults.
    Escaping is applied after truncation so no entity reference is cut.
    """
    title = (entity.title if entity is not None else "") or SITE_TITLE
    description = normalize_description(_description_candidate(entity))
    image = (entity.image if entity is not None else None) or DEFAULT_OG_IMAGE

    return MetadataRecord(
        title=escape_html(title),
        description=escape_html(description),
        image=escape_html(image),
        image_type=image_mime_type(image),
        url=escape_html(url),
        og_type="article" if entity is not None else "website",
        category=escape_html(entity.category) if entity is not None and entity.category else None,
        published_at=(
            escape_html(entity.published_at)
            if entity is not None and entity.published_at
            else None
        ),
        facebook_app_id=escape_html(facebook_app_id) if facebook_app_id else None,
    )
