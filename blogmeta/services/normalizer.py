"""Slug generation for content without a store-provided slug."""

import re
import unicodedata

from blogmeta.models.content import ContentEntity

_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^\w\-]+", re.ASCII)
_MULTI_HYPHEN_RE = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Convert *text* to a URL slug.

    Lowercases, turns whitespace runs into hyphens, drops everything that is
    not an ASCII word character or hyphen, collapses repeated hyphens and
    trims hyphens from both ends.  Accented Latin letters are folded to their
    ASCII base first (``"Café"`` -> ``"cafe"``, where a plain ASCII strip would
    give ``"caf"``); other non-ASCII letters are dropped, so a title written
    entirely in another script yields ``""``.
    """
    slug = unicodedata.normalize("NFKD", text)
    slug = slug.encode("ascii", "ignore").decode("ascii")
    slug = _WHITESPACE_RE.sub("-", slug.lower().strip())
    slug = _NON_SLUG_RE.sub("", slug)
    slug = _MULTI_HYPHEN_RE.sub("-", slug)
    return slug.strip("-")


def output_slug(entity: ContentEntity) -> str:
    """Return the path segment a post is published under.

    Store slug first, then the slugified title, then the entity id.  A store
    slug that is not a single safe path segment is slugified.
    """
    slug = entity.slug
    if slug and ("/" in slug or "\\" in slug or slug in (".", "..")):
        slug = slugify(slug)
    return slug or slugify(entity.title) or slugify(entity.id) or entity.id
