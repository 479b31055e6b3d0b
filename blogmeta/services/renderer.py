"""HTML rendering of head tags and standalone crawler documents."""

from typing import Any, Dict, List, Optional

from blogmeta.models.metadata import MetadataRecord
from blogmeta.services.metadata import SITE_NAME, escape_html
from blogmeta.services.structured_data import dump_json_ld

OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630

_INDENT = "    "


def render_head_tags(
    record: MetadataRecord,
    structured_data: Optional[Dict[str, Any]] = None,
    indent: str = _INDENT,
) -> str:
    """Return the Open Graph, Twitter Card and SEO tags for *record*.

    The ``<title>`` element is not included; callers place it themselves.
    """
    site_name = escape_html(SITE_NAME)
    lines: List[str] = [
        "<!-- Open Graph -->",
        f'<meta property="og:title" content="{record.title}" />',
        f'<meta property="og:description" content="{record.description}" />',
        f'<meta property="og:type" content="{record.og_type}" />',
        f'<meta property="og:url" content="{record.url}" />',
        f'<meta property="og:site_name" content="{site_name}" />',
        f'<meta property="og:image" content="{record.image}" />',
        f'<meta property="og:image:alt" content="{record.title}" />',
        f'<meta property="og:image:width" content="{OG_IMAGE_WIDTH}" />',
        f'<meta property="og:image:height" content="{OG_IMAGE_HEIGHT}" />',
    ]
    if record.image_type:
        lines.append(f'<meta property="og:image:type" content="{record.image_type}" />')
    if record.facebook_app_id:
        lines.append(f'<meta property="fb:app_id" content="{record.facebook_app_id}" />')
    if record.category:
        lines.append(f'<meta property="article:section" content="{record.category}" />')
    if record.published_at:
        lines.append(
            f'<meta property="article:published_time" content="{record.published_at}" />'
        )
    lines += [
        "<!-- Twitter Card -->",
        '<meta name="twitter:card" content="summary_large_image" />',
        f'<meta name="twitter:title" content="{record.title}" />',
        f'<meta name="twitter:description" content="{record.description}" />',
        f'<meta name="twitter:image" content="{record.image}" />',
        f'<meta name="twitter:image:alt" content="{record.title}" />',
        "<!-- SEO -->",
        f'<meta name="description" content="{record.description}" />',
        f'<link rel="canonical" href="{record.url}" />',
    ]
    if structured_data is not None:
        lines.append('<script type="application/ld+json">')
        lines.append(dump_json_ld(structured_data))
        lines.append("</script>")
    return "\n".join(indent + line for line in lines)


def render_document(
    record: MetadataRecord, structured_data: Optional[Dict[str, Any]] = None
) -> str:
    """Return a standalone HTML document for crawlers."""
    head_tags = render_head_tags(record, structured_data)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{record.title}</title>
{head_tags}
</head>
<body>
    <main style="font-family: Arial, sans-serif; text-align: center; padding: 50px;">
        <h1>{record.title}</h1>
        <p>{record.description}</p>
        <p><a href="{record.url}">View full article</a></p>
    </main>
</body>
</html>
"""


def render_degraded_document(record: MetadataRecord) -> str:
    """Return the reduced document served when content could not be loaded.

    Only Open Graph basics are emitted; *record* must be built from site
    defaults so rendering it needs no further store access.
    """
    site_name = escape_html(SITE_NAME)
    image_type = (
        f'\n    <meta property="og:image:type" content="{record.image_type}" />'
        if record.image_type
        else ""
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{record.title}</title>
    <meta property="og:title" content="{record.title}" />
    <meta property="og:description" content="{record.description}" />
    <meta property="og:image" content="{record.image}" />
    <meta property="og:image:width" content="{OG_IMAGE_WIDTH}" />
    <meta property="og:image:height" content="{OG_IMAGE_HEIGHT}" />{image_type}
    <meta property="og:url" content="{record.url}" />
    <meta property="og:type" content="website" />
    <meta property="og:site_name" content="{site_name}" />
    <meta name="description" content="{record.description}" />
</head>
<body>
    <main style="font-family: Arial, sans-serif; text-align: center; padding: 50px;">
        <h1>{site_name}</h1>
        <p>An error occurred while loading the page content.</p>
        <p><a href="{record.url}">Visit the main site</a></p>
    </main>
</body>
</html>
"""
