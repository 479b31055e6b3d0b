"""Build-time materialization of crawler-ready HTML pages.

The SPA's compiled ``index.html`` is used as the base document so every
generated page still boots the application.  For each route the existing
``<title>`` is replaced and the metadata tags are inserted right before
``</head>``.
"""

import logging
import re
from pathlib import Path
from typing import List, NamedTuple, Optional

from blogmeta.errors import PartialEntityFailure, TemplateMissing
from blogmeta.models.content import ABOUT_ENTITY, NOT_FOUND_ENTITY, ContentEntity
from blogmeta.services.content_store import ContentStoreClient
from blogmeta.services.metadata import synthesize
from blogmeta.services.normalizer import output_slug
from blogmeta.services.renderer import render_head_tags
from blogmeta.services.structured_data import build_structured_data

logger = logging.getLogger(__name__)

_TITLE_RE = re.compile(r"<title[^>]*>.*?</title>", re.IGNORECASE | re.DOTALL)
_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)

# Tags the base template may already carry; they are replaced, not duplicated.
_EXISTING_SEO_TAG_RE = re.compile(
    r"[ \t]*(?:"
    r"<meta\s[^>]*(?:name|property)\s*=\s*[\"'](?:description|og:[^\"']*|twitter:[^\"']*"
    r"|article:[^\"']*|fb:app_id)[\"'][^>]*>"
    r"|<link\s[^>]*rel\s*=\s*[\"']canonical[\"'][^>]*>"
    r"|<!-- (?:Open Graph|Twitter Card|SEO) -->"
    r"|<script\s[^>]*type\s*=\s*[\"']application/ld\+json[\"'][^>]*>.*?</script>"
    r")[ \t]*\n?",
    re.IGNORECASE | re.DOTALL,
)


class PageTarget(NamedTuple):
    entity: Optional[ContentEntity]
    path: str  # URL path, e.g. "/posts/hello-world"
    output: Path  # relative to the dist directory


def splice_metadata(template: str, title: str, head_tags: str) -> str:
    """Return *template* with its title replaced and *head_tags* appended to the head.

    Raises:
        TemplateMissing: if *template* has no ``</head>``.
    """
    match = _HEAD_CLOSE_RE.search(template)
    if match is None:
        raise TemplateMissing("Base template has no </head> element.")

    head, rest = template[: match.start()], template[match.start():]
    head = _EXISTING_SEO_TAG_RE.sub("", head)

    title_tag = f"<title>{title}</title>"
    if _TITLE_RE.search(head):
        head = _TITLE_RE.sub(lambda _: title_tag, head, count=1)
        insert = head_tags
    else:
        insert = f"    {title_tag}\n{head_tags}"

    return f"{head.rstrip()}\n{insert}\n  {rest}"


class StaticPageMaterializer:
    """Writes one HTML file per known route into *dist_dir*.

    Output layout::

        dist/index.html
        dist/about/index.html
        dist/posts/<slug>/index.html
        dist/404.html
    """

    def __init__(
        self,
        store: ContentStoreClient,
        base_url: str,
        dist_dir: Path,
        template_path: Optional[Path] = None,
        facebook_app_id: Optional[str] = None,
    ) -> None:
        self._store = store
        self._base_url = base_url.rstrip("/")
        self._dist_dir = Path(dist_dir)
        self._template_path = Path(template_path) if template_path else self._dist_dir / "index.html"
        self._facebook_app_id = facebook_app_id

    def load_template(self) -> str:
        try:
            template = self._template_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise TemplateMissing(
                f"Base template {self._template_path} not found; build the SPA assets first."
            ) from exc
        if not _HEAD_CLOSE_RE.search(template):
            raise TemplateMissing(f"Base template {self._template_path} has no </head> element.")
        return template

    async def collect_targets(self) -> List[PageTarget]:
        """Fetch all posts with one bulk query and list every page to write.

        Store failures propagate; there is no partial export.
        """
        posts = await self._store.fetch_posts()
        logger.info("Fetched %d posts from the content store", len(posts))

        targets = [
            PageTarget(None, "/", Path("index.html")),
            PageTarget(ABOUT_ENTITY, "/about", Path("about") / "index.html"),
        ]
        for post in posts:
            slug = output_slug(post)
            targets.append(PageTarget(post, f"/posts/{slug}", Path("posts") / slug / "index.html"))
        targets.append(PageTarget(NOT_FOUND_ENTITY, "/404", Path("404.html")))
        return targets

    def render_page(self, template: str, target: PageTarget) -> str:
        record = synthesize(target.entity, self._base_url + target.path, self._facebook_app_id)
        structured = build_structured_data(target.entity, record)
        return splice_metadata(template, record.title, render_head_tags(record, structured))

    async def write_all(self) -> List[Path]:
        """Materialize every route and return the written file paths.

        Raises:
            TemplateMissing: if the base template is absent or unusable.
            RemoteStoreUnavailable: if the bulk post query fails.
        """
        # Read before writing: dist/index.html is both the template and the home output.
        template = self.load_template()
        targets = await self.collect_targets()

        written: List[Path] = []
        for target in targets:
            try:
                html = self.render_page(template, target)
            except Exception as exc:
                entity_id = target.entity.id if target.entity is not None else "home"
                failure = PartialEntityFailure(entity_id, str(exc))
                logger.warning("%s", failure)
                continue
            destination = self._dist_dir / target.output
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(html, encoding="utf-8")
            written.append(destination)

        logger.info("Pre-rendered %d pages into %s", len(written), self._dist_dir)
        return written
