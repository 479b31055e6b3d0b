"""Checks that materialized pages carry the tags crawlers need."""

import logging
from pathlib import Path
from typing import Dict, List

from bs4 import BeautifulSoup

from blogmeta.services.metadata import MAX_DESC_LEN, MIN_DESC_LEN

logger = logging.getLogger(__name__)

_REQUIRED_PROPERTIES = ("og:title", "og:description", "og:image", "og:url")


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None or not tag.get("content"):
        return ""
    return str(tag["content"])


def audit_page(html: str) -> List[str]:
    """Return a list of problems found in *html*; empty when the page is fine."""
    soup = BeautifulSoup(html, "lxml")
    problems: List[str] = []

    if soup.title is None or not soup.title.get_text(strip=True):
        problems.append("missing <title>")

    for prop in _REQUIRED_PROPERTIES:
        if not _meta_content(soup, property=prop):
            problems.append(f"missing {prop}")

    description = _meta_content(soup, name="description")
    if not description:
        problems.append("missing meta description")
    elif not MIN_DESC_LEN <= len(description) <= MAX_DESC_LEN:
        problems.append(
            f"description length {len(description)} outside [{MIN_DESC_LEN}, {MAX_DESC_LEN}]"
        )

    canonical = soup.find("link", rel="canonical")
    if canonical is None or not canonical.get("href"):
        problems.append("missing canonical link")

    if len(soup.find_all("meta", attrs={"property": "og:title"})) > 1:
        problems.append("duplicate og:title")

    return problems


def audit_tree(dist_dir: Path) -> Dict[Path, List[str]]:
    """Audit every HTML file under *dist_dir*; only failing pages are returned."""
    failures: Dict[Path, List[str]] = {}
    for path in sorted(Path(dist_dir).rglob("*.html")):
        problems = audit_page(path.read_text(encoding="utf-8"))
        if problems:
            logger.warning("%s: %s", path, "; ".join(problems))
            failures[path] = problems
    return failures
