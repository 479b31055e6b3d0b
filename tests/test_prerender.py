"""Tests for blogmeta.services.prerender."""

import asyncio
from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from blogmeta.errors import RemoteStoreUnavailable, TemplateMissing
from blogmeta.services.metadata import synthesize as real_synthesize
from blogmeta.services.prerender import StaticPageMaterializer, splice_metadata
from conftest import make_post

_BASE_URL = "https://blog.example.com"

_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <link rel="icon" type="image/svg+xml" href="/vite.svg" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <meta name="description" content="Placeholder description" />
    <meta property="og:title" content="Placeholder" />
    <title>Placeholder</title>
    <script type="module" crossorigin src="/assets/index-abc123.js"></script>
  </head>
  <body>
    <div id="root"></div>
  </body>
</html>
"""


@pytest.fixture
def dist(tmp_path):
    dist_dir = tmp_path / "dist"
    dist_dir.mkdir()
    (dist_dir / "index.html").write_text(_TEMPLATE, encoding="utf-8")
    return dist_dir


def _materializer(store, dist_dir, **kwargs) -> StaticPageMaterializer:
    return StaticPageMaterializer(store, base_url=_BASE_URL, dist_dir=dist_dir, **kwargs)


def _soup(path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "lxml")


# ---------------------------------------------------------------------------
# splice_metadata
# ---------------------------------------------------------------------------

class TestSpliceMetadata:
    def test_replaces_title_and_inserts_tags_before_head_close(self):
        result = splice_metadata(_TEMPLATE, "New Title", '    <meta name="x" content="y" />')
        assert "<title>New Title</title>" in result
        assert "Placeholder" not in result
        assert result.index('<meta name="x"') < result.index("</head>")
        assert result.index('<meta name="x"') > result.index("<title>New Title</title>")

    def test_keeps_spa_assets(self):
        result = splice_metadata(_TEMPLATE, "T", "")
        assert '<script type="module" crossorigin src="/assets/index-abc123.js"></script>' in result
        assert '<div id="root"></div>' in result
        assert '<link rel="icon"' in result

    def test_removes_existing_seo_tags(self):
        result = splice_metadata(_TEMPLATE, "T", "")
        assert "Placeholder description" not in result
        assert 'property="og:title"' not in result
        assert 'name="viewport"' in result

    def test_template_without_title_gets_one(self):
        template = "<html><head><meta charset='utf-8'></head><body></body></html>"
        result = splice_metadata(template, "Fresh", "<meta name='a' content='b' />")
        assert "<title>Fresh</title>" in result
        assert result.index("<title>Fresh</title>") < result.index("</head>")

    def test_template_without_head_is_rejected(self):
        with pytest.raises(TemplateMissing):
            splice_metadata("<html><body>no head</body></html>", "T", "")


# ---------------------------------------------------------------------------
# write_all
# ---------------------------------------------------------------------------

class TestWriteAll:
    def test_three_posts_produce_six_pages(self, store, dist):
        store.fetch_posts.return_value = [
            make_post(id="p1", title="First", slug="first"),
            make_post(id="p2", title="Second", slug="second"),
            make_post(id="p3", title="Third Post!", slug=None),
        ]
        written = asyncio.run(_materializer(store, dist).write_all())

        expected = {
            dist / "index.html",
            dist / "about" / "index.html",
            dist / "posts" / "first" / "index.html",
            dist / "posts" / "second" / "index.html",
            dist / "posts" / "third-post" / "index.html",
            dist / "404.html",
        }
        assert set(written) == expected
        assert len(written) == 6
        for path in expected:
            title = _soup(path).title.get_text()
            assert title and title != "Placeholder"
        store.fetch_posts.assert_awaited_once()

    def test_page_metadata(self, store, dist):
        store.fetch_posts.return_value = [
            make_post(category="AI", published_at="2024-05-01T09:00:00Z"),
        ]
        asyncio.run(_materializer(store, dist, facebook_app_id="42").write_all())

        soup = _soup(dist / "posts" / "hello-world" / "index.html")
        assert soup.title.get_text() == "Hello World"
        assert soup.find("meta", property="og:url")["content"] == f"{_BASE_URL}/posts/hello-world"
        assert soup.find("link", rel="canonical")["href"] == f"{_BASE_URL}/posts/hello-world"
        assert soup.find("meta", property="article:section")["content"] == "AI"
        assert soup.find("meta", property="fb:app_id")["content"] == "42"
        assert len(soup.find_all("meta", attrs={"name": "description"})) == 1
        assert soup.find("script", src="/assets/index-abc123.js") is not None

    def test_home_and_special_pages(self, store, dist):
        asyncio.run(_materializer(store, dist).write_all())

        home = _soup(dist / "index.html")
        assert home.find("meta", property="og:url")["content"] == f"{_BASE_URL}/"
        assert home.find("meta", property="og:type")["content"] == "website"
        about = _soup(dist / "about" / "index.html")
        assert about.title.get_text() == "About Super Productive"
        not_found = _soup(dist / "404.html")
        assert not_found.find("meta", property="og:url")["content"] == f"{_BASE_URL}/404"

    def test_external_template_path(self, store, tmp_path):
        template = tmp_path / "template.html"
        template.write_text(_TEMPLATE, encoding="utf-8")
        dist_dir = tmp_path / "out"
        written = asyncio.run(_materializer(store, dist_dir, template_path=template).write_all())
        assert len(written) == 3
        assert (dist_dir / "404.html").exists()

    def test_single_failure_does_not_abort_batch(self, store, dist):
        store.fetch_posts.return_value = [
            make_post(id="p1", title="Good", slug="good"),
            make_post(id="p2", title="Bad", slug="bad"),
        ]
        def flaky(entity, url, facebook_app_id=None):
            if entity is not None and entity.id == "p2":
                raise ValueError("cannot synthesize")
            return real_synthesize(entity, url, facebook_app_id)

        with patch("blogmeta.services.prerender.synthesize", side_effect=flaky):
            written = asyncio.run(_materializer(store, dist).write_all())

        assert dist / "posts" / "good" / "index.html" in written
        assert not (dist / "posts" / "bad").exists()
        assert len(written) == 4

    def test_missing_template_is_fatal(self, store, tmp_path):
        with pytest.raises(TemplateMissing):
            asyncio.run(_materializer(store, tmp_path / "empty").write_all())
        store.fetch_posts.assert_not_called()

    def test_store_failure_aborts_without_writing(self, store, dist):
        store.fetch_posts.side_effect = RemoteStoreUnavailable("down")
        with pytest.raises(RemoteStoreUnavailable):
            asyncio.run(_materializer(store, dist).write_all())
        assert (dist / "index.html").read_text(encoding="utf-8") == _TEMPLATE
        assert not (dist / "about").exists()

    def test_rerun_uses_fresh_template_tags(self, store, dist):
        """Running twice must not duplicate tags, since index.html is overwritten."""
        materializer = _materializer(store, dist)
        asyncio.run(materializer.write_all())
        asyncio.run(materializer.write_all())
        soup = _soup(dist / "index.html")
        assert len(soup.find_all("meta", property="og:title")) == 1
        assert len(soup.find_all("title")) == 1
