"""Tests for blogmeta.services.renderer."""

from blogmeta.services.metadata import SITE_TITLE, synthesize
from blogmeta.services.renderer import render_degraded_document, render_document, render_head_tags
from conftest import make_post

_URL = "https://blog.example.com/posts/hello-world"


class TestRenderHeadTags:
    def test_contains_all_platform_tags(self):
        tags = render_head_tags(synthesize(make_post(), _URL))
        for needle in (
            '<meta property="og:title" content="Hello World" />',
            '<meta property="og:type" content="article" />',
            '<meta property="og:image" content="https://x/img.png" />',
            '<meta name="twitter:card" content="summary_large_image" />',
            '<meta name="twitter:title" content="Hello World" />',
            f'<link rel="canonical" href="{_URL}" />',
        ):
            assert needle in tags

    def test_article_tags_only_when_present(self):
        plain = render_head_tags(synthesize(make_post(), _URL))
        assert "article:section" not in plain
        assert "article:published_time" not in plain

        rich = render_head_tags(
            synthesize(make_post(category="AI", published_at="2024-05-01"), _URL)
        )
        assert '<meta property="article:section" content="AI" />' in rich
        assert '<meta property="article:published_time" content="2024-05-01" />' in rich

    def test_structured_data_block(self):
        tags = render_head_tags(synthesize(None, _URL), {"@type": "WebSite"})
        assert '<script type="application/ld+json">' in tags
        assert '"@type": "WebSite"' in tags

    def test_no_title_element(self):
        assert "<title>" not in render_head_tags(synthesize(make_post(), _URL))


class TestRenderDocument:
    def test_fallback_body(self):
        html = render_document(synthesize(make_post(), _URL))
        assert html.startswith("<!DOCTYPE html>")
        assert "<h1>Hello World</h1>" in html
        assert f'<a href="{_URL}">View full article</a>' in html


class TestRenderDegradedDocument:
    def test_only_defaults(self):
        html = render_degraded_document(synthesize(None, _URL))
        assert f"<title>{SITE_TITLE}</title>" in html
        assert '<meta property="og:type" content="website" />' in html
        assert "An error occurred while loading the page content." in html


class TestImageType:
    def test_head_tags_include_image_type(self):
        tags = render_head_tags(synthesize(make_post(), _URL))
        assert '<meta property="og:image:type" content="image/png" />' in tags

    def test_image_type_omitted_when_unknown(self):
        tags = render_head_tags(synthesize(make_post(image="https://cdn.example.com/img"), _URL))
        assert "og:image:type" not in tags

    def test_degraded_document_includes_default_image_type(self):
        html = render_degraded_document(synthesize(None, _URL))
        assert '<meta property="og:image:type" content="image/jpeg" />' in html
