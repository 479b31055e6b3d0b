"""Tests for blogmeta.models.route.Route.parse."""

from blogmeta.models.route import Route


class TestRouteParse:
    def test_root_is_home(self):
        assert Route.parse("/").kind == "home"

    def test_empty_is_home(self):
        route = Route.parse("")
        assert route.kind == "home"
        assert route.path == "/"

    def test_about(self):
        assert Route.parse("/about").kind == "about"

    def test_about_trailing_slash(self):
        assert Route.parse("/about/").kind == "about"

    def test_post_slug(self):
        route = Route.parse("/posts/hello-world")
        assert route.kind == "post"
        assert route.slug == "hello-world"
        assert route.path == "/posts/hello-world"

    def test_post_trailing_slash_is_stripped_from_slug(self):
        assert Route.parse("/posts/hello-world/").slug == "hello-world"

    def test_literal_404_post_slug_is_a_post_route(self):
        route = Route.parse("/posts/404")
        assert route.kind == "post"
        assert route.slug == "404"

    def test_not_found_path(self):
        assert Route.parse("/404").kind == "not_found"

    def test_posts_without_slug_is_unknown(self):
        assert Route.parse("/posts/").kind == "unknown"

    def test_other_path_is_unknown(self):
        route = Route.parse("/contact")
        assert route.kind == "unknown"
        assert route.slug is None
