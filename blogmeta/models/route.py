from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

RouteKind = Literal["home", "about", "post", "not_found", "unknown"]

_POSTS_PREFIX = "/posts/"


class Route(BaseModel):
    """A parsed request target.  ``slug`` is set only for ``post`` routes."""

    model_config = ConfigDict(frozen=True)

    kind: RouteKind
    path: str
    slug: Optional[str] = None

    @classmethod
    def parse(cls, path: str) -> "Route":
        """Classify a raw request path.

        ``/`` is home, ``/about`` is about, ``/posts/<slug>`` is a post and
        ``/404`` is the not-found page.  Trailing slashes are ignored.
        Anything else, including ``/posts/`` with no slug, is ``unknown``.
        """
        if not path.startswith("/"):
            path = "/" + path
        trimmed = path.rstrip("/") or "/"

        if trimmed == "/":
            return cls(kind="home", path=path)
        if trimmed == "/about":
            return cls(kind="about", path=path)
        if trimmed == "/404":
            return cls(kind="not_found", path=path)
        if trimmed.startswith(_POSTS_PREFIX):
            slug = trimmed[len(_POSTS_PREFIX):]
            if slug:
                return cls(kind="post", path=path, slug=slug)
        return cls(kind="unknown", path=path)
