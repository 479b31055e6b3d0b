"""Route to content resolution."""

import logging
from typing import Optional

from blogmeta.models.content import ABOUT_ENTITY, NOT_FOUND_ENTITY, ContentEntity
from blogmeta.models.route import Route
from blogmeta.services.content_store import ContentStoreClient

logger = logging.getLogger(__name__)

# A literal "404" slug always means the error page, even if a post uses it.
NOT_FOUND_SLUG = "404"


class ContentResolver:
    def __init__(self, store: ContentStoreClient) -> None:
        self._store = store

    async def resolve(self, route: Route) -> Optional[ContentEntity]:
        """Return the entity for *route*, or *None* for the home page.

        Precedence: about, literal ``404`` slug, store lookup by slug (a miss
        yields the not-found entity), home, then anything else maps to the
        not-found entity.  Store failures propagate as
        :class:`~blogmeta.errors.RemoteStoreUnavailable`.
        """
        if route.kind == "about":
            return ABOUT_ENTITY
        if route.kind == "post" and route.slug == NOT_FOUND_SLUG:
            return NOT_FOUND_ENTITY
        if route.kind == "post":
            entity = await self._store.fetch_post(route.slug)
            if entity is None:
                logger.info("No post found for slug %s", route.slug)
                return NOT_FOUND_ENTITY
            return entity
        if route.kind == "home":
            return None
        return NOT_FOUND_ENTITY
