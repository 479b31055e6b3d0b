"""Client for the remote content store's GROQ query endpoint."""

import json
import logging
from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from blogmeta.config import ContentStoreConfig
from blogmeta.errors import RemoteStoreUnavailable
from blogmeta.models.content import ContentEntity

logger = logging.getLogger(__name__)

_ENTITY_FIELDS = """
  _id,
  title,
  slug,
  excerpt,
  category,
  readTime,
  publishedAt,
  "image": image.asset->url,
  subheader"""

POST_BY_SLUG_QUERY = (
    '*[_type == "post" && slug.current == $slug][0] {' + _ENTITY_FIELDS + "\n}"
)

POSTS_QUERY = (
    '*[_type == "post" && defined(slug.current)] | order(publishedAt desc) {'
    + _ENTITY_FIELDS
    + ",\n  _updatedAt\n}"
)

_ENTITY_LIST = TypeAdapter(List[ContentEntity])


class ContentStoreClient:
    """Runs the two query shapes the edge handler and build tools need.

    Each call issues exactly one HTTP request.  Failures are never retried
    here; they surface as :class:`~blogmeta.errors.RemoteStoreUnavailable`.
    """

    def __init__(
        self,
        config: ContentStoreConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> ContentStoreConfig:
        return self._config

    async def fetch_post(self, slug: str) -> Optional[ContentEntity]:
        """Return the post whose slug is *slug*, or *None* when there is none."""
        result = await self._query(POST_BY_SLUG_QUERY, {"slug": slug})
        if result is None:
            return None
        try:
            return ContentEntity.model_validate(result)
        except ValidationError as exc:
            raise RemoteStoreUnavailable(f"Malformed post payload for slug {slug!r}") from exc

    async def fetch_posts(self) -> List[ContentEntity]:
        """Return every post, newest first."""
        result = await self._query(POSTS_QUERY)
        if result is None:
            return []
        try:
            return _ENTITY_LIST.validate_python(result)
        except ValidationError as exc:
            raise RemoteStoreUnavailable("Malformed post listing payload") from exc

    async def _query(self, query: str, params: Optional[dict] = None) -> Any:
        if not self._config.project_id:
            raise RemoteStoreUnavailable("Content store project id is not configured.")

        query_params = {"query": query}
        for name, value in (params or {}).items():
            # GROQ parameters are passed as JSON literals
            query_params[f"${name}"] = json.dumps(value)

        headers = {"Accept": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout, transport=self._transport
            ) as client:
                response = await client.get(
                    self._config.query_url, params=query_params, headers=headers
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as exc:
            logger.error("Content store timed out: %s", exc)
            raise RemoteStoreUnavailable("Content store timed out.") from exc
        except httpx.HTTPError as exc:
            logger.error("Content store request failed: %s", exc)
            raise RemoteStoreUnavailable(f"Content store request failed: {exc}") from exc
        except ValueError as exc:
            logger.error("Content store returned invalid JSON: %s", exc)
            raise RemoteStoreUnavailable("Content store returned invalid JSON.") from exc

        if not isinstance(payload, dict) or "result" not in payload:
            raise RemoteStoreUnavailable("Content store response has no result field.")
        return payload["result"]
