from unittest.mock import AsyncMock

import pytest

from blogmeta.config import ContentStoreConfig, Settings
from blogmeta.models.content import ContentEntity
from blogmeta.services.content_store import ContentStoreClient


@pytest.fixture
def settings() -> Settings:
    return Settings(
        content_store=ContentStoreConfig(project_id="test-project"),
        base_url="https://blog.example.com",
    )


@pytest.fixture
def store() -> AsyncMock:
    """A content store double; configure ``fetch_post`` / ``fetch_posts`` per test."""
    fake = AsyncMock(spec=ContentStoreClient)
    fake.fetch_post.return_value = None
    fake.fetch_posts.return_value = []
    return fake


def make_post(**overrides) -> ContentEntity:
    fields = {
        "id": "post-1",
        "title": "Hello World",
        "excerpt": "A short post.",
        "image": "https://x/img.png",
        "slug": "hello-world",
    }
    fields.update(overrides)
    return ContentEntity(**fields)
