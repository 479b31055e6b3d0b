from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentEntity(BaseModel):
    """One piece of content a route can resolve to.

    Field aliases follow the content store's wire names (``_id``,
    ``readTime``, ``publishedAt``, ``_updatedAt``) so query results can be
    validated directly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="_id")
    title: str = ""
    excerpt: Optional[str] = None
    subheader: Optional[str] = None
    category: Optional[str] = None
    read_time: Optional[Union[int, float, str]] = Field(default=None, alias="readTime")
    published_at: Optional[str] = Field(default=None, alias="publishedAt")
    updated_at: Optional[str] = Field(default=None, alias="_updatedAt")
    image: Optional[str] = None
    slug: Optional[str] = None

    @field_validator("slug", mode="before")
    @classmethod
    def _flatten_slug(cls, value: Any) -> Optional[str]:
        # The store wraps slugs as {"_type": "slug", "current": "..."}
        if isinstance(value, dict):
            value = value.get("current")
        if isinstance(value, str):
            value = value.strip()
        return value or None

    @field_validator("title", mode="before")
    @classmethod
    def _title_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


ABOUT_ENTITY = ContentEntity(
    id="about",
    title="About Super Productive",
    excerpt=(
        "Prompting without a strategy is like building a house without a blueprint. "
        "It might feel like progress, but it's just motion without direction: fast, "
        "but aimless. Super Productive is a weekly newsletter designed to help "
        "knowledge workers navigate the full spectrum of modern productivity."
    ),
    image="https://images.unsplash.com/photo-1499750310107-5fef28a66643?w=400&h=250&fit=crop",
    slug="about",
)

NOT_FOUND_ENTITY = ContentEntity(
    id="404",
    title="Uh-oh. Looks like that page doesn't exist.",
    excerpt=(
        "It either wandered off or never existed in the first place. You can head "
        "back to the homepage to explore our bite-sized tech tips and productivity "
        "insights, or just start clicking buttons to discover new content."
    ),
    category="Errors",
    read_time="404 sec",
    image="https://images.unsplash.com/photo-1594736797933-d0d92e2d0b3d?w=400&h=250&fit=crop",
    slug="404",
)
