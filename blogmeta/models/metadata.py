from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class MetadataRecord(BaseModel):
    """Head metadata for one page.

    Every string field is already HTML-escaped and can be interpolated into
    attribute or text context as-is.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    image: str
    image_type: Optional[str] = None
    url: str
    og_type: Literal["article", "website"] = "website"
    category: Optional[str] = None
    published_at: Optional[str] = None
    facebook_app_id: Optional[str] = None
