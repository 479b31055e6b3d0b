from typing import Literal

from pydantic import BaseModel, ConfigDict

ChangeFrequency = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]


class SitemapEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    loc: str
    lastmod: str  # YYYY-MM-DD
    changefreq: ChangeFrequency
    priority: str
