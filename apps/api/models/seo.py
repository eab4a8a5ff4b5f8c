from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import ImageAsset


class Seo(BaseModel):
    """Reusable page metadata for search indexing and link previews."""

    model_config = ConfigDict(extra="ignore")

    metaTitle: Optional[str] = Field(default=None, max_length=60)
    metaDescription: Optional[str] = Field(default=None, max_length=160)
    ogImage: Optional[ImageAsset] = None
    noIndex: bool = False
