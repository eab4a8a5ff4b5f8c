"""Place documents. Names are a plain English title plus an optional Georgian title."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from .common import ContentDocument, GeoPoint, Reference, Slug, check_unique_strings
from .localized import FallbackChain

# title[$lang] only matches if a localized title object was ever stored.
PLACE_TITLE = FallbackChain("title", ("title", "titleKa"))


class PlaceType(str, Enum):
    COUNTRY = "country"
    REGION = "region"
    CITY = "city"
    VILLAGE = "village"
    DISTRICT = "district"
    STREET = "street"
    BUILDING = "building"
    SITE = "site"
    LANDSCAPE = "landscape"
    OTHER = "other"


class Certainty(str, Enum):
    EXACT = "exact"
    APPROXIMATE = "approximate"
    DISPUTED = "disputed"
    UNKNOWN = "unknown"


class Place(ContentDocument):
    type: Literal["place"] = Field(default="place", alias="_type")
    title: str = Field(min_length=2, max_length=120)
    titleKa: Optional[str] = Field(default=None, max_length=120)
    altNames: Optional[List[str]] = None
    placeType: PlaceType
    parent: Optional[Reference] = None
    certainty: Certainty = Certainty.UNKNOWN
    geo: Optional[GeoPoint] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    slug: Slug

    @field_validator("altNames")
    @classmethod
    def _check_alt_names(cls, value):
        return check_unique_strings(value, "Alternative names", 30)

    def preview(self) -> Dict[str, Any]:
        return {
            "title": f"{self.title} ({self.placeType.value})",
            "subtitle": f"• {self.titleKa}" if self.titleKa else "",
        }
