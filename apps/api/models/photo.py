"""Photo documents: the leaf content items of the archive."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from .common import ContentDocument, LocalizedImage, Reference, Slug, check_unique_refs
from .localized import FallbackChain, LocalizedString, LocalizedText, limit_each_language, require_one_language

PHOTO_TITLE = FallbackChain("title")
PHOTO_DESCRIPTION = FallbackChain("publicDescription")
PHOTO_DATE_NOTE = FallbackChain("dateNote")
PHOTO_ATTRIBUTION = FallbackChain("attribution")
PHOTO_SOURCE = FallbackChain("source")


class RightsStatus(str, Enum):
    PUBLIC_DOMAIN = "public_domain"
    MUSEUM_COLLECTION = "museum_collection"
    ARCHIVE_HOLDING = "archive_holding"
    RESTRICTED = "restricted"
    UNKNOWN = "unknown"


class PhotoImage(LocalizedImage):
    caption: Optional[LocalizedString] = None

    @field_validator("caption")
    @classmethod
    def _check_caption(cls, value):
        message = limit_each_language(value, "Caption", 200)
        if message:
            raise ValueError(message)
        return value


class Photo(ContentDocument):
    type: Literal["photo"] = Field(default="photo", alias="_type")

    # Core
    title: LocalizedString
    slug: Slug
    image: PhotoImage
    publicDescription: Optional[LocalizedText] = None

    # Context
    photographerRef: Optional[Reference] = None
    collectionRef: Optional[Reference] = None
    dateNote: LocalizedString

    # Subject
    placeRefs: Optional[List[Reference]] = None
    tagRefs: Optional[List[Reference]] = None
    themeRefs: Optional[List[Reference]] = None

    # Text
    archivalDescription: Optional[str] = Field(default=None, max_length=1200)
    curatorialNotes: Optional[str] = Field(default=None, max_length=2000)

    # Rights
    rightsStatus: RightsStatus = RightsStatus.UNKNOWN
    attribution: Optional[LocalizedString] = None
    source: Optional[LocalizedString] = None

    internalNotes: Optional[str] = Field(default=None, max_length=2000)

    # Denormalized for the admin preview
    photographerName: Optional[LocalizedString] = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value):
        message = require_one_language(value, "Title", 3, 120)
        if message:
            raise ValueError(message)
        return value

    @field_validator("publicDescription")
    @classmethod
    def _check_description(cls, value):
        message = limit_each_language(value, "Public description", 2000)
        if message:
            raise ValueError(message)
        return value

    @field_validator("dateNote")
    @classmethod
    def _check_date_note(cls, value):
        message = require_one_language(value, "Date", max_len=120)
        if message:
            raise ValueError(message)
        return value

    @field_validator("placeRefs")
    @classmethod
    def _check_places(cls, value):
        return check_unique_refs(value, "Places", 20)

    @field_validator("tagRefs")
    @classmethod
    def _check_tags(cls, value):
        return check_unique_refs(value, "Tags", 30)

    @field_validator("themeRefs")
    @classmethod
    def _check_themes(cls, value):
        return check_unique_refs(value, "Themes", 20)

    @field_validator("attribution")
    @classmethod
    def _check_attribution(cls, value):
        message = limit_each_language(value, "Attribution", 200)
        if message:
            raise ValueError(message)
        return value

    @field_validator("source")
    @classmethod
    def _check_source(cls, value):
        message = limit_each_language(value, "Source", 300)
        if message:
            raise ValueError(message)
        return value

    def preview(self) -> Dict[str, Any]:
        title = self.title.en or self.title.ka or "Untitled photograph"
        byline = None
        if self.photographerName is not None:
            byline = self.photographerName.en or self.photographerName.ka
        parts = [f"by {byline}" if byline else None, self.dateNote.en]
        return {"title": title, "subtitle": " • ".join(part for part in parts if part)}
