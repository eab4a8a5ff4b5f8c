"""Collection / archive documents, optionally nested under a parent collection."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from .common import ContentDocument, LocalizedImage, Reference, Slug
from .localized import FallbackChain, LocalizedString, LocalizedText, limit_each_language, require_one_language

COLLECTION_TITLE = FallbackChain("title", ("title.en", "title.ka"))
COLLECTION_DESCRIPTION = FallbackChain("description")


class CollectionType(str, Enum):
    FAMILY_DONATION = "family_donation"
    INSTITUTIONAL_ACQUISITION = "institutional_acquisition"
    PHOTOGRAPHER_ESTATE = "photographer_estate"
    ORGANIZATIONAL_ARCHIVE = "organizational_archive"
    CURATORIAL_PROJECT = "curatorial_project"
    TECHNICAL_GROUPING = "technical_grouping"
    PARENT_CONTAINER = "parent_container"  # No photos, only sub-collections


COLLECTION_TYPE_LABELS = {
    CollectionType.FAMILY_DONATION: "Family Donation",
    CollectionType.INSTITUTIONAL_ACQUISITION: "Institutional",
    CollectionType.PHOTOGRAPHER_ESTATE: "Photographer Estate",
    CollectionType.ORGANIZATIONAL_ARCHIVE: "Organizational Archive",
    CollectionType.CURATORIAL_PROJECT: "Curatorial Project",
    CollectionType.TECHNICAL_GROUPING: "Technical Grouping",
    CollectionType.PARENT_CONTAINER: "Parent Container",
}


def collection_type_label(value: Optional[str]) -> str:
    try:
        return COLLECTION_TYPE_LABELS[CollectionType(value)]
    except ValueError:
        return "Other"


class Collection(ContentDocument):
    type: Literal["collection"] = Field(default="collection", alias="_type")
    title: LocalizedString
    slug: Slug

    parent: Optional[Reference] = None
    sortOrder: Optional[int] = Field(default=None, ge=0, le=9999)

    collectionType: CollectionType = CollectionType.FAMILY_DONATION
    isOriginalGrouping: bool = True
    curatedBy: Optional[Reference] = None
    sources: Optional[List[str]] = Field(default=None, max_length=20)
    acquisitionYear: Optional[int] = Field(default=None, ge=1840, le=2100)
    acquisitionNote: Optional[LocalizedText] = None

    ownerOrCollector: Optional[LocalizedString] = None
    dateRangeNote: Optional[LocalizedString] = None
    description: Optional[LocalizedText] = None
    curatorialNotes: Optional[str] = Field(default=None, max_length=3000)
    coverImage: Optional[LocalizedImage] = None

    parentTitle: Optional[LocalizedString] = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value):
        message = require_one_language(value, "Title", 2, 140)
        if message:
            raise ValueError(message)
        return value

    @field_validator("dateRangeNote")
    @classmethod
    def _check_date_range(cls, value):
        message = limit_each_language(value, "Date note", 120)
        if message:
            raise ValueError(message)
        return value

    @field_validator("description")
    @classmethod
    def _check_description(cls, value):
        message = limit_each_language(value, "Description", 2000)
        if message:
            raise ValueError(message)
        return value

    @model_validator(mode="after")
    def _reject_self_parent(self):
        if self.parent is not None and self.id and self.parent.ref == self.id:
            raise ValueError("A collection cannot be its own parent.")
        return self

    def preview(self) -> Dict[str, Any]:
        title = self.title.en or self.title.ka or "Untitled collection"
        icon = "📦" if self.isOriginalGrouping else "🎨"
        folder = "📁 " if self.collectionType == CollectionType.PARENT_CONTAINER else ""
        provenance = "Provenance" if self.isOriginalGrouping else "Curatorial"
        parent_title = None
        if self.parentTitle is not None:
            parent_title = self.parentTitle.en or self.parentTitle.ka
        parent_info = f" • Parent: {parent_title}" if parent_title else ""
        return {
            "title": f"{folder}{icon} {title}",
            "subtitle": f"{provenance} • {collection_type_label(self.collectionType)}{parent_info}",
        }
