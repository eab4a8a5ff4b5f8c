"""Theme / subject documents: a hierarchical curated taxonomy."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from .common import ContentDocument, LocalizedImage, Reference, Slug
from .localized import FallbackChain, LocalizedString, LocalizedText, limit_each_language, require_one_language

THEME_TITLE = FallbackChain("title", ("title.en", "title.ka"))
THEME_DESCRIPTION = FallbackChain("description")


class Theme(ContentDocument):
    type: Literal["theme"] = Field(default="theme", alias="_type")
    title: LocalizedString
    slug: Slug
    description: Optional[LocalizedText] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    parent: Optional[Reference] = None
    synonyms: Optional[List[str]] = Field(default=None, max_length=30)
    coverImage: Optional[LocalizedImage] = None
    sortOrder: Optional[int] = Field(default=None, ge=0, le=9999)

    # Denormalized parent title, present when the parent is expanded in a query.
    parentTitle: Optional[LocalizedString] = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value):
        message = require_one_language(value, "Title", 2, 120)
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

    def preview(self) -> Dict[str, Any]:
        title = self.title.en or self.title.ka or "Untitled theme"
        parent_title = None
        if self.parentTitle is not None:
            parent_title = self.parentTitle.en or self.parentTitle.ka
        return {
            "title": title,
            "subtitle": f"Parent: {parent_title}" if parent_title else None,
        }
