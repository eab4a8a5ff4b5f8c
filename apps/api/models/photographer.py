from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import Field, field_validator, model_validator

from .common import ContentDocument, Slug
from .localized import FallbackChain, LocalizedString, LocalizedText, limit_each_language, require_one_language

PHOTOGRAPHER_NAME = FallbackChain("name", ("name.en", "name.ka"))
PHOTOGRAPHER_BIO = FallbackChain("bio")


class Photographer(ContentDocument):
    type: Literal["photographer"] = Field(default="photographer", alias="_type")
    name: LocalizedString
    slug: Optional[Slug] = None
    isUnknown: bool = False
    birthYear: Optional[int] = Field(default=None, ge=1700, le=2100)
    deathYear: Optional[int] = Field(default=None, ge=1700, le=2100)
    bio: Optional[LocalizedText] = None
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        message = require_one_language(value, "Name", 2, 120)
        if message:
            raise ValueError(message)
        return value

    @field_validator("bio")
    @classmethod
    def _check_bio(cls, value):
        message = limit_each_language(value, "Bio", 2000)
        if message:
            raise ValueError(message)
        return value

    @model_validator(mode="after")
    def _check_lifespan(self):
        if self.birthYear is not None and self.deathYear is not None and self.deathYear < self.birthYear:
            raise ValueError("Death year cannot be earlier than birth year.")
        return self

    def preview(self) -> Dict[str, Any]:
        return {
            "title": self.name.en or self.name.ka or "Unnamed photographer",
            "subtitle": "Unknown Photographer (system record)" if self.isUnknown else None,
        }
