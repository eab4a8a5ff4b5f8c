from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import ContentDocument, Reference, Slug
from .localized import FallbackChain, LocalizedString, LocalizedText, limit_each_language, require_one_language

CURATOR_NAME = FallbackChain("name", ("name.en", "name.ka"))


class CuratorPortrait(BaseModel):
    model_config = ConfigDict(extra="ignore")

    asset: Optional[Reference] = None
    alt: Optional[str] = None


class Curator(ContentDocument):
    type: Literal["curator"] = Field(default="curator", alias="_type")
    name: LocalizedString
    slug: Optional[Slug] = None
    role: Optional[LocalizedString] = None
    bio: Optional[LocalizedText] = None
    yearsActive: Optional[str] = Field(default=None, max_length=60)
    photo: Optional[CuratorPortrait] = None
    isFounder: bool = False
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        message = require_one_language(value, "Name", 2, 120)
        if message:
            raise ValueError(message)
        return value

    @field_validator("role")
    @classmethod
    def _check_role(cls, value):
        message = limit_each_language(value, "Role", 120)
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

    def preview(self) -> Dict[str, Any]:
        name = self.name.en or self.name.ka or "Unnamed curator"
        role = ""
        if self.role is not None:
            role = self.role.en or self.role.ka or ""
        return {
            "title": f"{'⭐ ' if self.isFounder else ''}{name}",
            "subtitle": role,
        }
