"""Shared building blocks for content-store document schemas."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .localized import LocalizedString, limit_each_language

SLUG_MAX_LENGTH = 96


def slugify(text: str) -> str:
    """Lower-case, join letter/digit runs with '-', trim dashes, cap at 96 chars."""
    value = str(text or "").lower().strip()
    value = re.sub(r"[\W_]+", "-", value)
    value = value.strip("-")
    return value[:SLUG_MAX_LENGTH]


class Reference(BaseModel):
    """Weak reference to another document by id."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ref: str = Field(alias="_ref", min_length=1)


class Slug(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: str = Field(min_length=1, max_length=SLUG_MAX_LENGTH)


class ImageAsset(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    asset: Optional[Reference] = None


class LocalizedImage(ImageAsset):
    """Image with bilingual alt text (180 chars per language)."""

    alt: Optional[LocalizedString] = None

    @field_validator("alt")
    @classmethod
    def _check_alt(cls, value):
        message = limit_each_language(value, "Alt text", 180)
        if message:
            raise ValueError(message)
        return value


class GeoPoint(BaseModel):
    model_config = ConfigDict(extra="ignore")

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    alt: Optional[float] = None


class ContentDocument(BaseModel):
    """Fields every store document carries."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    type: str = Field(alias="_type")
    slug: Optional[Slug] = None

    def preview(self) -> Dict[str, Any]:
        raise NotImplementedError


def check_unique_refs(refs: Optional[List[Reference]], label: str, max_items: int) -> Optional[List[Reference]]:
    if refs is None:
        return refs
    if len(refs) > max_items:
        raise ValueError(f"{label} must have {max_items} items or fewer.")
    seen = set()
    for item in refs:
        if item.ref in seen:
            raise ValueError(f"{label} must not contain duplicates.")
        seen.add(item.ref)
    return refs


def check_unique_strings(values: Optional[List[str]], label: str, max_items: int) -> Optional[List[str]]:
    if values is None:
        return values
    if len(values) > max_items:
        raise ValueError(f"{label} must have {max_items} items or fewer.")
    if len(set(values)) != len(values):
        raise ValueError(f"{label} must not contain duplicates.")
    return values
