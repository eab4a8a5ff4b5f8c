"""Controlled-vocabulary tags, distinct from the hierarchical themes."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from .common import ContentDocument, Slug, check_unique_strings


class TagScope(str, Enum):
    SUBJECT = "subject"
    TECHNIQUE = "technique"
    FORMAT = "format"
    UNIFORM = "uniform"
    ARCHITECTURE = "architecture"
    EVENT = "event"
    OTHER = "other"


class Tag(ContentDocument):
    type: Literal["tag"] = Field(default="tag", alias="_type")
    title: str = Field(min_length=2, max_length=80)
    titleKa: Optional[str] = Field(default=None, max_length=80)
    scope: TagScope
    altLabels: Optional[List[str]] = None
    slug: Slug

    @field_validator("altLabels")
    @classmethod
    def _check_alt_labels(cls, value):
        return check_unique_strings(value, "Alternative labels", 20)

    def preview(self) -> Dict[str, Any]:
        return {
            "title": f"{self.title} ({self.scope.value})",
            "subtitle": f"• {self.titleKa}" if self.titleKa else "",
        }
