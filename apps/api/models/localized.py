"""
Bilingual (EN/KA) value objects and the per-field fallback chains used to
resolve them for a requested language.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

SUPPORTED_LANGUAGES = ("en", "ka")
LANGUAGE_NAMES = {"en": "English", "ka": "Georgian"}


class LocalizedString(BaseModel):
    """Bilingual field (EN/KA) for public-facing short text."""

    model_config = ConfigDict(extra="ignore")

    en: Optional[str] = Field(default=None, max_length=2000)
    ka: Optional[str] = Field(default=None, max_length=2000)

    def preview(self) -> Dict[str, Optional[str]]:
        return {
            "title": self.en or self.ka or "(empty)",
            "subtitle": self.ka if self.en and self.ka else None,
        }


class LocalizedText(LocalizedString):
    """Bilingual longer text (EN/KA) for public descriptions and essays."""


def _language_value(value: Any, lang: str) -> str:
    if value is None:
        return ""
    if isinstance(value, BaseModel):
        text = getattr(value, lang, None)
    elif isinstance(value, Mapping):
        text = value.get(lang)
    else:
        return ""
    return (text or "").strip() if isinstance(text, str) else ""


def require_one_language(
    value: Any,
    label: str,
    min_len: Optional[int] = None,
    max_len: Optional[int] = None,
) -> Optional[str]:
    """Return an error message unless at least one language is non-blank and in range."""
    en = _language_value(value, "en")
    ka = _language_value(value, "ka")
    if not en and not ka:
        return f"{label} is required in at least one language (EN or KA)."
    for lang, text in (("en", en), ("ka", ka)):
        if not text:
            continue
        name = LANGUAGE_NAMES[lang]
        if min_len is not None and max_len is not None and not (min_len <= len(text) <= max_len):
            return f"{name} {label.lower()} must be {min_len}–{max_len} characters."
        if min_len is None and max_len is not None and len(text) > max_len:
            return f"{name} {label.lower()} must be {max_len} characters or fewer."
    return None


def limit_each_language(value: Any, label: str, max_len: int) -> Optional[str]:
    """Return an error message when either language exceeds max_len after trimming."""
    for lang in SUPPORTED_LANGUAGES:
        if len(_language_value(value, lang)) > max_len:
            return f"{LANGUAGE_NAMES[lang]} {label.lower()} must be {max_len} characters or fewer."
    return None


def _lookup(doc: Any, path: str) -> Any:
    current = doc
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            return None
    return current


@dataclass(frozen=True)
class FallbackChain:
    """
    Ordered list of attributes tried after ``field[lang]`` until a value is found.

    The same chain compiles to the store projection and resolves raw
    documents locally, so listings and previews agree on display text.
    """

    field: str
    fallbacks: Tuple[str, ...] = ()

    def strict(self, lang_param: str = "$lang") -> str:
        return f"{self.field}[{lang_param}]"

    def projection(self, lang_param: str = "$lang") -> str:
        primary = self.strict(lang_param)
        if not self.fallbacks:
            return primary
        return f"coalesce({primary}, {', '.join(self.fallbacks)})"

    def availability(self, lang_param: str = "$lang") -> str:
        primary = self.strict(lang_param)
        return f'defined({primary}) && string({primary}) != ""'

    def resolve(self, doc: Mapping[str, Any], lang: str) -> Optional[str]:
        primary = _lookup(doc, self.field)
        candidates = [primary.get(lang) if isinstance(primary, Mapping) else None]
        candidates.extend(_lookup(doc, path) for path in self.fallbacks)
        for candidate in candidates:
            if isinstance(candidate, str) and candidate != "":
                return candidate
        return None

    def has_lang(self, doc: Mapping[str, Any], lang: str) -> bool:
        primary = _lookup(doc, self.field)
        if not isinstance(primary, Mapping):
            return False
        value = primary.get(lang)
        return isinstance(value, str) and value != ""

