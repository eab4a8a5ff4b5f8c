"""
Embeddable view tags.

Host pages can embed any view with a tag such as
``[pmsb_theme lang="ka" slug="tbilisi" offset="0" limit="24"]``; expansion
replaces each recognised tag with the rendered fragment.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from services.renderer import render_fragment
from services.resolver import ContentBridge, ViewRequest, parse_page_kind

logger = logging.getLogger(__name__)

TAG_PREFIX = "pmsb_"
SHORTCODE_RE = re.compile(r"\[pmsb_(?P<kind>[a-z_]+)(?P<attrs>(?:\s[^\]]*)?)\]")
ATTR_RE = re.compile(r"""([A-Za-z_][\w-]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"']+))""")


@dataclass(frozen=True)
class Shortcode:
    kind: str
    attrs: Dict[str, str] = field(default_factory=dict)
    start: int = 0
    end: int = 0


def parse_attrs(raw: str) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    for match in ATTR_RE.finditer(raw or ""):
        name = match.group(1).lower()
        value = next((g for g in match.groups()[1:] if g is not None), "")
        attrs[name] = value
    return attrs


def parse_shortcodes(text: str) -> List[Shortcode]:
    """Find every tag whose kind names a known view; unknown tags are left alone."""
    found = []
    for match in SHORTCODE_RE.finditer(text or ""):
        kind = match.group("kind")
        if parse_page_kind(kind) is None:
            continue
        found.append(Shortcode(kind=kind, attrs=parse_attrs(match.group("attrs")), start=match.start(), end=match.end()))
    return found


def shortcode_request(
    code: Shortcode,
    default_lang: str = "en",
    offset_override: Optional[int] = None,
) -> ViewRequest:
    attrs = code.attrs
    return ViewRequest(
        lang=attrs.get("lang") or default_lang,
        kind=code.kind,
        slug=attrs.get("slug", ""),
        offset=offset_override if offset_override is not None else attrs.get("offset", 0),
        limit=attrs.get("limit"),
        query=attrs.get("q", ""),
        filters={key: attrs.get(key, "") for key in ("theme", "photographer", "place")},
    )


def expand_shortcodes(
    text: str,
    bridge: ContentBridge,
    default_lang: str = "en",
    offset_override: Optional[int] = None,
) -> Tuple[str, int]:
    """Replace each tag with its rendered fragment; returns the new text and the number expanded."""
    codes = parse_shortcodes(text)
    if not codes:
        return text or "", 0

    parts = []
    cursor = 0
    for code in codes:
        parts.append(text[cursor:code.start])
        payload = bridge.resolve(shortcode_request(code, default_lang, offset_override))
        parts.append(render_fragment(payload))
        cursor = code.end
    parts.append(text[cursor:])
    logger.debug("Expanded %d embedded view tags", len(codes))
    return "".join(parts), len(codes)
