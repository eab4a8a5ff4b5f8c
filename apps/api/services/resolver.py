"""
View resolver: turns a page request into a render payload.

Every view runs its queries one after another through the query cache. Store
failures never escape this module; they become notices on the payload, either
for the whole view (primary entity) or for one section of it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from config import settings
from services import queries
from services.errors import (
    ConfigError,
    HTTPError,
    LanguageUnavailable,
    NotFoundError,
    QueryError,
    TransportError,
)
from services.labels import normalize_lang
from services.query_cache import QueryCache

logger = logging.getLogger(__name__)

MIN_PAGE_LIMIT = 1
MAX_PAGE_LIMIT = 60
SEARCH_FILTER_KEYS = ("theme", "photographer", "place")


class PageKind(str, Enum):
    HOME = "home"
    THEMES = "themes"
    THEME = "theme"
    PHOTOGRAPHERS = "photographers"
    PHOTOGRAPHER = "photographer"
    PLACES = "places"
    PLACE = "place"
    SEARCH = "search"
    COLLECTIONS = "collections"
    COLLECTION = "collection"
    PHOTO = "photo"


# Kinds addressed by slug.
DETAIL_KINDS = frozenset(
    {PageKind.THEME, PageKind.PHOTOGRAPHER, PageKind.PLACE, PageKind.COLLECTION, PageKind.PHOTO}
)


def parse_page_kind(value: Optional[str]) -> Optional[PageKind]:
    try:
        return PageKind((value or "").strip().lower())
    except ValueError:
        return None


def _to_int(value: Any, default: int) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def clamp_pagination(offset: Any = 0, limit: Any = None) -> Tuple[int, int]:
    """Return ``(offset, limit)`` with offset >= 0 and limit within [1, 60]."""
    clean_offset = max(0, _to_int(offset, 0))
    clean_limit = _to_int(limit, settings.DEFAULT_PAGE_LIMIT)
    clean_limit = max(MIN_PAGE_LIMIT, min(MAX_PAGE_LIMIT, clean_limit))
    return clean_offset, clean_limit


@dataclass
class ViewRequest:
    lang: str = "en"
    kind: str = PageKind.HOME.value
    slug: str = ""
    offset: Any = 0
    limit: Any = None
    query: str = ""
    filters: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.lang = normalize_lang(self.lang)
        self.kind = (self.kind or "").strip().lower()
        self.slug = (self.slug or "").strip()
        self.offset, self.limit = clamp_pagination(self.offset, self.limit)
        self.query = (self.query or "").strip()
        self.filters = {
            key: str(self.filters.get(key) or "").strip()
            for key in SEARCH_FILTER_KEYS
            if str(self.filters.get(key) or "").strip()
        }


@dataclass(frozen=True)
class Pagination:
    offset: int
    limit: int
    count: int

    @property
    def has_more(self) -> bool:
        # A full page implies another one; wrong only when the remainder is an exact multiple of limit.
        return self.count == self.limit

    @property
    def prev_offset(self) -> Optional[int]:
        prev = self.offset - self.limit
        return prev if prev >= 0 else None

    @property
    def next_offset(self) -> Optional[int]:
        return self.offset + self.limit if self.has_more else None


@dataclass(frozen=True)
class Notice:
    """A renderable failure. ``kind`` is one of config, unavailable, http, not_found, lang_unavailable."""

    kind: str
    detail: Optional[str] = None


@dataclass
class ViewPayload:
    kind: Optional[PageKind]
    lang: str
    slug: str = ""
    data: Dict[str, Any] = field(default_factory=dict)
    page: Optional[Pagination] = None
    notice: Optional[Notice] = None
    section_notices: Dict[str, Notice] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.notice is None


def notice_for_error(exc: QueryError, debug: Optional[bool] = None) -> Notice:
    """Map a store error onto a notice; detail is only carried in debug mode."""
    show_detail = settings.DEBUG_ERRORS if debug is None else debug
    if isinstance(exc, ConfigError):
        return Notice("config", str(exc) if show_detail else None)
    if isinstance(exc, HTTPError):
        detail = f"HTTP {exc.code}: {exc.detail}" if exc.detail not in (None, "") else f"HTTP {exc.code}"
        return Notice("http", detail if show_detail else None)
    if isinstance(exc, TransportError):
        return Notice("unavailable", exc.message if show_detail else None)
    return Notice("unavailable", str(exc) if show_detail else None)


def available_items(items: Any) -> List[Dict[str, Any]]:
    """Listing entries that can be linked and are available in the requested language."""
    if not isinstance(items, list):
        return []
    return [
        item
        for item in items
        if isinstance(item, dict) and item.get("slug") and item.get("hasLang", True) is not False
    ]


def photo_items(items: Any) -> List[Dict[str, Any]]:
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict) and item.get("slug")]


class ContentBridge:
    """Resolves page requests against the cached content store."""

    def __init__(self, cache: QueryCache, debug: Optional[bool] = None):
        self.cache = cache
        self.debug = settings.DEBUG_ERRORS if debug is None else debug

    def resolve(self, request: ViewRequest) -> ViewPayload:
        kind = parse_page_kind(request.kind)
        payload = ViewPayload(kind=kind, lang=request.lang, slug=request.slug)
        if kind is None:
            payload.notice = Notice("not_found")
            return payload

        handler = getattr(self, f"_resolve_{kind.value}")
        try:
            handler(request, payload)
        except NotFoundError:
            payload.data = {}
            payload.section_notices = {}
            payload.notice = Notice("not_found")
        except LanguageUnavailable:
            payload.data = {}
            payload.section_notices = {}
            payload.notice = Notice("lang_unavailable")
        except QueryError as exc:
            logger.info("View %s/%s failed: %s", kind.value, request.slug, exc)
            payload.data = {}
            payload.section_notices = {}
            payload.notice = notice_for_error(exc, self.debug)
        return payload

    # ---------- query helpers ----------

    def _fetch(self, query: queries.CatalogQuery) -> Any:
        return self.cache.fetch(query)

    def _section(self, payload: ViewPayload, name: str, query: queries.CatalogQuery) -> Any:
        try:
            return self._fetch(query)
        except QueryError as exc:
            logger.info("Section %s of %s failed: %s", name, payload.kind, exc)
            payload.section_notices[name] = notice_for_error(exc, self.debug)
            return None

    def _entity(self, query: queries.CatalogQuery, check_lang: bool = True) -> Dict[str, Any]:
        doc = self._fetch(query)
        if not isinstance(doc, dict) or not doc.get("_id"):
            raise NotFoundError(f"{query.name}: {query.params.get('slug', '')}")
        if check_lang and doc.get("hasLang") is False:
            raise LanguageUnavailable(f"{query.name}: {query.params.get('slug', '')}")
        return doc

    def _photo_page(
        self,
        payload: ViewPayload,
        request: ViewRequest,
        query: queries.CatalogQuery,
    ) -> None:
        raw = self._section(payload, "photos", query)
        raw = raw if isinstance(raw, list) else []
        payload.data["photos"] = photo_items(raw)
        if "photos" not in payload.section_notices:
            payload.page = Pagination(offset=request.offset, limit=request.limit, count=len(raw))

    # ---------- views ----------

    def _resolve_home(self, request: ViewRequest, payload: ViewPayload) -> None:
        lang = request.lang
        payload.data["themes"] = available_items(self._section(payload, "themes", queries.top_themes(lang)))
        payload.data["recent"] = photo_items(self._section(payload, "recent", queries.recent_photos(lang)))

    def _resolve_themes(self, request: ViewRequest, payload: ViewPayload) -> None:
        payload.data["themes"] = available_items(self._fetch(queries.top_themes(request.lang)))

    def _resolve_theme(self, request: ViewRequest, payload: ViewPayload) -> None:
        lang = request.lang
        theme = self._entity(queries.theme_detail(lang, request.slug))
        payload.data["theme"] = theme
        payload.data["children"] = available_items(
            self._section(payload, "children", queries.theme_children(lang, theme["_id"]))
        )
        self._photo_page(
            payload,
            request,
            queries.photos_by_theme(lang, theme["_id"], request.offset, request.limit),
        )

    def _resolve_photographers(self, request: ViewRequest, payload: ViewPayload) -> None:
        payload.data["photographers"] = available_items(self._fetch(queries.photographers_index(request.lang)))

    def _resolve_photographer(self, request: ViewRequest, payload: ViewPayload) -> None:
        lang = request.lang
        photographer = self._entity(queries.photographer_detail(lang, request.slug), check_lang=False)
        payload.data["photographer"] = photographer
        self._photo_page(
            payload,
            request,
            queries.photos_by_photographer(lang, photographer["_id"], request.offset, request.limit),
        )

    def _resolve_places(self, request: ViewRequest, payload: ViewPayload) -> None:
        payload.data["places"] = available_items(self._fetch(queries.places_index(request.lang)))

    def _resolve_place(self, request: ViewRequest, payload: ViewPayload) -> None:
        lang = request.lang
        place = self._entity(queries.place_detail(lang, request.slug), check_lang=False)
        payload.data["place"] = place
        self._photo_page(
            payload,
            request,
            queries.photos_by_place(lang, place["_id"], request.offset, request.limit),
        )

    def _resolve_search(self, request: ViewRequest, payload: ViewPayload) -> None:
        lang = request.lang
        payload.data["query"] = request.query
        payload.data["filters"] = dict(request.filters)
        self._photo_page(
            payload,
            request,
            queries.search_photos(lang, request.query, request.filters, request.offset, request.limit),
        )
        payload.data["theme_options"] = available_items(
            self._section(payload, "theme_options", queries.filter_themes(lang))
        )
        payload.data["photographer_options"] = available_items(
            self._section(payload, "photographer_options", queries.filter_photographers(lang))
        )
        payload.data["place_options"] = available_items(
            self._section(payload, "place_options", queries.filter_places(lang))
        )

    def _resolve_collections(self, request: ViewRequest, payload: ViewPayload) -> None:
        payload.data["collections"] = available_items(self._fetch(queries.collections_index(request.lang)))

    def _resolve_collection(self, request: ViewRequest, payload: ViewPayload) -> None:
        lang = request.lang
        collection = self._entity(queries.collection_detail(lang, request.slug))
        children = collection.get("children") if isinstance(collection.get("children"), list) else []
        payload.data["collection"] = collection
        payload.data["children"] = available_items(children)
        payload.data["has_children"] = bool(children)
        # A collection with sub-collections never lists photos directly.
        if children:
            payload.data["photos"] = []
            return
        self._photo_page(
            payload,
            request,
            queries.collection_photos(lang, collection["_id"], request.offset, request.limit),
        )

    def _resolve_photo(self, request: ViewRequest, payload: ViewPayload) -> None:
        photo = self._entity(queries.photo_detail(request.lang, request.slug))
        for key in ("places", "themes"):
            photo[key] = available_items(photo.get(key))
        payload.data["photo"] = photo
