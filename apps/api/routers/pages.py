"""
Public archive pages: full HTML documents with chrome around each view.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from config import settings
from models.localized import SUPPORTED_LANGUAGES
from routers.deps import get_bridge, payload_status
from services.renderer import render_page
from services.resolver import DETAIL_KINDS, ContentBridge, ViewRequest, parse_page_kind

logger = logging.getLogger(__name__)

router = APIRouter()


def _render(bridge: ContentBridge, view: ViewRequest) -> HTMLResponse:
    try:
        payload = bridge.resolve(view)
        html = render_page(payload)
    except Exception:
        logger.exception("Failed to render page %s/%s", view.kind, view.slug)
        return HTMLResponse("<h1>Internal error</h1>", status_code=500)
    return HTMLResponse(html, status_code=payload_status(payload))


def _view(
    lang: str,
    kind: str,
    slug: str = "",
    pmsb_offset: Optional[str] = None,
    q: Optional[str] = None,
    theme: Optional[str] = None,
    photographer: Optional[str] = None,
    place: Optional[str] = None,
) -> ViewRequest:
    if lang not in SUPPORTED_LANGUAGES:
        return ViewRequest(lang="en", kind="")
    page_kind = parse_page_kind(kind)
    if page_kind is None or bool(slug) != (page_kind in DETAIL_KINDS):
        kind = ""
    return ViewRequest(
        lang=lang,
        kind=kind,
        slug=slug,
        offset=pmsb_offset,
        limit=settings.DEFAULT_PAGE_LIMIT,
        query=q or "",
        filters={"theme": theme or "", "photographer": photographer or "", "place": place or ""},
    )


@router.get("/", response_class=HTMLResponse)
def home_page(bridge: ContentBridge = Depends(get_bridge)):
    """Archive home in the default language."""
    return _render(bridge, ViewRequest(lang="en", kind="home"))


@router.get("/{lang}", response_class=HTMLResponse)
def language_home_page(lang: str, bridge: ContentBridge = Depends(get_bridge)):
    return _render(bridge, _view(lang, "home"))


@router.get("/{lang}/{kind}", response_class=HTMLResponse)
def listing_page(
    lang: str,
    kind: str,
    pmsb_offset: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    theme: Optional[str] = Query(None),
    photographer: Optional[str] = Query(None),
    place: Optional[str] = Query(None),
    bridge: ContentBridge = Depends(get_bridge),
):
    """Index pages (themes, photographers, places, collections) and search."""
    return _render(bridge, _view(lang, kind, "", pmsb_offset, q, theme, photographer, place))


@router.get("/{lang}/{kind}/{slug}", response_class=HTMLResponse)
def detail_page(
    lang: str,
    kind: str,
    slug: str,
    pmsb_offset: Optional[str] = Query(None),
    bridge: ContentBridge = Depends(get_bridge),
):
    """Detail pages addressed by slug (theme, photographer, place, collection, photo)."""
    return _render(bridge, _view(lang, kind, slug, pmsb_offset))
