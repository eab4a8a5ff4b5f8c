"""
Bare HTML fragments for embedding archive views in other pages.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from routers.deps import get_bridge, payload_status
from services.renderer import render_fragment
from services.resolver import ContentBridge, ViewRequest
from services.shortcodes import expand_shortcodes

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_EXPAND_CONTENT_LENGTH = 100_000


class ExpandRequest(BaseModel):
    content: str = Field(max_length=MAX_EXPAND_CONTENT_LENGTH)
    lang: Optional[str] = None
    pmsb_offset: Optional[int] = Field(default=None, ge=0)


class ExpandResponse(BaseModel):
    content: str
    expanded: int


@router.get("/{kind}", response_class=HTMLResponse)
def fragment(
    kind: str,
    lang: Optional[str] = Query(None),
    slug: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    theme: Optional[str] = Query(None),
    photographer: Optional[str] = Query(None),
    place: Optional[str] = Query(None),
    bridge: ContentBridge = Depends(get_bridge),
):
    """Render one view without page chrome."""
    view = ViewRequest(
        lang=lang or "en",
        kind=kind,
        slug=slug or "",
        offset=offset,
        limit=limit,
        query=q or "",
        filters={"theme": theme or "", "photographer": photographer or "", "place": place or ""},
    )
    try:
        payload = bridge.resolve(view)
        html = render_fragment(payload)
    except Exception:
        logger.exception("Failed to render fragment %s/%s", view.kind, view.slug)
        return HTMLResponse('<p class="pmsb-muted">Internal error</p>', status_code=500)
    return HTMLResponse(html, status_code=payload_status(payload))


@router.post("/expand", response_model=ExpandResponse)
def expand(request: ExpandRequest, bridge: ContentBridge = Depends(get_bridge)):
    """Replace embedded ``[pmsb_*]`` tags in arbitrary markup with rendered views."""
    try:
        content, count = expand_shortcodes(
            request.content,
            bridge,
            default_lang=request.lang or "en",
            offset_override=request.pmsb_offset,
        )
    except Exception as exc:
        logger.exception("Embedded tag expansion failed")
        raise HTTPException(status_code=500, detail="Embedded tag expansion failed.") from exc
    return ExpandResponse(content=content, expanded=count)
