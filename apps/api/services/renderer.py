"""
HTML rendering for resolved views.

Rendering is a pure function of the payload: no store or cache access happens
here. All content text goes through Jinja2 autoescaping; the only markup that
bypasses it is produced by the filters below from already-escaped input.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from jinja2 import DictLoader, Environment
from markupsafe import Markup, escape

from config import settings
from models.collection import collection_type_label
from models.localized import LANGUAGE_NAMES, SUPPORTED_LANGUAGES
from services.labels import rights_label, t
from services.resolver import DETAIL_KINDS, Notice, PageKind, ViewPayload

OFFSET_PARAM = "pmsb_offset"
DESCRIPTION_PREVIEW_LENGTH = 140
ALT_NAMES_SHOWN = 20
SAFE_URL_SCHEMES = ("http", "https")

NOTICE_LABELS = {
    "config": "notice_config",
    "unavailable": "notice_unavailable",
    "http": "notice_unavailable",
    "lang_unavailable": "not_available_lang",
}

STYLESHEET = """
.pmsb-wrap{max-width:1100px;margin:0 auto;padding:24px 16px;font-family:system-ui,sans-serif}
.pmsb-header{display:flex;justify-content:space-between;align-items:center;max-width:1100px;margin:0 auto;padding:12px 16px}
.pmsb-lang a{margin-left:10px}
.pmsb-hero{background:#fff;border-radius:16px;padding:18px;box-shadow:0 1px 10px rgba(0,0,0,.06);margin:0 0 18px 0}
.pmsb-grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(220px,1fr));gap:14px}
.pmsb-card{background:#fff;border-radius:14px;overflow:hidden;box-shadow:0 1px 10px rgba(0,0,0,.06);position:relative}
.pmsb-pad{padding:10px 12px}
.pmsb-muted{color:#666;font-size:13px}
.pmsb-pill{display:inline-block;background:#eee;border-radius:999px;padding:4px 10px;font-size:12px;margin:0 8px 8px 0;text-decoration:none}
.pmsb-btn{display:inline-block;background:#111;color:#fff;padding:10px 12px;border-radius:10px;border:0;cursor:pointer;text-decoration:none}
.pmsb-input{width:100%;max-width:680px;padding:12px 14px;border-radius:12px;border:1px solid #ddd;font-size:16px}
.pmsb-select{max-width:220px}
.pmsb-row{display:flex;gap:10px;flex-wrap:wrap;align-items:center}
.pmsb-img{width:100%;height:auto;display:block}
.pmsb-h1{margin:0 0 10px 0}
.pmsb-h2{margin:22px 0 10px 0}
.pmsb-kv{display:grid;grid-template-columns:140px 1fr;gap:8px 12px}
.pmsb-k{color:#666;font-size:13px}
.pmsb-v{font-size:14px}
.pmsb-pager{margin-top:18px;display:flex;gap:10px;flex-wrap:wrap}
.pmsb-debug{white-space:pre-wrap;font-size:12px;background:#f7f7f7;padding:8px;border-radius:8px}
.pmsb-theme-card{cursor:pointer}
.pmsb-card-link{display:block;position:relative;overflow:hidden;background:#f5f5f5}
.pmsb-slideshow-img{transition:opacity 0.5s ease-in-out}
.pmsb-slideshow-img.fade{opacity:0.3}
.pmsb-image-counter{position:absolute;bottom:8px;right:8px;background:rgba(0,0,0,0.7);color:#fff;padding:4px 8px;border-radius:12px;font-size:11px;font-weight:600;z-index:10}
.pmsb-current{color:#fff}
.pmsb-no-image{aspect-ratio:16/9;display:flex;align-items:center;justify-content:center;background:#f0f0f0}
.pmsb-placeholder{font-size:48px;opacity:0.3}
@media (prefers-reduced-motion: reduce){.pmsb-slideshow-img{transition:none}}
"""

SLIDESHOW_SCRIPT = """
document.querySelectorAll('.pmsb-theme-card').forEach(function (card) {
  var images;
  try { images = JSON.parse(card.getAttribute('data-images') || '[]'); } catch (e) { return; }
  if (!Array.isArray(images) || images.length <= 1) return;
  if (window.matchMedia && window.matchMedia('(prefers-reduced-motion: reduce)').matches) return;
  var img = card.querySelector('.pmsb-slideshow-img');
  var counter = card.querySelector('.pmsb-current');
  var index = 0;
  if (!img) return;
  setInterval(function () {
    index = (index + 1) % images.length;
    img.classList.add('fade');
    setTimeout(function () {
      img.src = images[index];
      if (counter) counter.textContent = String(index + 1);
      img.classList.remove('fade');
    }, 250);
  }, 3000);
});
"""

MACROS = """
{% macro notice(n, lang, kind=None) -%}
<div class="pmsb-notice pmsb-notice-{{ n.kind }}">
<p class="pmsb-muted">{{ notice_message(n, kind, lang) }}</p>
{%- if n.detail %}
<pre class="pmsb-debug">{{ n.detail }}</pre>
{%- endif %}
</div>
{%- endmacro %}

{% macro pager(base_url, page, lang) -%}
{%- if page and (page.prev_offset is not none or page.has_more) %}
<nav class="pmsb-pager">
{%- if page.prev_offset is not none %}
<a class="pmsb-btn" rel="prev" href="{{ with_offset(base_url, page.prev_offset) }}">{{ t('prev', lang) }}</a>
{%- endif %}
{%- if page.has_more %}
<a class="pmsb-btn" rel="next" href="{{ with_offset(base_url, page.next_offset) }}">{{ t('next', lang) }}</a>
{%- endif %}
</nav>
{%- endif %}
{%- endmacro %}

{% macro photo_grid(items, lang) -%}
<div class="pmsb-grid">
{%- for p in items %}
{%- set url = local_url('/' ~ lang ~ '/photo/' ~ (p.slug|urlsegment)) %}
<div class="pmsb-card">
{%- if p.thumb and p.thumb.asset and p.thumb.asset.url %}
<a href="{{ url }}"><img class="pmsb-img" src="{{ p.thumb.asset.url|safe_url }}" alt="{{ p.thumb.alt or '' }}" loading="lazy"></a>
{%- endif %}
<div class="pmsb-pad">
<div><a href="{{ url }}"><strong>{{ p.title or '' }}</strong></a></div>
{%- if p.dateNote %}
<div class="pmsb-muted">{{ p.dateNote }}</div>
{%- endif %}
</div>
</div>
{%- endfor %}
</div>
{%- endmacro %}

{% macro photo_section(payload, empty_key, base_url, lang) -%}
{%- if payload.section_notices.photos %}
{{ notice(payload.section_notices.photos, lang) }}
{%- else %}
{%- if payload.data.photos %}
{{ photo_grid(payload.data.photos, lang) }}
{%- else %}
<p class="pmsb-muted">{{ t(empty_key, lang) }}</p>
{%- endif %}
{{ pager(base_url, payload.page, lang) }}
{%- endif %}
{%- endmacro %}

{% macro theme_grid(themes, lang) -%}
{%- if not themes %}
<p class="pmsb-muted">{{ t('no_results', lang) }}</p>
{%- else %}
<div class="pmsb-grid">
{%- for theme in themes %}
{%- set url = local_url('/' ~ lang ~ '/theme/' ~ (theme.slug|urlsegment)) %}
{%- set images = theme_images(theme) %}
<div class="pmsb-card pmsb-theme-card" data-images='{{ images|map(attribute="url")|list|tojson }}'>
{%- if images %}
<a href="{{ url }}" class="pmsb-card-link">
<img class="pmsb-img pmsb-slideshow-img" src="{{ images[0].url }}" alt="{{ images[0].alt or '' }}" loading="lazy">
{%- if images|length > 1 %}
<div class="pmsb-image-counter"><span class="pmsb-current">1</span>/{{ images|length }}</div>
{%- endif %}
</a>
{%- else %}
<a href="{{ url }}" class="pmsb-card-link pmsb-no-image"><div class="pmsb-placeholder">📸</div></a>
{%- endif %}
<div class="pmsb-pad">
<div><a href="{{ url }}"><strong>{{ theme.title or '' }}</strong></a></div>
{%- if theme.description %}
<div class="pmsb-muted">{{ theme.description|truncate_text }}</div>
{%- endif %}
</div>
</div>
{%- endfor %}
</div>
{%- endif %}
{%- endmacro %}

{% macro collection_card(c, lang) -%}
{%- set url = local_url('/' ~ lang ~ '/collection/' ~ (c.slug|urlsegment)) %}
<div class="pmsb-card">
{%- if c.coverImage and c.coverImage.asset and c.coverImage.asset.url %}
<a href="{{ url }}"><img class="pmsb-img" src="{{ c.coverImage.asset.url|safe_url }}" alt="{{ c.coverImage.alt or '' }}" loading="lazy"></a>
{%- endif %}
<div class="pmsb-pad">
<div><a href="{{ url }}"><strong>{% if c.childCount %}📁 {% endif %}{{ '🎨' if c.isOriginalGrouping is false else '📦' }} {{ c.title or '' }}</strong></a></div>
{%- if c.dateRangeNote %}
<div class="pmsb-muted">{{ c.dateRangeNote }}</div>
{%- endif %}
{%- if c.ownerOrCollector %}
<div class="pmsb-muted">{{ c.ownerOrCollector }}</div>
{%- endif %}
{%- if c.childCount %}
<div class="pmsb-muted">{{ c.childCount }} {{ t('sub_collection_one' if c.childCount == 1 else 'sub_collection_many', lang) }}</div>
{%- elif c.photoCount %}
<div class="pmsb-muted">{{ c.photoCount }} {{ t('photos', lang) }}</div>
{%- endif %}
</div>
</div>
{%- endmacro %}

{% macro entity_grid(items, lang, kind, label_key) -%}
{%- if not items %}
<p class="pmsb-muted">{{ t('no_results', lang) }}</p>
{%- else %}
<div class="pmsb-grid">
{%- for item in items %}
{%- set url = local_url('/' ~ lang ~ '/' ~ kind ~ '/' ~ (item.slug|urlsegment)) %}
<div class="pmsb-card"><div class="pmsb-pad">
<div><a href="{{ url }}"><strong>{{ item[label_key] or '' }}</strong></a></div>
{%- if item.subtitle %}
<div class="pmsb-muted">{{ item.subtitle }}</div>
{%- endif %}
{%- if years_label(item) %}
<div class="pmsb-muted">{{ years_label(item) }}</div>
{%- endif %}
{%- if item.photoCount %}
<div class="pmsb-muted">{{ item.photoCount }} {{ t('photos', lang) }}</div>
{%- endif %}
</div></div>
{%- endfor %}
</div>
{%- endif %}
{%- endmacro %}

{% macro select(name, current, options, placeholder) -%}
<select class="pmsb-input pmsb-select" name="{{ name }}">
<option value="">{{ placeholder }}</option>
{%- for opt in options if opt.slug and opt.title %}
<option value="{{ opt.slug }}"{% if opt.slug == current %} selected{% endif %}>{{ opt.title }}</option>
{%- endfor %}
</select>
{%- endmacro %}
"""

HOME = """{% import "macros.html" as ui %}
<div class="pmsb-home">
<div class="pmsb-hero">
<h1 class="pmsb-h1">{{ t('browse_archive', lang) }}</h1>
<form method="get" action="{{ local_url('/' ~ lang ~ '/search') }}" class="pmsb-row">
<input class="pmsb-input" type="text" name="q" placeholder="{{ t('search_placeholder', lang) }}">
<button class="pmsb-btn" type="submit">{{ t('search', lang) }}</button>
</form>
<div class="pmsb-muted">{{ t('browse_by', lang) }}</div>
</div>
<div class="pmsb-row">
{%- for section in ('themes', 'photographers', 'places', 'collections') %}
<a class="pmsb-pill" href="{{ local_url('/' ~ lang ~ '/' ~ section) }}">{{ t(section, lang) }}</a>
{%- endfor %}
</div>
<h2 class="pmsb-h2">{{ t('themes', lang) }}</h2>
{%- if sections.themes %}
{{ ui.notice(sections.themes, lang) }}
{%- else %}
{{ ui.theme_grid(data.themes, lang) }}
{%- endif %}
<h2 class="pmsb-h2">{{ t('recently_added', lang) }}</h2>
{%- if sections.recent %}
{{ ui.notice(sections.recent, lang) }}
{%- elif data.recent %}
{{ ui.photo_grid(data.recent, lang) }}
{%- else %}
<p class="pmsb-muted">—</p>
{%- endif %}
</div>
"""

THEMES = """{% import "macros.html" as ui %}
<h1 class="pmsb-h1">{{ t('themes', lang) }}</h1>
{{ ui.theme_grid(data.themes, lang) }}
"""

THEME = """{% import "macros.html" as ui %}
{%- set theme = data.theme %}
<p class="pmsb-muted">
{%- if theme.parent and theme.parent.slug %}
<a href="{{ local_url('/' ~ lang ~ '/theme/' ~ (theme.parent.slug|urlsegment)) }}">← {{ theme.parent.title or '' }}</a>
{%- else %}
<a href="{{ local_url('/' ~ lang ~ '/themes') }}">← {{ t('all_themes', lang) }}</a>
{%- endif %}
</p>
<h1 class="pmsb-h1">{{ theme.title or '' }}</h1>
{%- if theme.description %}
<p>{{ theme.description|nl2br }}</p>
{%- endif %}
{%- if sections.children %}
{{ ui.notice(sections.children, lang) }}
{%- elif data.children %}
<div class="pmsb-row">
{%- for c in data.children %}
<a class="pmsb-pill" href="{{ local_url('/' ~ lang ~ '/theme/' ~ (c.slug|urlsegment)) }}">{{ c.title or '' }}</a>
{%- endfor %}
</div>
{%- endif %}
<h2 class="pmsb-h2">{{ t('photos', lang) }}</h2>
{{ ui.photo_section(payload, 'no_photos_theme', base_url, lang) }}
"""

PHOTOGRAPHERS = """{% import "macros.html" as ui %}
<h1 class="pmsb-h1">{{ t('photographers', lang) }}</h1>
{{ ui.entity_grid(data.photographers, lang, 'photographer', 'name') }}
"""

PHOTOGRAPHER = """{% import "macros.html" as ui %}
{%- set p = data.photographer %}
<p class="pmsb-muted"><a href="{{ local_url('/' ~ lang ~ '/photographers') }}">← {{ t('all_photographers', lang) }}</a></p>
<h1 class="pmsb-h1">{{ p.name or '' }}</h1>
{%- if years_label(p) %}
<div class="pmsb-muted">{{ years_label(p) }}</div>
{%- endif %}
{%- if p.bio %}
<p>{{ p.bio|nl2br }}</p>
{%- endif %}
<h2 class="pmsb-h2">{{ t('photos', lang) }}</h2>
{{ ui.photo_section(payload, 'no_photos_photographer', base_url, lang) }}
"""

PLACES = """{% import "macros.html" as ui %}
<h1 class="pmsb-h1">{{ t('places', lang) }}</h1>
{{ ui.entity_grid(data.places, lang, 'place', 'title') }}
"""

PLACE = """{% import "macros.html" as ui %}
{%- set pl = data.place %}
<p class="pmsb-muted"><a href="{{ local_url('/' ~ lang ~ '/places') }}">← {{ t('all_places', lang) }}</a></p>
<h1 class="pmsb-h1">{{ pl.title or '' }}</h1>
{%- if pl.subtitle %}
<div class="pmsb-muted">{{ pl.subtitle }}</div>
{%- endif %}
<div class="pmsb-card"><div class="pmsb-pad"><div class="pmsb-kv">
{%- if pl.placeType %}
<div class="pmsb-k">{{ t('type', lang) }}</div><div class="pmsb-v">{{ pl.placeType }}</div>
{%- endif %}
{%- if pl.certainty %}
<div class="pmsb-k">{{ t('certainty', lang) }}</div><div class="pmsb-v">{{ pl.certainty }}</div>
{%- endif %}
{%- if pl.parent and pl.parent.slug %}
<div class="pmsb-k">{{ t('parent', lang) }}</div><div class="pmsb-v"><a href="{{ local_url('/' ~ lang ~ '/place/' ~ (pl.parent.slug|urlsegment)) }}">{{ pl.parent.title or '' }}</a></div>
{%- endif %}
{%- if pl.altNames %}
<div class="pmsb-k">{{ t('alt_names', lang) }}</div><div class="pmsb-v">{{ pl.altNames[:alt_names_shown]|join(', ') }}</div>
{%- endif %}
</div></div></div>
<h2 class="pmsb-h2">{{ t('photos', lang) }}</h2>
{{ ui.photo_section(payload, 'no_photos_place', base_url, lang) }}
"""

SEARCH = """{% import "macros.html" as ui %}
<h1 class="pmsb-h1">{{ t('search', lang) }}</h1>
<form method="get" action="{{ local_url('/' ~ lang ~ '/search') }}" class="pmsb-hero">
<div class="pmsb-row">
<input class="pmsb-input" type="text" name="q" value="{{ data.query }}" placeholder="{{ t('search_placeholder', lang) }}">
<button class="pmsb-btn" type="submit">{{ t('search', lang) }}</button>
</div>
<div class="pmsb-row">
{{ ui.select('theme', data.filters.theme, data.theme_options, t('themes', lang)) }}
{{ ui.select('photographer', data.filters.photographer, data.photographer_options, t('photographers', lang)) }}
{{ ui.select('place', data.filters.place, data.place_options, t('places', lang)) }}
</div>
</form>
{{ ui.photo_section(payload, 'no_results', base_url, lang) }}
"""

COLLECTIONS = """{% import "macros.html" as ui %}
<h1 class="pmsb-h1">{{ t('collections', lang) }}</h1>
{%- if not data.collections %}
<p class="pmsb-muted">{{ t('no_results', lang) }}</p>
{%- else %}
<div class="pmsb-grid">
{%- for c in data.collections %}
{{ ui.collection_card(c, lang) }}
{%- endfor %}
</div>
{%- endif %}
"""

COLLECTION = """{% import "macros.html" as ui %}
{%- set c = data.collection %}
<p class="pmsb-muted">
{%- if c.parent and c.parent.slug %}
<a href="{{ local_url('/' ~ lang ~ '/collection/' ~ (c.parent.slug|urlsegment)) }}">← {{ c.parent.title or '' }}</a>
{%- else %}
<a href="{{ local_url('/' ~ lang ~ '/collections') }}">← {{ t('all_collections', lang) }}</a>
{%- endif %}
</p>
<h1 class="pmsb-h1">{{ c.title or '' }}</h1>
<div class="pmsb-card"><div class="pmsb-pad"><div class="pmsb-kv">
{%- if c.collectionType %}
<div class="pmsb-k">{{ t('type', lang) }}</div><div class="pmsb-v">{{ collection_type_label(c.collectionType) }}</div>
{%- endif %}
{%- if c.ownerOrCollector %}
<div class="pmsb-k">{{ t('owner_collector', lang) }}</div><div class="pmsb-v">{{ c.ownerOrCollector }}</div>
{%- endif %}
{%- if c.dateRangeNote %}
<div class="pmsb-k">{{ t('date_range', lang) }}</div><div class="pmsb-v">{{ c.dateRangeNote }}</div>
{%- endif %}
{%- if c.curatedBy and c.curatedBy.name %}
<div class="pmsb-k">{{ t('curated_by', lang) }}</div><div class="pmsb-v">{{ c.curatedBy.name }}</div>
{%- endif %}
</div></div></div>
{%- if c.description %}
<p>{{ c.description|nl2br }}</p>
{%- endif %}
{%- if data.has_children %}
<h2 class="pmsb-h2">{{ t('sub_collections', lang) }}</h2>
{%- if data.children %}
<div class="pmsb-grid pmsb-children">
{%- for child in data.children %}
{{ ui.collection_card(child, lang) }}
{%- endfor %}
</div>
{%- else %}
<p class="pmsb-muted">{{ t('no_results', lang) }}</p>
{%- endif %}
{%- else %}
<h2 class="pmsb-h2">{{ t('photos', lang) }}</h2>
{{ ui.photo_section(payload, 'no_photos_collection', base_url, lang) }}
{%- endif %}
"""

PHOTO = """{%- set photo = data.photo %}
<p class="pmsb-muted">
{%- if photo.themes and photo.themes[0].slug %}
<a href="{{ local_url('/' ~ lang ~ '/theme/' ~ (photo.themes[0].slug|urlsegment)) }}">← {{ photo.themes[0].title or '' }}</a>
{%- else %}
<a href="{{ local_url('/' ~ lang) }}">← {{ t('home', lang) }}</a>
{%- endif %}
</p>
<h1 class="pmsb-h1">{{ photo.title or '' }}</h1>
{%- if photo.image and photo.image.asset and photo.image.asset.url %}
<div class="pmsb-card"><img class="pmsb-img" src="{{ photo.image.asset.url|safe_url }}" alt="{{ photo.image.alt or '' }}"></div>
{%- endif %}
{%- if photo.image and photo.image.caption %}
<p class="pmsb-muted">{{ photo.image.caption }}</p>
{%- endif %}
{%- if photo.publicDescription %}
<p>{{ photo.publicDescription|nl2br }}</p>
{%- endif %}
<div class="pmsb-row">
{%- if photo.photographer and photo.photographer.slug %}
<a class="pmsb-pill" href="{{ local_url('/' ~ lang ~ '/photographer/' ~ (photo.photographer.slug|urlsegment)) }}">{{ photo.photographer.name or '' }}</a>
{%- endif %}
{%- for pl in photo.places or [] %}
<a class="pmsb-pill" href="{{ local_url('/' ~ lang ~ '/place/' ~ (pl.slug|urlsegment)) }}">{{ pl.title or '' }}</a>
{%- endfor %}
{%- for th in photo.themes or [] %}
<a class="pmsb-pill" href="{{ local_url('/' ~ lang ~ '/theme/' ~ (th.slug|urlsegment)) }}">{{ th.title or '' }}</a>
{%- endfor %}
</div>
<hr>
<div class="pmsb-card"><div class="pmsb-pad"><div class="pmsb-kv">
{%- if photo.dateNote %}
<div class="pmsb-k">{{ t('date', lang) }}</div><div class="pmsb-v">{{ photo.dateNote }}</div>
{%- endif %}
{%- if photo.photographer and photo.photographer.name %}
<div class="pmsb-k">{{ t('photographer', lang) }}</div><div class="pmsb-v">
{%- if photo.photographer.slug %}<a href="{{ local_url('/' ~ lang ~ '/photographer/' ~ (photo.photographer.slug|urlsegment)) }}">{{ photo.photographer.name }}</a>{% else %}{{ photo.photographer.name }}{% endif -%}
</div>
{%- endif %}
{%- if photo.collection and photo.collection.slug %}
<div class="pmsb-k">{{ t('collection', lang) }}</div><div class="pmsb-v"><a href="{{ local_url('/' ~ lang ~ '/collection/' ~ (photo.collection.slug|urlsegment)) }}">{{ photo.collection.title or '' }}</a></div>
{%- endif %}
{%- if photo.source %}
<div class="pmsb-k">{{ t('source', lang) }}</div><div class="pmsb-v">{{ photo.source }}</div>
{%- endif %}
{%- if photo.attribution %}
<div class="pmsb-k">{{ t('attribution', lang) }}</div><div class="pmsb-v">{{ photo.attribution }}</div>
{%- endif %}
{%- if photo.rightsStatus %}
<div class="pmsb-k">{{ t('rights', lang) }}</div><div class="pmsb-v">{{ rights_label(photo.rightsStatus, lang) }}</div>
{%- endif %}
</div></div></div>
"""

NOTICE = """{% import "macros.html" as ui %}{{ ui.notice(notice, lang, notice_kind) }}
"""

PAGE = """<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
<style>{{ stylesheet|safe }}</style>
</head>
<body>
<header class="pmsb-header">
<a href="{{ local_url('/' ~ lang) }}">{{ t('home', lang) }}</a>
<nav class="pmsb-lang">
{%- for code in languages %}
<a href="{{ switch_urls[code] }}" hreflang="{{ code }}"{% if code == lang %} aria-current="true"{% endif %}>{{ language_names[code] }}</a>
{%- endfor %}
</nav>
</header>
<main class="pmsb-wrap">
{{ fragment }}
</main>
<script>{{ script|safe }}</script>
</body>
</html>
"""

TEMPLATES = {
    "macros.html": MACROS,
    "home.html": HOME,
    "themes.html": THEMES,
    "theme.html": THEME,
    "photographers.html": PHOTOGRAPHERS,
    "photographer.html": PHOTOGRAPHER,
    "places.html": PLACES,
    "place.html": PLACE,
    "search.html": SEARCH,
    "collections.html": COLLECTIONS,
    "collection.html": COLLECTION,
    "photo.html": PHOTO,
    "notice.html": NOTICE,
    "page.html": PAGE,
}


# ---------- helpers exposed to templates ----------

def local_url(path: str, base_path: Optional[str] = None) -> str:
    base = (settings.SITE_BASE_PATH if base_path is None else base_path).rstrip("/")
    return f"{base}/{path.lstrip('/')}"


def url_segment(value: Any) -> str:
    return quote(str(value or ""), safe="")


def safe_url(value: Any) -> str:
    """Absolute http(s) or site-relative URLs only; anything else renders as empty."""
    url = str(value or "").strip()
    if not url:
        return ""
    scheme = urlsplit(url).scheme.lower()
    if scheme and scheme not in SAFE_URL_SCHEMES:
        return ""
    return url


def with_offset(url: str, offset: int) -> str:
    parts = urlsplit(url)
    params = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != OFFSET_PARAM]
    params.append((OFFSET_PARAM, str(int(offset))))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))


def nl2br(value: Any) -> Markup:
    text = str(value or "").replace("\r\n", "\n").replace("\r", "\n")
    return Markup("<br>\n").join(escape(line) for line in text.split("\n"))


def truncate_text(value: Any, length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    text = str(value or "")
    if len(text) <= length:
        return text
    return text[:length] + "…"


def years_label(doc: Any) -> str:
    if not isinstance(doc, Mapping):
        return ""
    years = []
    for key in ("birthYear", "deathYear"):
        value = doc.get(key)
        if value:
            try:
                years.append(str(int(value)))
            except (TypeError, ValueError):
                continue
    return "–".join(years)


def theme_images(theme: Any) -> List[Dict[str, Any]]:
    """Cover image first, then the sampled photo images, keeping only entries with a usable URL."""
    if not isinstance(theme, Mapping):
        return []
    candidates: List[Any] = [theme.get("coverImage")]
    candidates.extend(theme.get("coverImages") or [])
    images = []
    for image in candidates:
        if not isinstance(image, Mapping):
            continue
        url = safe_url(image.get("url"))
        if url:
            images.append({"url": url, "alt": image.get("alt") or ""})
    return images


def notice_message(notice: Notice, kind: Optional[str], lang: str) -> str:
    if notice.kind == "not_found":
        if kind and kind in {k.value for k in DETAIL_KINDS}:
            return t(f"{kind}_not_found", lang)
        return t("not_found", lang)
    return t(NOTICE_LABELS.get(notice.kind, "notice_unavailable"), lang)


def view_path(lang: str, kind: Optional[str] = None, slug: Optional[str] = None) -> str:
    if not kind or kind == PageKind.HOME.value:
        return local_url(f"/{lang}")
    if slug:
        return local_url(f"/{lang}/{kind}/{url_segment(slug)}")
    return local_url(f"/{lang}/{kind}")


def _search_query(payload: ViewPayload) -> str:
    params = {"q": payload.data.get("query", "")}
    params.update(payload.data.get("filters") or {})
    return urlencode({k: v for k, v in params.items() if v})


def pager_base_url(payload: ViewPayload) -> str:
    kind = payload.kind.value if payload.kind else None
    if payload.kind == PageKind.SEARCH:
        query = _search_query(payload)
        base = view_path(payload.lang, kind)
        return f"{base}?{query}" if query else base
    entity = payload.data.get(kind) if kind else None
    slug = entity.get("slug") if isinstance(entity, Mapping) and entity.get("slug") else payload.slug
    return view_path(payload.lang, kind, slug)


def page_title(payload: ViewPayload) -> str:
    lang = payload.lang
    kind = payload.kind.value if payload.kind else None
    if payload.notice is None and kind:
        entity = payload.data.get(kind)
        if isinstance(entity, Mapping):
            title = entity.get("title") or entity.get("name")
            if title:
                return str(title)
        if kind == PageKind.HOME.value:
            return t("browse_archive", lang)
        return t(kind, lang)
    return t("not_found", lang) if payload.notice and payload.notice.kind == "not_found" else t("browse_archive", lang)


def _build_environment() -> Environment:
    env = Environment(loader=DictLoader(TEMPLATES), autoescape=True)
    env.filters.update(
        {
            "nl2br": nl2br,
            "truncate_text": truncate_text,
            "urlsegment": url_segment,
            "safe_url": safe_url,
        }
    )
    env.globals.update(
        {
            "t": t,
            "rights_label": rights_label,
            "collection_type_label": collection_type_label,
            "local_url": local_url,
            "with_offset": with_offset,
            "years_label": years_label,
            "theme_images": theme_images,
            "notice_message": notice_message,
            "alt_names_shown": ALT_NAMES_SHOWN,
        }
    )
    return env


_jinja_env = _build_environment()


def render_fragment(payload: ViewPayload) -> str:
    """Render a resolved view to an HTML fragment."""
    kind = payload.kind.value if payload.kind else None
    context = {
        "payload": payload,
        "data": payload.data,
        "sections": payload.section_notices,
        "lang": payload.lang,
        "notice_kind": kind,
    }
    if payload.notice is not None or kind is None:
        context["notice"] = payload.notice or Notice("not_found")
        return _jinja_env.get_template("notice.html").render(**context).strip()
    context["base_url"] = pager_base_url(payload)
    return _jinja_env.get_template(f"{kind}.html").render(**context).strip()


def render_page(payload: ViewPayload, fragment: Optional[str] = None) -> str:
    """Wrap a fragment in the full page chrome with a language switch."""
    body = render_fragment(payload) if fragment is None else fragment
    kind = payload.kind.value if payload.kind else None
    slug = payload.slug if kind in {k.value for k in DETAIL_KINDS} else None
    query = _search_query(payload) if payload.kind == PageKind.SEARCH else ""
    switch_urls = {}
    for code in SUPPORTED_LANGUAGES:
        url = view_path(code, kind, slug)
        switch_urls[code] = f"{url}?{query}" if query else url
    return _jinja_env.get_template("page.html").render(
        lang=payload.lang,
        title=page_title(payload),
        stylesheet=Markup(STYLESHEET),
        script=Markup(SLIDESHOW_SCRIPT),
        languages=SUPPORTED_LANGUAGES,
        language_names=LANGUAGE_NAMES,
        switch_urls=switch_urls,
        fragment=Markup(body),
    )
