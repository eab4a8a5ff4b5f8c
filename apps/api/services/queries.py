"""
Named, parametrized GROQ queries for every content view.

Localized projections are compiled from the fallback chains declared next to
each schema, so the store resolves display text exactly as the schema says.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from models.collection import COLLECTION_DESCRIPTION, COLLECTION_TITLE
from models.curator import CURATOR_NAME
from models.photo import PHOTO_ATTRIBUTION, PHOTO_DATE_NOTE, PHOTO_DESCRIPTION, PHOTO_SOURCE, PHOTO_TITLE
from models.photographer import PHOTOGRAPHER_BIO, PHOTOGRAPHER_NAME
from models.place import PLACE_TITLE
from models.theme import THEME_DESCRIPTION, THEME_TITLE

RECENT_PHOTOS_COUNT = 12
FILTER_THEMES_LIMIT = 200
FILTER_PHOTOGRAPHERS_LIMIT = 200
FILTER_PLACES_LIMIT = 300
# Theme cards sample photos from the theme and its direct children only.
THEME_COVER_IMAGES_LIMIT = 5
# Children without an explicit sortOrder sort after every allowed value (0-9999).
MISSING_SORT_ORDER = 10000

NOT_DRAFT = '!(_id in path("drafts.**"))'
PHOTO_HAS_LANG = PHOTO_TITLE.availability()

IMAGE_WITH_CAPTION = 'asset->{url,metadata{dimensions{width,height}}},"alt": alt[$lang],"caption": caption[$lang]'
IMAGE_WITH_ALT = 'asset->{url,metadata{dimensions{width,height}}},"alt": alt[$lang]'

PHOTO_CARD = f"""{{
  _id,
  "slug": slug.current,
  "title": {PHOTO_TITLE.strict()},
  "thumb": image{{{IMAGE_WITH_CAPTION}}},
  "dateNote": {PHOTO_DATE_NOTE.strict()}
}}"""


@dataclass(frozen=True)
class CatalogQuery:
    name: str
    groq: str
    params: Dict[str, Any] = field(default_factory=dict)


def _child_order(title_chain) -> str:
    return f"order(coalesce(sortOrder, {MISSING_SORT_ORDER}) asc, {title_chain.projection()} asc)"


def _window(lang: str, offset: int, limit: int, **extra: Any) -> Dict[str, Any]:
    params: Dict[str, Any] = {"lang": lang, "offset": int(offset), "limit": int(limit)}
    params.update(extra)
    return params


# ---------- Photos ----------

def photo_detail(lang: str, slug: str) -> CatalogQuery:
    groq = f"""*[_type=="photo" && slug.current==$slug && {NOT_DRAFT}][0]{{
  _id,
  "slug": slug.current,
  "title": {PHOTO_TITLE.strict()},
  "publicDescription": {PHOTO_DESCRIPTION.strict()},
  "image": image{{{IMAGE_WITH_CAPTION}}},
  "photographer": photographerRef->{{_id,"slug":slug.current,"name":{PHOTOGRAPHER_NAME.projection()}}},
  "places": placeRefs[]->{{_id,"slug":slug.current,"title":{PLACE_TITLE.projection()}}},
  "themes": themeRefs[]->{{_id,"slug":slug.current,"title":{THEME_TITLE.projection()}}},
  "collection": collectionRef->{{_id,"slug":slug.current,"title":{COLLECTION_TITLE.projection()}}},
  "dateNote": {PHOTO_DATE_NOTE.strict()},
  "rightsStatus": rightsStatus,
  "attribution": {PHOTO_ATTRIBUTION.strict()},
  "source": {PHOTO_SOURCE.strict()},
  "hasLang": {PHOTO_HAS_LANG}
}}"""
    return CatalogQuery("photo_detail", groq, {"lang": lang, "slug": slug})


def recent_photos(lang: str, count: int = RECENT_PHOTOS_COUNT) -> CatalogQuery:
    groq = f"""*[
  _type=="photo" &&
  {NOT_DRAFT} &&
  {PHOTO_HAS_LANG}
]
| order(_createdAt desc)
[0...$count]{{
  _id,
  "slug": slug.current,
  "title": {PHOTO_TITLE.strict()},
  "thumb": image{{{IMAGE_WITH_ALT}}}
}}"""
    return CatalogQuery("recent_photos", groq, {"lang": lang, "count": int(count)})


def search_photos(
    lang: str,
    q: str,
    filters: Optional[Mapping[str, str]],
    offset: int,
    limit: int,
) -> CatalogQuery:
    filters = filters or {}
    groq = f"""*[
  _type=="photo" &&
  {NOT_DRAFT} &&
  {PHOTO_HAS_LANG} &&
  (
    $q == "" ||
    {PHOTO_TITLE.strict()} match $q + "*" ||
    {PHOTO_DESCRIPTION.strict()} match $q + "*"
  ) &&
  ( $themeSlug == "" ||
    references(*[_type=="theme" && slug.current==$themeSlug][0]._id)
  ) &&
  ( $photographerSlug == "" ||
    photographerRef._ref == *[_type=="photographer" && slug.current==$photographerSlug][0]._id
  ) &&
  ( $placeSlug == "" ||
    *[_type=="place" && slug.current==$placeSlug][0]._id in placeRefs[]._ref
  )
]
| order(_createdAt desc)
[$offset...$offset+$limit]
{PHOTO_CARD}"""
    return CatalogQuery(
        "search_photos",
        groq,
        _window(
            lang,
            offset,
            limit,
            q=(q or "").strip(),
            themeSlug=(filters.get("theme") or "").strip(),
            photographerSlug=(filters.get("photographer") or "").strip(),
            placeSlug=(filters.get("place") or "").strip(),
        ),
    )


# ---------- Search filter options ----------

def filter_themes(lang: str) -> CatalogQuery:
    groq = f"""*[_type=="theme" && {NOT_DRAFT}]
| order({THEME_TITLE.projection()} asc)
[0...{FILTER_THEMES_LIMIT}]
{{
  _id,
  "slug": slug.current,
  "title": {THEME_TITLE.projection()},
  "hasLang": {THEME_TITLE.availability()}
}}"""
    return CatalogQuery("filter_themes", groq, {"lang": lang})


def filter_photographers(lang: str) -> CatalogQuery:
    groq = f"""*[_type=="photographer" && {NOT_DRAFT}]
| order({PHOTOGRAPHER_NAME.projection()} asc)
[0...{FILTER_PHOTOGRAPHERS_LIMIT}]
{{
  _id,
  "slug": slug.current,
  "title": {PHOTOGRAPHER_NAME.projection()},
  "hasLang": {PHOTOGRAPHER_NAME.availability()}
}}"""
    return CatalogQuery("filter_photographers", groq, {"lang": lang})


def filter_places(lang: str) -> CatalogQuery:
    groq = f"""*[_type=="place" && {NOT_DRAFT}]
| order({PLACE_TITLE.projection()} asc)
[0...{FILTER_PLACES_LIMIT}]
{{
  _id,
  "slug": slug.current,
  "title": {PLACE_TITLE.projection()}
}}"""
    return CatalogQuery("filter_places", groq, {"lang": lang})


# ---------- Themes ----------

def top_themes(lang: str) -> CatalogQuery:
    groq = f"""*[_type=="theme" && !defined(parent) && {NOT_DRAFT}]
| order({THEME_TITLE.projection()} asc)
{{
  _id,
  "slug": slug.current,
  "title": {THEME_TITLE.strict()},
  "description": {THEME_DESCRIPTION.strict()},
  "hasLang": {THEME_TITLE.availability()},
  "coverImage": coverImage{{
    "url": asset->url,
    "alt": alt[$lang],
    "width": asset->metadata.dimensions.width,
    "height": asset->metadata.dimensions.height
  }},
  "coverImages": *[
    _type=="photo" &&
    {NOT_DRAFT} &&
    {PHOTO_HAS_LANG} &&
    (
      references(^._id) ||
      references(*[_type=="theme" && parent._ref == ^.^._id]._id)
    )
  ][0...{THEME_COVER_IMAGES_LIMIT}]{{
    "url": image.asset->url,
    "alt": image.alt[$lang],
    "width": image.asset->metadata.dimensions.width,
    "height": image.asset->metadata.dimensions.height
  }}
}}"""
    return CatalogQuery("top_themes", groq, {"lang": lang})


def theme_detail(lang: str, slug: str) -> CatalogQuery:
    groq = f"""*[_type=="theme" && slug.current==$slug && {NOT_DRAFT}][0]{{
  _id,
  "slug": slug.current,
  "title": {THEME_TITLE.strict()},
  "description": {THEME_DESCRIPTION.strict()},
  "parent": parent->{{_id,"slug":slug.current,"title": {THEME_TITLE.strict()}}},
  "hasLang": {THEME_TITLE.availability()}
}}"""
    return CatalogQuery("theme_detail", groq, {"lang": lang, "slug": slug})


def theme_children(lang: str, theme_id: str) -> CatalogQuery:
    groq = f"""*[_type=="theme" && parent._ref == $themeId && {NOT_DRAFT}]
| {_child_order(THEME_TITLE)}
{{
  _id,
  "slug": slug.current,
  "title": {THEME_TITLE.strict()},
  "hasLang": {THEME_TITLE.availability()}
}}"""
    return CatalogQuery("theme_children", groq, {"lang": lang, "themeId": theme_id})


def photos_by_theme(lang: str, theme_id: str, offset: int, limit: int) -> CatalogQuery:
    groq = f"""*[
  _type=="photo" &&
  {NOT_DRAFT} &&
  {PHOTO_HAS_LANG} &&
  (
    references($themeId) ||
    references(*[_type=="theme" && parent._ref==$themeId]._id)
  )
]
| order(_createdAt desc)
[$offset...$offset+$limit]
{PHOTO_CARD}"""
    return CatalogQuery("photos_by_theme", groq, _window(lang, offset, limit, themeId=theme_id))


# ---------- Photographers ----------

def photographers_index(lang: str) -> CatalogQuery:
    groq = f"""*[_type=="photographer" && {NOT_DRAFT}]
| order({PHOTOGRAPHER_NAME.projection()} asc)
{{
  _id,
  "slug": slug.current,
  "name": {PHOTOGRAPHER_NAME.projection()},
  "birthYear": birthYear,
  "deathYear": deathYear,
  "photoCount": count(*[
    _type=="photo" && {NOT_DRAFT} &&
    photographerRef._ref == ^._id &&
    {PHOTO_HAS_LANG}
  ])
}}"""
    return CatalogQuery("photographers_index", groq, {"lang": lang})


def photographer_detail(lang: str, slug: str) -> CatalogQuery:
    groq = f"""*[_type=="photographer" && slug.current==$slug && {NOT_DRAFT}][0]{{
  _id,
  "slug": slug.current,
  "name": {PHOTOGRAPHER_NAME.projection()},
  "bio": {PHOTOGRAPHER_BIO.strict()},
  "birthYear": birthYear,
  "deathYear": deathYear
}}"""
    return CatalogQuery("photographer_detail", groq, {"lang": lang, "slug": slug})


def photos_by_photographer(lang: str, photographer_id: str, offset: int, limit: int) -> CatalogQuery:
    groq = f"""*[
  _type=="photo" &&
  {NOT_DRAFT} &&
  photographerRef._ref == $photographerId &&
  {PHOTO_HAS_LANG}
]
| order(_createdAt desc)
[$offset...$offset+$limit]
{PHOTO_CARD}"""
    return CatalogQuery(
        "photos_by_photographer", groq, _window(lang, offset, limit, photographerId=photographer_id)
    )


# ---------- Places ----------

def places_index(lang: str) -> CatalogQuery:
    groq = f"""*[_type=="place" && {NOT_DRAFT}]
| order({PLACE_TITLE.projection()} asc)
{{
  _id,
  "slug": slug.current,
  "title": {PLACE_TITLE.projection()},
  "subtitle": titleKa,
  "photoCount": count(*[
    _type=="photo" && {NOT_DRAFT} &&
    ^._id in placeRefs[]._ref &&
    {PHOTO_HAS_LANG}
  ])
}}"""
    return CatalogQuery("places_index", groq, {"lang": lang})


def place_detail(lang: str, slug: str) -> CatalogQuery:
    groq = f"""*[_type=="place" && slug.current==$slug && {NOT_DRAFT}][0]{{
  _id,
  "slug": slug.current,
  "title": {PLACE_TITLE.projection()},
  "subtitle": titleKa,
  "placeType": placeType,
  "certainty": certainty,
  "altNames": altNames,
  "parent": parent->{{_id,"slug":slug.current,"title": {PLACE_TITLE.projection()}}}
}}"""
    return CatalogQuery("place_detail", groq, {"lang": lang, "slug": slug})


def photos_by_place(lang: str, place_id: str, offset: int, limit: int) -> CatalogQuery:
    groq = f"""*[
  _type=="photo" &&
  {NOT_DRAFT} &&
  $placeId in placeRefs[]._ref &&
  {PHOTO_HAS_LANG}
]
| order(_createdAt desc)
[$offset...$offset+$limit]
{PHOTO_CARD}"""
    return CatalogQuery("photos_by_place", groq, _window(lang, offset, limit, placeId=place_id))


# ---------- Collections ----------

def _collection_card(with_counts: str) -> str:
    return f"""{{
  _id,
  "slug": slug.current,
  "title": {COLLECTION_TITLE.projection()},
  "collectionType": collectionType,
  "isOriginalGrouping": isOriginalGrouping,
  "coverImage": coverImage{{{IMAGE_WITH_ALT}}},
  "hasLang": {COLLECTION_TITLE.availability()},
{with_counts}
}}"""


_COLLECTION_COUNTS = f"""  "childCount": count(*[
    _type=="collection" &&
    {NOT_DRAFT} &&
    parent._ref == ^._id
  ]),
  "photoCount": count(*[
    _type=="photo" && {NOT_DRAFT} &&
    collectionRef._ref == ^._id &&
    {PHOTO_HAS_LANG}
  ])"""


def collections_index(lang: str) -> CatalogQuery:
    counts = (
        _COLLECTION_COUNTS
        + """,
  "dateRangeNote": dateRangeNote[$lang],
  "ownerOrCollector": ownerOrCollector[$lang]"""
    )
    groq = f"""*[
  _type=="collection" &&
  {NOT_DRAFT} &&
  !defined(parent)
]
| order({COLLECTION_TITLE.projection()} asc)
{_collection_card(counts)}"""
    return CatalogQuery("collections_index", groq, {"lang": lang})


def collection_detail(lang: str, slug: str) -> CatalogQuery:
    groq = f"""*[_type=="collection" && slug.current==$slug && {NOT_DRAFT}][0]{{
  _id,
  "slug": slug.current,
  "title": {COLLECTION_TITLE.projection()},
  "collectionType": collectionType,
  "isOriginalGrouping": isOriginalGrouping,
  "ownerOrCollector": ownerOrCollector[$lang],
  "dateRangeNote": dateRangeNote[$lang],
  "description": {COLLECTION_DESCRIPTION.strict()},
  "coverImage": coverImage{{{IMAGE_WITH_ALT}}},
  "hasLang": {COLLECTION_TITLE.availability()},
  "curatedBy": curatedBy->{{
    _id,
    "slug": slug.current,
    "name": {CURATOR_NAME.projection()}
  }},
  "parent": parent->{{
    _id,
    "slug": slug.current,
    "title": {COLLECTION_TITLE.projection()}
  }},
  "children": *[
    _type=="collection" &&
    {NOT_DRAFT} &&
    parent._ref == ^._id
  ] | {_child_order(COLLECTION_TITLE)} {_collection_card(_COLLECTION_COUNTS)}
}}"""
    return CatalogQuery("collection_detail", groq, {"lang": lang, "slug": slug})


def collection_photos(lang: str, collection_id: str, offset: int, limit: int) -> CatalogQuery:
    groq = f"""*[
  _type=="photo" &&
  {NOT_DRAFT} &&
  collectionRef._ref == $collectionId &&
  {PHOTO_HAS_LANG}
]
| order(_createdAt asc)
[$offset...$offset+$limit]
{PHOTO_CARD}"""
    return CatalogQuery(
        "collection_photos", groq, _window(lang, offset, limit, collectionId=collection_id)
    )
