"""
Static bilingual labels used by rendered views.
"""

from __future__ import annotations

from typing import Dict, Optional

from models.localized import SUPPORTED_LANGUAGES

DEFAULT_LANGUAGE = "en"

LABELS: Dict[str, Dict[str, str]] = {
    "browse_archive": {"en": "Browse the Archive", "ka": "დაათვალიერეთ არქივი"},
    "search_placeholder": {
        "en": "Search photos by title or description…",
        "ka": "ძებნეთ ფოტოები სათაურით ან აღწერით…",
    },
    "search": {"en": "Search", "ka": "ძებნა"},
    "browse_by": {
        "en": "Browse by theme, photographer, place and collection.",
        "ka": "დაათვალიერეთ თემით, ფოტოგრაფით, ადგილით და კოლექციით.",
    },
    "themes": {"en": "Themes", "ka": "თემები"},
    "photographers": {"en": "Photographers", "ka": "ფოტოგრაფები"},
    "places": {"en": "Places", "ka": "ადგილები"},
    "collections": {"en": "Collections", "ka": "კოლექციები"},
    "collection": {"en": "Collection", "ka": "კოლექცია"},
    "sub_collections": {"en": "Sub-Collections", "ka": "ქვეკოლექციები"},
    "sub_collection_one": {"en": "sub-collection", "ka": "ქვეკოლექცია"},
    "sub_collection_many": {"en": "sub-collections", "ka": "ქვეკოლექცია"},
    "recently_added": {"en": "Recently added", "ka": "ახლახან დამატებული"},
    "photos": {"en": "Photos", "ka": "ფოტოები"},
    "all_themes": {"en": "All themes", "ka": "ყველა თემა"},
    "all_photographers": {"en": "All photographers", "ka": "ყველა ფოტოგრაფი"},
    "all_places": {"en": "All places", "ka": "ყველა ადგილი"},
    "all_collections": {"en": "All collections", "ka": "ყველა კოლექცია"},
    "no_photos_theme": {"en": "No photos found for this theme.", "ka": "ამ თემისთვის ფოტოები არ მოიძებნა."},
    "no_photos_photographer": {
        "en": "No photos found for this photographer.",
        "ka": "ამ ფოტოგრაფისთვის ფოტოები არ მოიძებნა.",
    },
    "no_photos_place": {"en": "No photos found for this place.", "ka": "ამ ადგილისთვის ფოტოები არ მოიძებნა."},
    "no_photos_collection": {"en": "No photos in this collection.", "ka": "ამ კოლექციაში ფოტოები არ არის."},
    "no_results": {"en": "No results.", "ka": "შედეგები არ მოიძებნა."},
    "not_available_lang": {
        "en": "This content is not available in this language.",
        "ka": "ეს კონტენტი არ არის ხელმისაწვდომი ამ ენაზე.",
    },
    "not_found": {"en": "Not found.", "ka": "ვერ მოიძებნა."},
    "theme_not_found": {"en": "Theme not found.", "ka": "თემა ვერ მოიძებნა."},
    "photographer_not_found": {"en": "Photographer not found.", "ka": "ფოტოგრაფი ვერ მოიძებნა."},
    "place_not_found": {"en": "Place not found.", "ka": "ადგილი ვერ მოიძებნა."},
    "collection_not_found": {"en": "Collection not found.", "ka": "კოლექცია ვერ მოიძებნა."},
    "photo_not_found": {"en": "Photo not found.", "ka": "ფოტო ვერ მოიძებნა."},
    "notice_config": {
        "en": "The archive is not configured yet.",
        "ka": "არქივი ჯერ არ არის კონფიგურირებული.",
    },
    "notice_unavailable": {
        "en": "The archive is temporarily unavailable. Please try again later.",
        "ka": "არქივი დროებით მიუწვდომელია. გთხოვთ, სცადოთ მოგვიანებით.",
    },
    "prev": {"en": "← Prev", "ka": "← წინა"},
    "next": {"en": "Next →", "ka": "შემდეგი →"},
    "date": {"en": "Date", "ka": "თარიღი"},
    "photographer": {"en": "Photographer", "ka": "ფოტოგრაფი"},
    "rights": {"en": "Rights", "ka": "უფლებები"},
    "attribution": {"en": "Attribution", "ka": "მიწერა"},
    "source": {"en": "Source", "ka": "წყარო"},
    "type": {"en": "Type", "ka": "ტიპი"},
    "owner_collector": {"en": "Owner / Collector", "ka": "მფლობელი / შემგროვებელი"},
    "date_range": {"en": "Date range", "ka": "თარიღები"},
    "curated_by": {"en": "Curated by", "ka": "კურატორი"},
    "home": {"en": "Home", "ka": "მთავარი"},
    "certainty": {"en": "Certainty", "ka": "სიზუსტე"},
    "parent": {"en": "Parent", "ka": "მშობელი"},
    "alt_names": {"en": "Alt names", "ka": "ალტერნატიული სახელები"},
}

RIGHTS_LABELS: Dict[str, Dict[str, str]] = {
    "public_domain": {
        "en": "Public domain - Free to use",
        "ka": "საჯარო დომენი - უფასო გამოყენება",
    },
    "museum_collection": {
        "en": "Museum collection - Licensing available",
        "ka": "მუზეუმის კოლექცია - ლიცენზირება ხელმისაწვდომია",
    },
    "archive_holding": {
        "en": "Archive holding - Contact museum for licensing",
        "ka": "არქივის შენახვა - დაუკავშირდით მუზეუმს ლიცენზირებისთვის",
    },
    "restricted": {
        "en": "Restricted - Permission required",
        "ka": "შეზღუდული - საჭიროა ნებართვა",
    },
    "unknown": {
        "en": "Rights status unknown - Contact museum",
        "ka": "უფლებების სტატუსი უცნობია - დაუკავშირდით მუზეუმს",
    },
}


def normalize_lang(lang: Optional[str]) -> str:
    value = (lang or "").strip().lower()
    return value if value in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def _pick(table: Dict[str, Dict[str, str]], key: str, lang: str) -> Optional[str]:
    entry = table.get(key)
    if not entry:
        return None
    return entry.get(lang) or entry.get(DEFAULT_LANGUAGE)


def t(key: str, lang: str) -> str:
    """Label for ``key`` in ``lang``, falling back to English, then to the key itself."""
    return _pick(LABELS, key, lang) or key


def rights_label(status: Optional[str], lang: str) -> str:
    if not status:
        return ""
    return _pick(RIGHTS_LABELS, status, lang) or status
