import pytest

from fakes import FakeArchive, make_photos
from services.errors import ConfigError, HTTPError, TransportError
from services.labels import normalize_lang
from services.resolver import (
    ContentBridge,
    PageKind,
    Pagination,
    ViewRequest,
    clamp_pagination,
    notice_for_error,
)

THEME = {"_id": "theme-1", "slug": "architecture", "title": "Architecture", "hasLang": True}
COLLECTION = {"_id": "col-1", "slug": "family-album", "title": "Family album", "hasLang": True}


def _resolve(archive, **request):
    return ContentBridge(archive, debug=False).resolve(ViewRequest(**request))


@pytest.mark.parametrize(
    "offset, limit, expected",
    [
        (0, 24, (0, 24)),
        (-5, 24, (0, 24)),
        ("12", "6", (12, 6)),
        (0, 0, (0, 1)),
        (0, 500, (0, 60)),
        ("abc", None, (0, 24)),
        (None, "", (0, 24)),
    ],
)
def test_clamp_pagination(offset, limit, expected):
    assert clamp_pagination(offset, limit) == expected


def test_unsupported_language_normalizes_to_english():
    assert normalize_lang("KA") == "ka"
    assert normalize_lang("de") == "en"
    assert normalize_lang(None) == "en"
    assert ViewRequest(lang="fr").lang == "en"


def test_view_request_drops_blank_and_unknown_filters():
    request = ViewRequest(kind=" Search ", query="  bridge ", filters={"theme": " arch ", "place": "", "era": "1920s"})
    assert request.kind == "search"
    assert request.query == "bridge"
    assert request.filters == {"theme": "arch"}


def test_pagination_offsets():
    page = Pagination(offset=0, limit=2, count=2)
    assert page.has_more is True
    assert page.prev_offset is None
    assert page.next_offset == 2

    last = Pagination(offset=4, limit=2, count=1)
    assert last.has_more is False
    assert last.prev_offset == 2
    assert last.next_offset is None


def test_first_theme_page_reports_more():
    archive = FakeArchive({"theme_detail": THEME, "photos_by_theme": make_photos(5)})

    payload = _resolve(archive, kind="theme", slug="architecture", offset=0, limit=2)

    assert payload.ok
    assert [p["slug"] for p in payload.data["photos"]] == ["photo-0", "photo-1"]
    assert payload.page.has_more is True
    assert payload.page.next_offset == 2


def test_last_theme_page_has_no_next():
    archive = FakeArchive({"theme_detail": THEME, "photos_by_theme": make_photos(5)})

    payload = _resolve(archive, kind="theme", slug="architecture", offset=4, limit=2)

    assert [p["slug"] for p in payload.data["photos"]] == ["photo-4"]
    assert payload.page.has_more is False
    assert payload.page.prev_offset == 2


def test_theme_queries_run_in_order_with_theme_id():
    archive = FakeArchive({"theme_detail": THEME, "theme_children": [], "photos_by_theme": []})

    _resolve(archive, lang="ka", kind="theme", slug="architecture")

    assert archive.names == ["theme_detail", "theme_children", "photos_by_theme"]
    assert archive.calls[0][1] == {"lang": "ka", "slug": "architecture"}
    assert archive.calls[2][1]["themeId"] == "theme-1"


def test_collection_with_children_lists_children_only():
    collection = dict(
        COLLECTION,
        children=[
            {"_id": "c1", "slug": "letters", "title": "Letters", "hasLang": True, "childCount": 0, "photoCount": 4},
            {"_id": "c2", "slug": "portraits", "title": "Portraits", "hasLang": True, "childCount": 1, "photoCount": 0},
        ],
    )
    archive = FakeArchive({"collection_detail": collection, "collection_photos": make_photos(3)})

    payload = _resolve(archive, kind="collection", slug="family-album")

    assert payload.data["has_children"] is True
    assert [c["slug"] for c in payload.data["children"]] == ["letters", "portraits"]
    assert payload.data["photos"] == []
    assert payload.page is None
    assert "collection_photos" not in archive.names


def test_collection_whose_children_all_lack_the_language_still_hides_photos():
    collection = dict(
        COLLECTION,
        children=[{"_id": "c1", "slug": "letters", "title": "Letters", "hasLang": False, "childCount": 0}],
    )
    archive = FakeArchive({"collection_detail": collection, "collection_photos": make_photos(3)})

    payload = _resolve(archive, kind="collection", slug="family-album")

    assert payload.data["has_children"] is True
    assert payload.data["children"] == []
    assert payload.data["photos"] == []
    assert "collection_photos" not in archive.names


def test_collection_without_children_lists_photos():
    archive = FakeArchive({"collection_detail": dict(COLLECTION, children=[]), "collection_photos": make_photos(3)})

    payload = _resolve(archive, kind="collection", slug="family-album")

    assert payload.data["has_children"] is False
    assert len(payload.data["photos"]) == 3
    assert payload.page.count == 3
    assert archive.calls[-1][1]["collectionId"] == "col-1"


def test_missing_document_is_not_found():
    archive = FakeArchive({"theme_detail": None})

    payload = _resolve(archive, kind="theme", slug="nope")

    assert payload.notice.kind == "not_found"
    assert payload.data == {}
    assert archive.names == ["theme_detail"]


def test_document_without_requested_language_is_unavailable():
    archive = FakeArchive({"photo_detail": {"_id": "p1", "slug": "bridge", "title": None, "hasLang": False}})

    payload = _resolve(archive, lang="ka", kind="photo", slug="bridge")

    assert payload.notice.kind == "lang_unavailable"
    assert payload.data == {}


def test_photographer_is_shown_without_language_check():
    photographer = {"_id": "ph-1", "slug": "ermakov", "name": "დიმიტრი ერმაკოვი"}
    archive = FakeArchive({"photographer_detail": photographer, "photos_by_photographer": make_photos(1)})

    payload = _resolve(archive, lang="en", kind="photographer", slug="ermakov")

    assert payload.ok
    assert payload.data["photographer"]["name"] == "დიმიტრი ერმაკოვი"


def test_unknown_kind_is_not_found_without_queries():
    archive = FakeArchive()

    payload = _resolve(archive, kind="era")

    assert payload.kind is None
    assert payload.notice.kind == "not_found"
    assert archive.calls == []


def test_primary_entity_failure_replaces_the_view():
    archive = FakeArchive(errors={"theme_detail": ConfigError("Content store settings missing.")})

    payload = _resolve(archive, kind="theme", slug="architecture")

    assert payload.notice.kind == "config"
    assert payload.notice.detail is None
    assert payload.data == {}


def test_section_failure_keeps_the_rest_of_the_view():
    archive = FakeArchive(
        {"theme_detail": THEME, "theme_children": [{"_id": "t2", "slug": "bridges", "title": "Bridges"}]},
        errors={"photos_by_theme": TransportError("timed out")},
    )

    payload = _resolve(archive, kind="theme", slug="architecture")

    assert payload.ok
    assert payload.data["theme"]["title"] == "Architecture"
    assert [c["slug"] for c in payload.data["children"]] == ["bridges"]
    assert payload.data["photos"] == []
    assert payload.page is None
    assert payload.section_notices["photos"].kind == "unavailable"


def test_home_sections_fail_independently():
    archive = FakeArchive({"recent_photos": make_photos(2)}, errors={"top_themes": HTTPError(500)})

    payload = _resolve(archive, kind="home")

    assert payload.ok
    assert payload.data["themes"] == []
    assert len(payload.data["recent"]) == 2
    assert payload.section_notices["themes"].kind == "http"


def test_listing_skips_entries_without_slug_or_language():
    themes = [
        {"_id": "a", "slug": "architecture", "title": "Architecture", "hasLang": True},
        {"_id": "b", "slug": None, "title": "Broken"},
        {"_id": "c", "slug": "costume", "title": None, "hasLang": False},
    ]
    payload = _resolve(FakeArchive({"top_themes": themes}), kind="themes")

    assert [t["slug"] for t in payload.data["themes"]] == ["architecture"]


def test_search_passes_query_and_filters_through():
    archive = FakeArchive(
        {
            "search_photos": make_photos(1),
            "filter_themes": [{"_id": "t", "slug": "architecture", "title": "Architecture", "hasLang": True}],
            "filter_photographers": [],
            "filter_places": [{"_id": "p", "slug": "tbilisi", "title": "Tbilisi"}],
        }
    )

    payload = _resolve(archive, kind="search", query="bridge", filters={"place": "tbilisi"})

    params = archive.calls[0][1]
    assert archive.names[0] == "search_photos"
    assert params["q"] == "bridge"
    assert params["placeSlug"] == "tbilisi"
    assert params["themeSlug"] == ""
    assert payload.data["query"] == "bridge"
    assert payload.data["filters"] == {"place": "tbilisi"}
    assert [o["slug"] for o in payload.data["place_options"]] == ["tbilisi"]


def test_photo_detail_filters_unavailable_related_entries():
    photo = {
        "_id": "p1",
        "slug": "bridge",
        "title": "Bridge",
        "hasLang": True,
        "themes": [{"_id": "t", "slug": "architecture", "title": "Architecture"}, {"_id": "x", "slug": None}],
        "places": None,
    }

    payload = _resolve(FakeArchive({"photo_detail": photo}), kind="photo", slug="bridge")

    assert [t["slug"] for t in payload.data["photo"]["themes"]] == ["architecture"]
    assert payload.data["photo"]["places"] == []
    assert payload.kind is PageKind.PHOTO


def test_notice_detail_only_in_debug_mode():
    exc = HTTPError(400, "bad query")
    assert notice_for_error(exc, debug=False).detail is None
    assert notice_for_error(exc, debug=True).detail == "HTTP 400: bad query"
    assert notice_for_error(TransportError("dns"), debug=True).detail == "dns"
