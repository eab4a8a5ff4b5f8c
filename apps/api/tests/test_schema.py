import pytest
from pydantic import ValidationError

from models import (
    COLLECTION_TITLE,
    PHOTOGRAPHER_NAME,
    PLACE_TITLE,
    PHOTO_TITLE,
    Collection,
    Photo,
    Photographer,
    Seo,
    Theme,
    slugify,
    validate_document,
)


def _photo(**overrides):
    doc = {
        "_id": "photo-1",
        "_type": "photo",
        "title": {"en": "Old Tbilisi"},
        "slug": {"current": "old-tbilisi"},
        "image": {"asset": {"_ref": "image-abc"}},
        "dateNote": {"en": "c. 1920s"},
    }
    doc.update(overrides)
    return doc


def test_title_must_exist_in_at_least_one_language():
    with pytest.raises(ValidationError) as exc_info:
        Theme.model_validate({"_type": "theme", "title": {"en": " ", "ka": ""}, "slug": {"current": "x"}})
    assert "at least one language" in str(exc_info.value)


def test_georgian_only_title_is_valid():
    theme = Theme.model_validate({"_type": "theme", "title": {"ka": "არქიტექტურა"}, "slug": {"current": "arch"}})
    assert theme.preview()["title"] == "არქიტექტურა"


def test_photo_title_length_is_checked_per_language():
    with pytest.raises(ValidationError):
        Photo.model_validate(_photo(title={"en": "ab"}))
    assert Photo.model_validate(_photo(title={"en": "abc"})).title.en == "abc"


def test_photo_rejects_duplicate_theme_references():
    with pytest.raises(ValidationError):
        Photo.model_validate(_photo(themeRefs=[{"_ref": "t1"}, {"_ref": "t1"}]))


def test_alt_text_is_limited_to_180_characters():
    with pytest.raises(ValidationError):
        Photo.model_validate(_photo(image={"asset": {"_ref": "image-abc"}, "alt": {"ka": "ა" * 181}}))


def test_collection_cannot_be_its_own_parent():
    with pytest.raises(ValidationError):
        Collection.model_validate(
            {
                "_id": "col-1",
                "_type": "collection",
                "title": {"en": "Family album"},
                "slug": {"current": "family-album"},
                "parent": {"_ref": "col-1"},
            }
        )


def test_sort_order_range():
    with pytest.raises(ValidationError):
        Theme.model_validate(
            {"_type": "theme", "title": {"en": "Streets"}, "slug": {"current": "streets"}, "sortOrder": 10000}
        )


def test_photographer_death_year_cannot_precede_birth_year():
    with pytest.raises(ValidationError):
        Photographer.model_validate(
            {"_type": "photographer", "name": {"en": "Dmitri Ermakov"}, "birthYear": 1900, "deathYear": 1846}
        )


def test_photographer_name_falls_back_across_languages():
    doc = {"name": {"ka": "დიმიტრი ერმაკოვი"}}
    assert PHOTOGRAPHER_NAME.resolve(doc, "en") == "დიმიტრი ერმაკოვი"
    assert PHOTOGRAPHER_NAME.has_lang(doc, "en") is False
    assert PHOTOGRAPHER_NAME.has_lang(doc, "ka") is True


def test_photo_title_has_no_fallback():
    doc = {"title": {"ka": "ძველი თბილისი"}}
    assert PHOTO_TITLE.resolve(doc, "en") is None
    assert PHOTO_TITLE.projection() == "title[$lang]"


def test_place_title_uses_plain_title_then_georgian_title():
    assert PLACE_TITLE.resolve({"title": "Tbilisi", "titleKa": "თბილისი"}, "ka") == "Tbilisi"
    assert PLACE_TITLE.resolve({"titleKa": "თბილისი"}, "en") == "თბილისი"


def test_collection_title_projection_matches_local_resolution():
    assert COLLECTION_TITLE.projection() == "coalesce(title[$lang], title.en, title.ka)"
    assert COLLECTION_TITLE.resolve({"title": {"en": "Estate"}}, "ka") == "Estate"


def test_collection_preview_marks_curatorial_groupings():
    collection = Collection.model_validate(
        {
            "_type": "collection",
            "title": {"en": "Women at work"},
            "slug": {"current": "women-at-work"},
            "isOriginalGrouping": False,
            "collectionType": "curatorial_project",
        }
    )
    preview = collection.preview()
    assert preview["title"] == "🎨 Women at work"
    assert preview["subtitle"].startswith("Curatorial • Curatorial Project")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Old Tbilisi, 1920s!", "old-tbilisi-1920s"),
        ("  --Kura_River--  ", "kura-river"),
        ("ძველი თბილისი", "ძველი-თბილისი"),
        ("", ""),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_slugify_caps_length():
    assert len(slugify("a" * 200)) == 96


def test_validate_document_dispatches_on_type():
    assert isinstance(validate_document(_photo()), Photo)
    with pytest.raises(ValueError, match="Unknown document type"):
        validate_document({"_type": "poster"})


def test_supporting_documents_validate_and_preview():
    curator = validate_document({"_type": "curator", "name": {"ka": "ნინო"}, "isFounder": True})
    tag = validate_document({"_type": "tag", "title": "Uniforms", "titleKa": "ფორმები", "scope": "uniform", "slug": {"current": "uniforms"}})

    assert curator.preview() == {"title": "⭐ ნინო", "subtitle": ""}
    assert tag.preview() == {"title": "Uniforms (uniform)", "subtitle": "• ფორმები"}


def test_tag_rejects_duplicate_alt_labels():
    with pytest.raises(ValidationError):
        validate_document(
            {"_type": "tag", "title": "Bridges", "scope": "subject", "slug": {"current": "b"}, "altLabels": ["a", "a"]}
        )


def test_seo_meta_description_limit():
    assert Seo(metaTitle="Old Tbilisi").noIndex is False
    with pytest.raises(ValidationError):
        Seo(metaDescription="x" * 161)
