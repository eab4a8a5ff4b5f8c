"""Content schema package."""

from typing import Any, Dict, Mapping, Type

from .common import ContentDocument, Reference, Slug, slugify
from .localized import FallbackChain, LocalizedString, LocalizedText, SUPPORTED_LANGUAGES
from .seo import Seo
from .photo import Photo, RightsStatus, PHOTO_TITLE
from .photographer import Photographer, PHOTOGRAPHER_NAME
from .collection import Collection, CollectionType, COLLECTION_TITLE
from .theme import Theme, THEME_TITLE
from .curator import Curator, CURATOR_NAME
from .place import Place, PLACE_TITLE
from .tag import Tag

SCHEMA_TYPES: Dict[str, Type[ContentDocument]] = {
    "photo": Photo,
    "photographer": Photographer,
    "collection": Collection,
    "theme": Theme,
    "curator": Curator,
    "place": Place,
    "tag": Tag,
}


def validate_document(doc: Mapping[str, Any]) -> ContentDocument:
    """Validate a raw store document against its schema, raising ValidationError on failure."""
    doc_type = str(doc.get("_type", "")).strip()
    schema = SCHEMA_TYPES.get(doc_type)
    if schema is None:
        raise ValueError(f"Unknown document type: {doc_type or '(missing)'}")
    return schema.model_validate(doc)
