import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from config import settings
from fakes import CountingClient, FakeArchive, make_photos
from main import app
from routers.deps import get_bridge, get_query_cache
from services.errors import ConfigError
from services.query_cache import MemoryCacheBackend, QueryCache
from services.resolver import ContentBridge

THEME = {"_id": "theme-1", "slug": "architecture", "title": "Architecture", "hasLang": True}


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def archive():
    archive = FakeArchive({"theme_detail": THEME, "theme_children": [], "photos_by_theme": make_photos(30)})
    app.dependency_overrides[get_bridge] = lambda: ContentBridge(archive, debug=False)
    return archive


@pytest.fixture
def query_cache():
    cache = QueryCache(CountingClient(result=[]), MemoryCacheBackend(), ttl_seconds=900)
    app.dependency_overrides[get_query_cache] = lambda: cache
    return cache


@pytest.fixture
def store_configured(monkeypatch):
    monkeypatch.setattr(settings, "SANITY_PROJECT_ID", "demo123")
    monkeypatch.setattr(settings, "SANITY_DATASET", "production")
    monkeypatch.setattr(settings, "SANITY_API_VERSION", "2023-10-01")


# ---------- pages ----------

@pytest.mark.asyncio
async def test_theme_page_renders_full_document(client, archive):
    resp = await client.get("/en/theme/architecture")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.text.startswith("<!DOCTYPE html>")
    assert "<title>Architecture</title>" in resp.text
    assert 'href="/en/photo/photo-0"' in resp.text
    assert 'href="/en/theme/architecture?pmsb_offset=24"' in resp.text


@pytest.mark.asyncio
async def test_offset_query_param_pages_photos(client, archive):
    resp = await client.get("/ka/theme/architecture", params={"pmsb_offset": "24"})

    assert resp.status_code == 200
    params = archive.calls[-1][1]
    assert (params["lang"], params["offset"], params["limit"]) == ("ka", 24, settings.DEFAULT_PAGE_LIMIT)
    assert 'href="/ka/photo/photo-29"' in resp.text
    assert "pmsb_offset=48" not in resp.text


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/en/unknown", "/fr/themes", "/en/theme", "/en/themes/architecture"])
async def test_unroutable_paths_render_not_found(client, archive, path):
    resp = await client.get(path)

    assert resp.status_code == 404
    assert "Not found." in resp.text
    assert archive.calls == []


@pytest.mark.asyncio
async def test_missing_entity_is_404(client):
    archive = FakeArchive({"theme_detail": None})
    app.dependency_overrides[get_bridge] = lambda: ContentBridge(archive, debug=False)

    resp = await client.get("/en/theme/missing")

    assert resp.status_code == 404
    assert "Theme not found." in resp.text


@pytest.mark.asyncio
async def test_language_unavailable_is_a_normal_page(client):
    archive = FakeArchive({"photo_detail": {"_id": "p1", "slug": "bridge", "hasLang": False}})
    app.dependency_overrides[get_bridge] = lambda: ContentBridge(archive, debug=False)

    resp = await client.get("/ka/photo/bridge")

    assert resp.status_code == 200
    assert "ეს კონტენტი არ არის ხელმისაწვდომი ამ ენაზე." in resp.text


@pytest.mark.asyncio
async def test_store_not_configured_is_503_with_notice(client):
    archive = FakeArchive(errors={"top_themes": ConfigError("missing")})
    app.dependency_overrides[get_bridge] = lambda: ContentBridge(archive, debug=False)

    resp = await client.get("/en/themes")

    assert resp.status_code == 503
    assert "The archive is not configured yet." in resp.text


@pytest.mark.asyncio
async def test_root_serves_english_home(client):
    archive = FakeArchive({"top_themes": [], "recent_photos": make_photos(1)})
    app.dependency_overrides[get_bridge] = lambda: ContentBridge(archive, debug=False)

    resp = await client.get("/")

    assert resp.status_code == 200
    assert "Browse the Archive" in resp.text
    assert archive.names == ["top_themes", "recent_photos"]


@pytest.mark.asyncio
async def test_search_page_passes_filters(client):
    archive = FakeArchive({"search_photos": [], "filter_themes": [], "filter_photographers": [], "filter_places": []})
    app.dependency_overrides[get_bridge] = lambda: ContentBridge(archive, debug=False)

    resp = await client.get("/en/search", params={"q": "bridge", "theme": "architecture"})

    assert resp.status_code == 200
    params = archive.calls[0][1]
    assert params["q"] == "bridge"
    assert params["themeSlug"] == "architecture"
    assert 'value="bridge"' in resp.text


# ---------- fragments ----------

@pytest.mark.asyncio
async def test_fragment_has_no_page_chrome(client, archive):
    resp = await client.get("/fragments/theme", params={"slug": "architecture", "lang": "ka", "limit": "5"})

    assert resp.status_code == 200
    assert "<!DOCTYPE html>" not in resp.text
    assert resp.text.count('class="pmsb-card"') == 5


@pytest.mark.asyncio
async def test_expand_replaces_embedded_tags(client, archive):
    resp = await client.post(
        "/fragments/expand",
        json={"content": 'Hello [pmsb_theme slug="architecture" limit="2"] bye', "lang": "ka", "pmsb_offset": 2},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["expanded"] == 1
    assert data["content"].startswith("Hello ")
    assert 'href="/ka/photo/photo-2"' in data["content"]
    assert archive.calls[-1][1]["offset"] == 2


@pytest.mark.asyncio
async def test_expand_rejects_negative_offset(client, archive):
    resp = await client.post("/fragments/expand", json={"content": "x", "pmsb_offset": -1})
    assert resp.status_code == 422


# ---------- cache administration ----------

@pytest.mark.asyncio
async def test_cache_admin_disabled_without_token(client, query_cache, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_TOKEN", "")

    resp = await client.post("/cache/clear", headers={"Authorization": "Bearer anything"})

    assert resp.status_code == 503


@pytest.mark.asyncio
async def test_cache_admin_requires_bearer(client, query_cache, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_TOKEN", "s3cret")

    missing = await client.post("/cache/clear")
    wrong = await client.post("/cache/clear", headers={"Authorization": "Bearer nope"})

    assert missing.status_code == 401
    assert wrong.status_code == 403
    assert query_cache.generation() == "1"


@pytest.mark.asyncio
async def test_cache_clear_bumps_generation(client, query_cache, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_TOKEN", "s3cret")
    headers = {"Authorization": "Bearer s3cret"}

    resp = await client.post("/cache/clear", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "message": "Cache cleared", "generation": "2"}

    stats = await client.get("/cache/stats", headers=headers)
    assert stats.json() == {"backend": "memory", "generation": "2", "ttl_seconds": 900}


# ---------- health ----------

@pytest.mark.asyncio
async def test_health_reports_cache_and_store(client, query_cache, store_configured):
    resp = await client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["cache"] == "up"
    assert data["cache_backend"] == "memory"
    assert data["content_store"] == "configured"


@pytest.mark.asyncio
async def test_readiness_fails_without_store_settings(client, query_cache, monkeypatch):
    monkeypatch.setattr(settings, "SANITY_PROJECT_ID", "")
    monkeypatch.setattr(settings, "SANITY_DATASET", "")

    resp = await client.get("/health/ready")

    assert resp.status_code == 503
    assert resp.json()["missing"] == ["SANITY_PROJECT_ID", "SANITY_DATASET"]

    health = await client.get("/health")
    assert health.json()["status"] == "degraded"


@pytest.mark.asyncio
async def test_liveness(client):
    resp = await client.get("/health/live")
    assert resp.json() == {"alive": True}
