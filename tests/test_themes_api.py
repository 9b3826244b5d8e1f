"""
Tests API thèmes : CRUD document, backup/restore, aperçu, export, santé.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import patch, MagicMock
import pytest
from fastapi.testclient import TestClient


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def client(tmp_path):
    """Client de test avec DB SQLite temporaire, sans source Ghost."""
    os.environ["DB_PATH"] = str(tmp_path / "test.db")
    os.environ.pop("GHOST_URL", None)
    os.environ.pop("GHOST_CONTENT_KEY", None)

    from src.api.main import app
    from src.database import init_db
    init_db()

    with TestClient(app) as c:
        yield c


def _create_theme(client, tier="free", document=None, name="Thème test") -> dict:
    body = {"name": name, "tier": tier}
    if document is not None:
        body["document"] = document
    r = client.post("/api/themes", json=body)
    assert r.status_code == 201
    return r.json()


def _with_hero(document: dict, instance_id="hero-defalt-1") -> dict:
    homepage = document["pages"]["homepage"]
    homepage["sections"][instance_id] = {
        "type": "hero",
        "settings": {"customConfig": {"placeholder": {"title": "Bienvenue chez nous"}}},
    }
    homepage["order"].insert(0, instance_id)
    return document


# ── Santé ─────────────────────────────────────────────────────────────────

class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_sections_router_mounted(self, client):
        assert client.get("/sections/catalog").status_code == 200


# ── CRUD ──────────────────────────────────────────────────────────────────

class TestThemeCrud:
    def test_create_default_document(self, client):
        theme = _create_theme(client)
        assert theme["tier"] == "free"
        assert set(theme["document"]["pages"]) == {"homepage", "about", "post", "page"}

    def test_create_requires_name(self, client):
        assert client.post("/api/themes", json={"name": ""}).status_code == 422

    def test_create_with_malformed_document(self, client):
        r = client.post("/api/themes", json={"name": "x", "document": {"pages": "pas une map"}})
        assert r.status_code == 422
        assert r.json()["detail"]["errors"]

    def test_create_reconciles_document(self, client):
        theme = _create_theme(client, document={"pages": {"homepage": {"order": ["fantome"], "sections": {}}}})
        assert theme["document"]["pages"]["homepage"]["order"] == ["subheader", "featured", "main"]

    def test_get_and_list(self, client):
        theme = _create_theme(client, name="Liste")
        r = client.get(f"/api/themes/{theme['theme_id']}")
        assert r.status_code == 200
        assert r.json()["name"] == "Liste"
        listed = client.get("/api/themes").json()
        assert any(t["theme_id"] == theme["theme_id"] and t["document"] is None for t in listed)

    def test_get_unknown_404(self, client):
        assert client.get("/api/themes/inconnu").status_code == 404

    def test_update_document(self, client):
        theme = _create_theme(client)
        document = _with_hero(theme["document"], "header-defalt-1")
        r = client.put(f"/api/themes/{theme['theme_id']}/document", json=document)
        assert r.status_code == 200
        order = r.json()["document"]["pages"]["homepage"]["order"]
        assert order[0] == "hero-defalt-1"

    def test_update_malformed_keeps_stored_document(self, client):
        theme = _create_theme(client)
        r = client.put(f"/api/themes/{theme['theme_id']}/document", json={"pages": {"homepage": {"order": 3}}})
        assert r.status_code == 422
        stored = client.get(f"/api/themes/{theme['theme_id']}").json()["document"]
        assert stored == theme["document"]

    def test_delete(self, client):
        theme = _create_theme(client)
        assert client.delete(f"/api/themes/{theme['theme_id']}").json() == {"deleted": theme["theme_id"]}
        assert client.get(f"/api/themes/{theme['theme_id']}").status_code == 404


# ── Backup / restore ──────────────────────────────────────────────────────

class TestBackup:
    def test_backup_shape(self, client):
        theme = _create_theme(client)
        r = client.get(f"/api/themes/{theme['theme_id']}/backup")
        assert r.status_code == 200
        backup = r.json()
        assert backup["version"] == 1
        assert backup["exportedAt"].endswith("Z")
        assert backup["document"] == theme["document"]

    def test_restore(self, client):
        source = _create_theme(client, document=_with_hero(_create_theme(client)["document"]))
        backup = client.get(f"/api/themes/{source['theme_id']}/backup").json()
        target = _create_theme(client)
        r = client.post(f"/api/themes/{target['theme_id']}/restore", json=backup)
        assert r.status_code == 200
        assert "hero-defalt-1" in r.json()["document"]["pages"]["homepage"]["sections"]

    def test_restore_invalid_backup(self, client):
        theme = _create_theme(client)
        r = client.post(f"/api/themes/{theme['theme_id']}/restore", json={"version": 1, "document": {}})
        assert r.status_code == 422


# ── Aperçu / export ───────────────────────────────────────────────────────

class TestPreviewExport:
    def test_preview_free_tier_locks_premium(self, client):
        theme = _create_theme(client, document=_with_hero(_create_theme(client)["document"]))
        r = client.get(f"/api/themes/{theme['theme_id']}/preview/homepage")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/html")
        assert 'data-page="homepage"' in r.text
        assert "gd-section-locked" in r.text
        assert "Bienvenue chez nous" not in r.text

    def test_preview_premium_tier(self, client):
        theme = _create_theme(client, tier="premium", document=_with_hero(_create_theme(client)["document"]))
        r = client.get(f"/api/themes/{theme['theme_id']}/preview/homepage")
        assert "Bienvenue chez nous" in r.text

    def test_preview_unknown_page_404(self, client):
        theme = _create_theme(client)
        assert client.get(f"/api/themes/{theme['theme_id']}/preview/blog").status_code == 404

    def test_preview_uses_ghost_pages(self, client):
        theme = _create_theme(client)
        resp = MagicMock(ok=True, status_code=200)
        resp.json.return_value = {"pages": [{"title": "Annonce", "html": "<p>Soldes d'été</p>",
                                             "tags": [{"slug": "hash-announcement-bar"}]}]}
        os.environ["GHOST_URL"] = "https://blog.example.com"
        os.environ["GHOST_CONTENT_KEY"] = "k"
        try:
            with patch("theme_sections.content_client.requests.get", return_value=resp):
                r = client.get(f"/api/themes/{theme['theme_id']}/preview/homepage")
        finally:
            os.environ.pop("GHOST_URL", None)
            os.environ.pop("GHOST_CONTENT_KEY", None)
        assert r.status_code == 200
        assert "Soldes d" in r.text

    def test_preview_ghost_unavailable_502(self, client):
        import requests
        theme = _create_theme(client)
        os.environ["GHOST_URL"] = "https://blog.example.com"
        os.environ["GHOST_CONTENT_KEY"] = "k"
        try:
            with patch("theme_sections.content_client.requests.get", side_effect=requests.ConnectionError("down")):
                r = client.get(f"/api/themes/{theme['theme_id']}/preview/homepage")
        finally:
            os.environ.pop("GHOST_URL", None)
            os.environ.pop("GHOST_CONTENT_KEY", None)
        assert r.status_code == 502

    def test_export(self, client):
        theme = _create_theme(client, tier="premium", document=_with_hero(_create_theme(client)["document"]))
        r = client.post(f"/api/themes/{theme['theme_id']}/export")
        assert r.status_code == 200
        data = r.json()
        assert "homepage.html" in data["files"]
        assert "theme.json" in data["files"]
        assert "Bienvenue chez nous" in data["files"]["partials/sections/homepage/hero-defalt-1.html"]
        assert data["skipped"] == []

    def test_export_free_tier_skips_premium(self, client):
        theme = _create_theme(client, document=_with_hero(_create_theme(client)["document"]))
        data = client.post(f"/api/themes/{theme['theme_id']}/export").json()
        assert data["skipped"] == ["homepage/hero-defalt-1"]
