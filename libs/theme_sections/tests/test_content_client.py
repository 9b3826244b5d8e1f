"""Tests client Ghost Content API : requêtes, erreurs réseau, payloads invalides."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from theme_sections import ContentSourceError
from theme_sections.config import EngineSettings
from theme_sections.content_client import GhostContentClient, client_from_settings


def _response(payload=None, ok=True, status_code=200):
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = status_code
    resp.json.return_value = payload
    return resp


@pytest.fixture
def client():
    return GhostContentClient("https://blog.example.com/", "content-key", timeout=5)


# ── Requête ─────────────────────────────────────────────────────────────────

def test_fetch_pages(client):
    payload = {"pages": [{"id": "1", "title": "À propos", "tags": [{"slug": "hash-ghost-card"}]}]}
    with patch("theme_sections.content_client.requests.get", return_value=_response(payload)) as get:
        pages = client.fetch_pages()
    assert pages[0].title == "À propos"
    assert pages[0].tags[0].slug == "hash-ghost-card"
    url = get.call_args.args[0]
    params = get.call_args.kwargs["params"]
    assert url == "https://blog.example.com/ghost/api/content/pages/"
    assert params["key"] == "content-key"
    assert params["include"] == "tags"
    assert get.call_args.kwargs["timeout"] == 5


def test_fetch_posts_with_params(client):
    with patch("theme_sections.content_client.requests.get", return_value=_response({"posts": []})) as get:
        assert client.fetch_posts(filter="tag:hash-ghost-card") == []
    assert get.call_args.kwargs["params"]["filter"] == "tag:hash-ghost-card"


# ── Erreurs ─────────────────────────────────────────────────────────────────

def test_timeout(client):
    with patch("theme_sections.content_client.requests.get", side_effect=requests.Timeout()):
        with pytest.raises(ContentSourceError) as exc:
            client.fetch_pages()
    assert exc.value.status_code == 408


def test_connection_error(client):
    with patch("theme_sections.content_client.requests.get", side_effect=requests.ConnectionError("refusé")):
        with pytest.raises(ContentSourceError):
            client.fetch_pages()


def test_http_error(client):
    with patch("theme_sections.content_client.requests.get", return_value=_response(ok=False, status_code=401)):
        with pytest.raises(ContentSourceError) as exc:
            client.fetch_pages()
    assert exc.value.status_code == 401


def test_non_json_response(client):
    resp = _response()
    resp.json.side_effect = ValueError("pas du json")
    with patch("theme_sections.content_client.requests.get", return_value=resp):
        with pytest.raises(ContentSourceError):
            client.fetch_pages()


@pytest.mark.parametrize("payload", [[], {"posts": []}, {"pages": "x"}, {"pages": [{"tags": "x"}]}])
def test_unexpected_payload(client, payload):
    with patch("theme_sections.content_client.requests.get", return_value=_response(payload)):
        with pytest.raises(ContentSourceError):
            client.fetch_pages()


# ── Configuration ───────────────────────────────────────────────────────────

def test_url_and_key_required():
    with pytest.raises(ValueError):
        GhostContentClient("", "key")


def test_client_from_settings():
    assert client_from_settings(EngineSettings()) is None
    client = client_from_settings(EngineSettings(ghost_url="https://blog.example.com", ghost_content_key="k"))
    assert client.url == "https://blog.example.com"
