"""
Client Ghost Content API (lecture seule) : pages et posts tagués pour l'aperçu.

Le moteur ne fait jamais d'appel réseau lui-même : l'app récupère les pages
ici puis les passe au RenderContext.
"""
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from .errors import ContentSourceError
from .tags import ContentPage

log = logging.getLogger(__name__)

_API_PATH = "/ghost/api/content"
_DEFAULT_PARAMS = {"include": "tags", "limit": "all", "formats": "html"}


class GhostContentClient:
    def __init__(self, url: str, key: str, timeout: float = 15):
        if not url or not key:
            raise ValueError("GhostContentClient : url et key requis")
        self.url = url.rstrip("/")
        self.key = key
        self.timeout = timeout

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.url}{_API_PATH}/{endpoint}/"
        query = {**_DEFAULT_PARAMS, **params, "key": self.key}
        try:
            resp = requests.get(url, params=query, timeout=self.timeout)
        except requests.Timeout:
            log.warning("Ghost %s : timeout après %ss", endpoint, self.timeout)
            raise ContentSourceError(f"Ghost {endpoint} : délai dépassé", status_code=408) from None
        except requests.RequestException as e:
            log.warning("Ghost %s : %s", endpoint, e)
            raise ContentSourceError(f"Ghost {endpoint} : {e}") from e

        if not resp.ok:
            log.warning("Ghost %s status=%s", endpoint, resp.status_code)
            raise ContentSourceError(f"Ghost {endpoint} : HTTP {resp.status_code}", status_code=resp.status_code)
        try:
            data = resp.json()
        except ValueError:
            raise ContentSourceError(f"Ghost {endpoint} : réponse non JSON", status_code=resp.status_code) from None
        if not isinstance(data, dict):
            raise ContentSourceError(f"Ghost {endpoint} : objet JSON attendu", status_code=resp.status_code)
        return data

    def _fetch(self, endpoint: str, params: Dict[str, Any]) -> List[ContentPage]:
        data = self._get(endpoint, params)
        items = data.get(endpoint)
        if not isinstance(items, list):
            raise ContentSourceError(f"Ghost {endpoint} : clé {endpoint!r} absente de la réponse")
        try:
            return [ContentPage.model_validate(item) for item in items]
        except ValidationError as e:
            raise ContentSourceError(f"Ghost {endpoint} : payload invalide ({e.error_count()} erreur(s))") from e

    def fetch_pages(self, **params: Any) -> List[ContentPage]:
        return self._fetch("pages", params)

    def fetch_posts(self, **params: Any) -> List[ContentPage]:
        return self._fetch("posts", params)


def client_from_settings(settings) -> Optional[GhostContentClient]:
    """Client configuré depuis EngineSettings, ou None si GHOST_URL/GHOST_CONTENT_KEY absents."""
    if not settings.ghost_url or not settings.ghost_content_key:
        return None
    return GhostContentClient(settings.ghost_url, settings.ghost_content_key)
