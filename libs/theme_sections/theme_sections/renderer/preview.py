"""
Backend d'aperçu : templates compilés une seule fois, mis en cache par chemin.

Pas d'invalidation hors clear() (dev only). Le premier compile d'un chemin
est protégé par un verrou : deux rendus concurrents ne compilent pas deux fois.
"""
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from jinja2 import Template

from .environment import make_environment, resolve_templates_dir

log = logging.getLogger(__name__)


class PreviewRenderer:
    def __init__(self, templates_dir: Optional[Union[str, Path]] = None):
        self.templates_dir = resolve_templates_dir(templates_dir)
        self.env = make_environment(self.templates_dir)
        self._cache: Dict[str, Template] = {}
        self._lock = threading.Lock()

    def _compiled(self, path: str) -> Template:
        template = self._cache.get(path)
        if template is not None:
            return template
        with self._lock:
            template = self._cache.get(path)
            if template is None:
                log.debug("Compilation template (aperçu) : %s", path)
                template = self.env.get_template(path)
                self._cache[path] = template
        return template

    def render_template(self, path: str, variables: Mapping[str, Any]) -> str:
        return self._compiled(path).render(**variables)

    def cached_paths(self) -> list:
        return sorted(self._cache)

    def clear(self) -> None:
        """Force la recompilation des templates (dev only)."""
        with self._lock:
            self._cache.clear()
            # le cache jinja garde sinon la version compilée (auto_reload=False)
            if self.env.cache is not None:
                self.env.cache.clear()
