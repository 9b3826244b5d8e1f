"""
Backend d'export : chaque rendu relit le template depuis le disque, sans cache.
"""
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from jinja2 import TemplateNotFound

from .environment import make_environment, resolve_templates_dir


class ExportRenderer:
    def __init__(self, templates_dir: Optional[Union[str, Path]] = None):
        self.templates_dir = resolve_templates_dir(templates_dir)
        self.env = make_environment(self.templates_dir, cache_size=0)

    def render_template(self, path: str, variables: Mapping[str, Any]) -> str:
        source_path = self.templates_dir / path
        if not source_path.is_file():
            raise TemplateNotFound(path)
        source = source_path.read_text(encoding="utf-8")
        return self.env.from_string(source).render(**variables)
