"""
Configuration jinja2 commune aux deux backends.

Aperçu et export partagent exactement les mêmes options et filtres : même
entrée → même sortie, octet pour octet.
"""
from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader

from ..sanitizers import sanitize_hex, sanitize_href, to_px

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def resolve_templates_dir(templates_dir: Optional[Union[str, Path]] = None) -> Path:
    return Path(templates_dir) if templates_dir else TEMPLATES_DIR


def make_environment(templates_dir: Path, cache_size: int = 400) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        cache_size=cache_size,
        auto_reload=False,
    )
    env.filters["href"] = sanitize_href
    env.filters["hex"] = sanitize_hex
    env.filters["px"] = to_px
    return env
