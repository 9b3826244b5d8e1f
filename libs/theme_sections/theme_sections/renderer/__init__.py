"""
Renderer : définition + config validée + contexte → markup.

Un template en échec ne casse jamais la page : il est remplacé par un
placeholder d'erreur et l'exception est loggée.
"""
import logging

from jinja2 import TemplateError

from ..context import RenderContext
from ..definition import SectionDefinition
from ..sanitizers import escape_html
from .base import Renderer
from .environment import TEMPLATES_DIR, make_environment
from .export import ExportRenderer
from .preview import PreviewRenderer

log = logging.getLogger(__name__)


def error_placeholder(section_id: str, message: str) -> str:
    return (
        f'<section class="gd-section-error" data-section-id="{escape_html(section_id)}">'
        f"<p>Error loading section: {escape_html(message)}</p></section>"
    )


def render_section(
    definition: SectionDefinition,
    config: dict,
    context: RenderContext,
    renderer: Renderer,
) -> str:
    """
    Rend une section. La config doit déjà être passée par le validateur.

    Returns:
        Markup de la section, ou le placeholder d'erreur si le template échoue
    """
    section_id = context.section_id or definition.id
    variables = definition.build_view(config, context)
    try:
        return renderer.render_template(definition.template, variables).strip()
    except TemplateError as e:
        log.exception("Rendu en échec pour %s (%s)", section_id, definition.template)
        return error_placeholder(section_id, str(e) or type(e).__name__)


__all__ = [
    "Renderer", "PreviewRenderer", "ExportRenderer",
    "TEMPLATES_DIR", "make_environment",
    "render_section", "error_placeholder",
]
