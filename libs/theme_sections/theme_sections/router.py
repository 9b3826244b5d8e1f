"""
Router FastAPI : endpoints du moteur de sections.

GET  /sections/catalog          → définitions + réglages éditeur + JSON schema de config
GET  /sections/{id}/defaults    → config par défaut
POST /sections/{id}/validate    → {"config", "warnings", "valid"}
POST /sections/{id}/render      → HTMLResponse (backend d'aperçu)
"""
import logging
import threading
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from .config import load_settings
from .context import RenderContext
from .definition import SectionDefinition
from .errors import ConfigValidationError, UnknownSectionError
from .gate import GatePolicy, Tier
from .pipeline import locked_placeholder
from .registry import SectionRegistry, default_registry
from .renderer import PreviewRenderer, render_section
from .schema import Padding
from .tags import ContentPage
from .validation import resolve_instance_config, validate_section_config

log = logging.getLogger(__name__)

router = APIRouter(prefix="/sections", tags=["sections"])

_PREVIEW: Dict[str, PreviewRenderer] = {}
_PREVIEW_LOCK = threading.Lock()


def get_registry() -> SectionRegistry:
    return default_registry()


def get_preview_renderer() -> PreviewRenderer:
    """Un backend d'aperçu par dossier de templates (son cache vit avec le process)."""
    templates_dir = str(load_settings().templates_dir)
    with _PREVIEW_LOCK:
        if templates_dir not in _PREVIEW:
            _PREVIEW[templates_dir] = PreviewRenderer(templates_dir)
        return _PREVIEW[templates_dir]


class RenderRequest(BaseModel):
    config: Optional[Dict[str, Any]] = None
    instance_id: Optional[str] = None
    padding: Optional[Padding] = None
    pages: List[ContentPage] = []
    tier: Optional[Tier] = None


def _definition(registry: SectionRegistry, section_id: str) -> SectionDefinition:
    try:
        return registry.get(section_id)
    except UnknownSectionError as e:
        raise HTTPException(404, str(e))


def _catalog_entry(registry: SectionRegistry, definition: SectionDefinition) -> dict:
    return {
        "id":                   definition.id,
        "label":                definition.label,
        "description":          definition.description,
        "category":             definition.category,
        "premium":              registry.is_premium(definition.id),
        "gate":                 registry.classify(definition.id).value,
        "default_visibility":   definition.default_visibility,
        "default_padding":      definition.default_padding.as_dict(),
        "uses_unified_padding": definition.uses_unified_padding,
        "settings":             [s.model_dump(mode="json", exclude_none=True) for s in definition.editor_settings()],
        "blocks":               [b.model_dump(mode="json", exclude_none=True) for b in definition.blocks_schema],
        "schema":               definition.config_model().model_json_schema(),
    }


@router.get("/catalog", summary="Liste les sections disponibles et leurs schemas")
def catalog(registry: SectionRegistry = Depends(get_registry)) -> dict:
    return {"sections": [_catalog_entry(registry, d) for d in registry.list_all()]}


@router.get("/{section_id}/defaults", summary="Config par défaut d'une section")
def defaults(section_id: str, registry: SectionRegistry = Depends(get_registry)) -> dict:
    return _definition(registry, section_id).create_config()


@router.post("/{section_id}/validate", summary="Valide et complète une config")
def validate(
    section_id: str,
    raw: Any = Body(default=None),
    registry: SectionRegistry = Depends(get_registry),
) -> dict:
    definition = _definition(registry, section_id)
    try:
        result = validate_section_config(definition, raw)
    except ConfigValidationError as e:
        raise HTTPException(422, str(e))
    return {
        "config":   result.config,
        "warnings": [w.model_dump() for w in result.warnings],
        "valid":    result.ok,
    }


@router.post("/{section_id}/render", response_class=HTMLResponse, summary="Rend une section en HTML")
def render(
    section_id: str,
    request: RenderRequest,
    registry: SectionRegistry = Depends(get_registry),
    renderer: PreviewRenderer = Depends(get_preview_renderer),
) -> HTMLResponse:
    definition = _definition(registry, section_id)
    tier = request.tier or load_settings().default_tier
    instance_id = request.instance_id or definition.id
    if not registry.gate.check(definition.id, tier).allowed:
        log.info("Section premium %s refusée pour le tier %s", definition.id, tier)
        if registry.gate.policy == GatePolicy.PLACEHOLDER:
            return HTMLResponse(content=locked_placeholder(instance_id, definition.id))
        return HTMLResponse(content="")

    try:
        result = resolve_instance_config(definition, instance_id, request.config)
    except ConfigValidationError as e:
        raise HTTPException(422, str(e))
    context = RenderContext(
        section_id=instance_id,
        padding=request.padding or definition.default_padding,
        pages=tuple(request.pages),
    )
    return HTMLResponse(content=render_section(definition, result.config, context, renderer))
