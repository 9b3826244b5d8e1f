"""
Pipeline de composition : document + registre + tier → markup de page.

Même chemin pour l'aperçu et l'export ; seul le backend change. Chaque
section est classée :

  rendered  → rendue par sa définition (config revalidée avant rendu)
  hidden    → settings.visible == False
  builtin   → emplacement du thème (main, subheader…), rendu en marqueur
  unknown   → definitionId absent du registre, ignorée avec avertissement
  gated     → section premium refusée pour le tier, selon la politique du gate
"""
import logging
import re
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from .context import RenderContext
from .definition import SectionDefinition
from .document import (
    BUILTIN_SLOTS, PAGE_TEMPLATES, Region, SectionConfig, ThemeDocument,
    backup_to_json, create_backup, prepare_document, resolve_padding,
)
from .errors import UnknownSectionError
from .gate import GatePolicy, Tier
from .registry import SectionRegistry
from .renderer import ExportRenderer, PreviewRenderer, Renderer, render_section
from .sanitizers import escape_html
from .tags import ContentPage
from .validation import format_warnings, resolve_instance_config

log = logging.getLogger(__name__)

HEADER_SECTION_ID = "header"
ANNOUNCEMENT_SECTION_ID = "announcement-bar"

# réglages de l'en-tête du document → champs de la définition "header"
_HEADER_SETTING_KEYS = {
    "stickyHeaderMode": "stickyHeader",
    "searchEnabled": "searchEnabled",
    "typographyCase": "typographyCase",
}


class SectionStatus(str, Enum):
    RENDERED = "rendered"
    HIDDEN   = "hidden"
    BUILTIN  = "builtin"
    UNKNOWN  = "unknown"
    GATED    = "gated"


class ComposedSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    instance_id: str
    region: str
    definition_id: Optional[str] = None
    status: SectionStatus
    html: str = ""


class ComposedPage(BaseModel):
    page_key: str
    html: str
    sections: List[ComposedSection] = []
    warnings: List[str] = []

    @property
    def rendered(self) -> List[ComposedSection]:
        return [s for s in self.sections if s.status == SectionStatus.RENDERED]

    @property
    def skipped(self) -> List[ComposedSection]:
        return [s for s in self.sections if s.status in (SectionStatus.UNKNOWN, SectionStatus.GATED)]


class ExportResult(BaseModel):
    files: Dict[str, bytes] = {}
    skipped: List[str] = []
    warnings: List[str] = []


# ── Marqueurs ───────────────────────────────────────────────────────────────

def slot_marker(slot_id: str) -> str:
    return f'<div class="gd-slot" data-slot="{escape_html(slot_id)}"></div>'


def locked_placeholder(instance_id: str, definition_id: str) -> str:
    return (
        f'<section class="gd-section-locked" data-section-id="{escape_html(instance_id)}" '
        f'data-definition-id="{escape_html(definition_id)}">'
        f'<p class="gd-section-locked-copy">Premium section</p></section>'
    )


# ── Composition ─────────────────────────────────────────────────────────────

class _Composer:
    def __init__(self, registry: SectionRegistry, tier: Tier, renderer: Renderer, pages: Sequence[ContentPage]):
        self.registry = registry
        self.tier = tier
        self.renderer = renderer
        self.pages = tuple(pages)
        self.sections: List[ComposedSection] = []
        self.warnings: List[str] = []

    def _add(self, instance_id: str, region: str, status: SectionStatus,
             definition_id: Optional[str] = None, html: str = "") -> None:
        self.sections.append(ComposedSection(
            instance_id=instance_id, region=region, definition_id=definition_id, status=status, html=html,
        ))

    def render(self, instance_id: str, region: str, definition: SectionDefinition,
               custom_config: Optional[dict], settings=None) -> None:
        decision = self.registry.gate.check(definition.id, self.tier)
        if not decision.allowed:
            log.info("Section premium %s (%s) refusée pour le tier %s", instance_id, definition.id, self.tier)
            html = ""
            if self.registry.gate.policy == GatePolicy.PLACEHOLDER:
                html = locked_placeholder(instance_id, definition.id)
            self._add(instance_id, region, SectionStatus.GATED, definition.id, html)
            return

        result = resolve_instance_config(definition, instance_id, custom_config)
        problems = [w for w in result.warnings if w.code != "missing"]
        if problems:
            self.warnings.append(f"{instance_id}: {format_warnings(problems)}")

        context = RenderContext(
            section_id=instance_id,
            padding=resolve_padding(settings, definition.default_padding),
            pages=self.pages,
        )
        html = render_section(definition, result.config, context, self.renderer)
        self._add(instance_id, region, SectionStatus.RENDERED, definition.id, html)

    def entry(self, instance_id: str, region: str, section: SectionConfig) -> None:
        settings = section.settings
        visible = settings.visible if settings is not None else None
        if visible is False:
            self._add(instance_id, region, SectionStatus.HIDDEN, settings.definitionId)
            return
        if instance_id in BUILTIN_SLOTS:
            self._add(instance_id, region, SectionStatus.BUILTIN, html=slot_marker(instance_id))
            return

        definition_id = (settings.definitionId if settings else None) or section.type or instance_id
        try:
            definition = self.registry.get(definition_id)
        except UnknownSectionError as e:
            log.warning("Section %s ignorée : %s", instance_id, e)
            self.warnings.append(f"{instance_id}: {e}")
            self._add(instance_id, region, SectionStatus.UNKNOWN, definition_id)
            return
        if visible is None and not definition.default_visibility:
            self._add(instance_id, region, SectionStatus.HIDDEN, definition_id)
            return
        custom = settings.customConfig if settings else None
        self.render(instance_id, region, definition, custom, settings)

    def header(self, document: ThemeDocument) -> None:
        sections = document.header.sections or {}
        header = sections.get(HEADER_SECTION_ID)
        settings = header.settings if header else None
        extra = (settings.model_extra or {}) if settings is not None else {}

        # barre d'annonce et navigation ont chacune leur visibilité
        if extra.get("announcementBarVisible"):
            config = {**(extra.get("announcementBarConfig") or {}), **(extra.get("announcementContentConfig") or {})}
            definition = self.registry.find(ANNOUNCEMENT_SECTION_ID)
            if definition is not None:
                self.render(ANNOUNCEMENT_SECTION_ID, "header", definition, config)

        if header is None:
            return
        if settings is not None and settings.visible is False:
            self._add(HEADER_SECTION_ID, "header", SectionStatus.HIDDEN, HEADER_SECTION_ID)
            return
        definition = self.registry.find(HEADER_SECTION_ID)
        if definition is None:
            return
        config = {_HEADER_SETTING_KEYS[k]: v for k, v in extra.items() if k in _HEADER_SETTING_KEYS}
        config.update((settings.customConfig if settings else None) or {})
        self.render(HEADER_SECTION_ID, "header", definition, config, settings)

    def region(self, region: Region, name: str) -> None:
        for instance_id in region.order:
            section = region.sections.get(instance_id)
            if section is None:
                log.warning("Id %s sans section dans %s, ignoré", instance_id, name)
                continue
            self.entry(instance_id, name, section)


def _wrap(page_key: str, sections: Iterable[ComposedSection]) -> str:
    body = "\n".join(s.html for s in sections if s.html)
    return f'<main class="gd-page" data-page="{escape_html(page_key)}">\n{body}\n</main>'


def _compose(
    document: ThemeDocument,
    page_key: str,
    registry: SectionRegistry,
    tier: Tier,
    renderer: Renderer,
    pages: Sequence[ContentPage],
) -> ComposedPage:
    if page_key not in document.pages:
        raise KeyError(page_key)
    composer = _Composer(registry, Tier(tier), renderer, pages)
    composer.header(document)
    composer.region(document.pages[page_key], "page")
    composer.region(document.footer, "footer")
    return ComposedPage(
        page_key=page_key,
        html=_wrap(page_key, composer.sections),
        sections=composer.sections,
        warnings=composer.warnings,
    )


def compose_page(
    document: ThemeDocument,
    page_key: str,
    registry: SectionRegistry,
    tier: Tier,
    renderer: Renderer,
    pages: Sequence[ContentPage] = (),
) -> ComposedPage:
    """
    Compose une page : en-tête, sections de la page (order), puis footer.

    Le document est d'abord préparé comme à l'export (ids hérités migrés,
    régions réconciliées).

    Raises:
        KeyError: page_key absente du document
    """
    return _compose(prepare_document(document), page_key, registry, tier, renderer, pages)


def render_preview(
    document: ThemeDocument,
    page_key: str,
    registry: SectionRegistry,
    tier: Tier,
    renderer: Optional[PreviewRenderer] = None,
    pages: Sequence[ContentPage] = (),
) -> ComposedPage:
    return compose_page(document, page_key, registry, tier, renderer or PreviewRenderer(), pages)


# ── Export ──────────────────────────────────────────────────────────────────

_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def is_safe_file_name(name: str) -> bool:
    """Segment de chemin d'export : pas de séparateur, pas de '..'."""
    return bool(_SAFE_NAME_RE.match(name)) and ".." not in name


def _section_files(page_key: str, composed: ComposedPage, warnings: List[str]) -> List[Tuple[str, bytes]]:
    files = []
    for section in composed.rendered:
        if not is_safe_file_name(section.instance_id):
            log.warning("Partial non exporté, id invalide : %r (%s)", section.instance_id, page_key)
            warnings.append(f"{page_key}: id de section invalide pour l'export : {section.instance_id!r}")
            continue
        path = f"partials/sections/{page_key}/{section.instance_id}.html"
        files.append((path, section.html.encode("utf-8")))
    return files


def export_theme(
    document: ThemeDocument,
    registry: SectionRegistry,
    tier: Tier,
    renderer: Optional[Renderer] = None,
    pages: Sequence[ContentPage] = (),
    exported_at: Optional[datetime] = None,
) -> ExportResult:
    """
    Exporte le thème : une page HTML par page du document, un partial par
    section rendue (partials/sections/<page>/<id>.html) et theme.json
    (backup du document préparé). Les noms de page ou de section non sûrs
    comme segment de chemin sont écartés avec un avertissement.
    """
    prepared = prepare_document(document)
    renderer = renderer or ExportRenderer()
    files: Dict[str, bytes] = {}
    skipped: List[str] = []
    warnings: List[str] = []

    for page_key in prepared.pages:
        if not is_safe_file_name(page_key):
            log.warning("Page non exportée, nom invalide : %r", page_key)
            warnings.append(f"nom de page invalide pour l'export : {page_key!r}")
            continue
        composed = _compose(prepared, page_key, registry, tier, renderer, pages)
        files[f"{page_key}.html"] = composed.html.encode("utf-8")
        files.update(_section_files(page_key, composed, warnings))
        for section in composed.skipped:
            label = f"{page_key}/{section.instance_id}"
            if label not in skipped:
                skipped.append(label)
        warnings.extend(f"{page_key}: {w}" for w in composed.warnings)

    backup = create_backup(prepared, exported_at)
    files["theme.json"] = backup_to_json(backup).encode("utf-8")
    log.info("Export : %d fichier(s), %d section(s) ignorée(s)", len(files), len(skipped))
    return ExportResult(files=files, skipped=skipped, warnings=warnings)


__all__ = [
    "SectionStatus", "ComposedSection", "ComposedPage", "ExportResult",
    "compose_page", "render_preview", "export_theme",
    "slot_marker", "locked_placeholder", "is_safe_file_name", "PAGE_TEMPLATES",
]
