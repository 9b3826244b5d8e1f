"""
Theme Document : modèle persisté d'un thème et son cycle de vie.

  load_document / parse_backup  → validation stricte (MalformedDocumentError, rien d'appliqué)
  migrate_legacy_ids            → "header-defalt…" renommé "hero-defalt…"
  reconcile_region              → order ⊆ sections, défauts du template semés
  prepare_document              → migration puis réconciliation de chaque région

Les clés inconnues sont conservées partout (extra="allow") et le dump
(exclude_unset) restitue exactement le JSON d'entrée.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import MalformedDocumentError
from .sanitizers import clamp, is_number
from .schema import Padding
from .sections.hero import migrate_legacy_config as migrate_legacy_hero_config

log = logging.getLogger(__name__)

Number = Union[int, float]

BACKUP_VERSION = 1
DOCUMENT_VERSION = 1
DEFAULT_DOCUMENT_NAME = "defalt-theme"

HERO_ID_PREFIX = "hero-defalt"
LEGACY_HERO_ID_PREFIX = "header-defalt"

# page du document → template de page
PAGE_TEMPLATES = {"homepage": "home", "about": "about", "post": "post", "page": "page"}
TEMPLATE_DEFAULTS = {
    "home": ("subheader", "featured", "main"),
    "footer": ("footerBar", "footerSignup"),
}
DEFAULT_TEMPLATE_IDS = ("main",)

# Emplacements du thème (pas des définitions de section)
BUILTIN_SLOTS = frozenset({"subheader", "featured", "main", "footerBar", "footerSignup"})


# ── Modèles ─────────────────────────────────────────────────────────────────

class _Open(BaseModel):
    model_config = ConfigDict(extra="allow")


class PaddingData(_Open):
    top: Optional[Number] = None
    bottom: Optional[Number] = None
    left: Optional[Number] = None
    right: Optional[Number] = None


class SectionSettings(_Open):
    visible: Optional[bool] = None
    padding: Optional[PaddingData] = None
    paddingBlock: Optional[Number] = None
    definitionId: Optional[str] = None
    customConfig: Optional[Dict[str, Any]] = None


class SectionConfig(_Open):
    type: Optional[str] = None
    settings: Optional[SectionSettings] = None


class HeaderConfig(SectionConfig):
    """En-tête du thème ; la section "header" vit dans sections."""
    sections: Optional[Dict[str, SectionConfig]] = None


class Region(_Open):
    """Page ou footer : order = sections actives, dans l'ordre de rendu."""
    order: List[str] = Field(default_factory=list)
    sections: Dict[str, SectionConfig] = Field(default_factory=dict)


class ThemeDocument(_Open):
    name: Optional[str] = None
    version: Optional[Number] = None
    accentColor: Optional[str] = None
    packageJson: Optional[str] = None
    header: HeaderConfig = Field(default_factory=HeaderConfig)
    footer: Region = Field(default_factory=Region)
    pages: Dict[str, Region] = Field(default_factory=dict)


class WorkspaceBackup(_Open):
    """Seule forme persistée/transmise du document : format de compatibilité."""
    version: Number
    exportedAt: str
    document: ThemeDocument

    @field_validator("exportedAt")
    @classmethod
    def _check_iso(cls, v: str) -> str:
        try:
            datetime.fromisoformat(v.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"exportedAt n'est pas une date ISO-8601 : {v!r}") from None
        return v


class ReconcileReport(BaseModel):
    dropped: List[str] = []
    seeded: List[str] = []
    inactive: List[str] = []

    @property
    def changed(self) -> bool:
        return bool(self.dropped or self.seeded)


# ── Chargement / dump ───────────────────────────────────────────────────────

def _errors(exc: ValidationError) -> List[dict]:
    return [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]


def _parse(model, data: Any, label: str):
    try:
        if isinstance(data, (str, bytes)):
            return model.model_validate_json(data)
        return model.model_validate(data)
    except ValidationError as e:
        log.warning("%s rejeté : %d erreur(s)", label, e.error_count())
        raise MalformedDocumentError(f"{label} invalide : {e.error_count()} erreur(s)", _errors(e)) from e


def load_document(data: Any) -> ThemeDocument:
    """dict ou JSON → ThemeDocument. MalformedDocumentError si le schéma échoue."""
    return _parse(ThemeDocument, data, "Document")


def parse_backup(data: Any) -> WorkspaceBackup:
    return _parse(WorkspaceBackup, data, "Backup")


def dump_document(document: ThemeDocument) -> dict:
    return document.model_dump(mode="json", exclude_unset=True)


def dump_backup(backup: WorkspaceBackup) -> dict:
    return backup.model_dump(mode="json", exclude_unset=True)


def backup_to_json(backup: WorkspaceBackup) -> str:
    return json.dumps(dump_backup(backup), indent=2, ensure_ascii=False)


def create_backup(document: ThemeDocument, exported_at: Optional[datetime] = None) -> WorkspaceBackup:
    moment = exported_at or datetime.now(timezone.utc)
    stamp = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return WorkspaceBackup(version=BACKUP_VERSION, exportedAt=stamp, document=document)


# ── Migration ───────────────────────────────────────────────────────────────

def normalize_hero_id(section_id: str) -> str:
    if section_id.startswith(LEGACY_HERO_ID_PREFIX):
        return HERO_ID_PREFIX + section_id[len(LEGACY_HERO_ID_PREFIX):]
    return section_id


def _migrate_region(region: dict) -> int:
    renamed = 0
    if isinstance(region.get("order"), list):
        region["order"] = [normalize_hero_id(i) if isinstance(i, str) else i for i in region["order"]]
    sections = region.get("sections")
    if isinstance(sections, dict):
        migrated = {}
        for key, section in sections.items():
            new_key = normalize_hero_id(key)
            if new_key != key:
                renamed += 1
                settings = section.get("settings") if isinstance(section, dict) else None
                if isinstance(settings, dict) and isinstance(settings.get("customConfig"), dict):
                    settings["customConfig"] = migrate_legacy_hero_config(settings["customConfig"])
            migrated[new_key] = section
        region["sections"] = migrated
    return renamed


def migrate_legacy_ids(document: ThemeDocument) -> ThemeDocument:
    """Renvoie un nouveau document ; l'original n'est pas modifié."""
    data = dump_document(document)
    renamed = 0
    if isinstance(data.get("footer"), dict):
        renamed += _migrate_region(data["footer"])
    for page in (data.get("pages") or {}).values():
        renamed += _migrate_region(page)
    if renamed:
        log.info("Migration ids legacy : %d section(s) renommée(s)", renamed)
    return load_document(data)


# ── Réconciliation order / sections ─────────────────────────────────────────

def template_defaults(template_key: str) -> Tuple[str, ...]:
    return TEMPLATE_DEFAULTS.get(template_key, DEFAULT_TEMPLATE_IDS)


def default_slot_section(slot_id: str) -> SectionConfig:
    """Section par défaut d'un emplacement du thème (padding CSS d'origine)."""
    if slot_id == "subheader":
        return SectionConfig(type="header", settings=SectionSettings(visible=True, paddingBlock=160))
    if slot_id == "main":
        return SectionConfig(type="main", settings=SectionSettings(visible=True, paddingBlock=0))
    if slot_id == "footerBar":
        return SectionConfig(type="footer-bar", settings=SectionSettings(visible=True, paddingBlock=28))
    if slot_id == "footerSignup":
        return SectionConfig(type="footer-signup",
                             settings=SectionSettings(visible=True, padding=PaddingData(top=0, bottom=160)))
    return SectionConfig(type=slot_id, settings=SectionSettings(visible=True))


def reconcile_region(region: Region, template_key: str) -> Tuple[Region, ReconcileReport]:
    """
    Garantit que chaque id de order existe dans sections.

      - id de order sans section → retiré de order (loggé)
      - id par défaut du template absent des deux → semé
      - section absente de order → conservée telle quelle (soft-delete)
    """
    order: List[str] = []
    dropped: List[str] = []
    for section_id in region.order:
        if section_id in region.sections and section_id not in order:
            order.append(section_id)
        else:
            dropped.append(section_id)
    if dropped:
        log.warning("Ids sans section retirés de l'ordre (%s) : %s", template_key, ", ".join(dropped))

    sections = dict(region.sections)
    seeded: List[str] = []
    for index, section_id in enumerate(template_defaults(template_key)):
        if section_id in sections or section_id in region.order:
            continue
        sections[section_id] = default_slot_section(section_id)
        order.insert(min(index, len(order)), section_id)
        seeded.append(section_id)

    inactive = [i for i in sections if i not in order]
    if not dropped and not seeded:
        return region, ReconcileReport(inactive=inactive)
    reconciled = region.model_copy(update={"order": order, "sections": sections})
    return reconciled, ReconcileReport(dropped=dropped, seeded=seeded, inactive=inactive)


def active_section_ids(region: Region) -> List[str]:
    return [i for i in region.order if i in region.sections]


def inactive_section_ids(region: Region) -> List[str]:
    order = set(region.order)
    return [i for i in region.sections if i not in order]


def prepare_document(document: ThemeDocument) -> ThemeDocument:
    """Migration des ids legacy puis réconciliation de chaque région."""
    migrated = migrate_legacy_ids(document)
    footer, _ = reconcile_region(migrated.footer, "footer")
    pages = {}
    for key, region in migrated.pages.items():
        pages[key], _ = reconcile_region(region, PAGE_TEMPLATES.get(key, key))
    return migrated.model_copy(update={"footer": footer, "pages": pages})


# ── Document par défaut ─────────────────────────────────────────────────────

DEFAULT_ANNOUNCEMENT_BAR_CONFIG = {
    "width": "default",
    "backgroundColor": "#ac1e3e",
    "textColor": "#ffffff",
    "dividerThickness": 0,
    "dividerColor": "#e5e7eb",
    "paddingTop": 8,
    "paddingBottom": 8,
}
DEFAULT_ANNOUNCEMENT_CONTENT_CONFIG = {
    "previewText": "Tag #announcement-bar to a published Ghost page.",
    "underlineLinks": False,
    "typographySize": "normal",
    "typographyWeight": "default",
    "typographySpacing": "regular",
    "typographyCase": "default",
}


def _default_page(page_key: str) -> dict:
    template_key = PAGE_TEMPLATES.get(page_key, page_key)
    ids = template_defaults(template_key)
    return {
        "order": list(ids),
        "sections": {i: dump_section(default_slot_section(i)) for i in ids},
    }


def dump_section(section: SectionConfig) -> dict:
    return section.model_dump(mode="json", exclude_unset=True)


def create_default_document() -> ThemeDocument:
    footer_ids = template_defaults("footer")
    return load_document({
        "name": DEFAULT_DOCUMENT_NAME,
        "version": DOCUMENT_VERSION,
        "accentColor": "#ac1e3e",
        "header": {
            "sections": {
                "header": {
                    "type": "header",
                    "settings": {
                        "visible": True,
                        "stickyHeaderMode": "Never",
                        "searchEnabled": True,
                        "typographyCase": "default",
                        "announcementBarVisible": True,
                        "announcementBarConfig": dict(DEFAULT_ANNOUNCEMENT_BAR_CONFIG),
                        "announcementContentConfig": dict(DEFAULT_ANNOUNCEMENT_CONTENT_CONFIG),
                    },
                },
            },
        },
        "footer": {
            "order": list(footer_ids),
            "sections": {i: dump_section(default_slot_section(i)) for i in footer_ids},
        },
        "pages": {key: _default_page(key) for key in PAGE_TEMPLATES},
    })


# ── Padding ─────────────────────────────────────────────────────────────────

def _side(value: Any, fallback: Optional[int]) -> Optional[int]:
    if not is_number(value):
        return fallback
    return int(round(clamp(value, 0, 200)))


def resolve_padding(settings: Optional[SectionSettings], fallback: Padding) -> Padding:
    """
    padding (4 côtés) prioritaire, puis paddingBlock (unifié top = bottom),
    sinon le padding par défaut de la définition. Bornes [0, 200].
    """
    if settings is not None and settings.padding is not None:
        p = settings.padding
        return Padding(
            top=_side(p.top, fallback.top),
            bottom=_side(p.bottom, fallback.bottom),
            left=_side(p.left, fallback.left),
            right=_side(p.right, fallback.right),
        )
    if settings is not None and is_number(settings.paddingBlock):
        value = _side(settings.paddingBlock, fallback.top)
        return Padding(top=value, bottom=value, left=fallback.left, right=fallback.right)
    return fallback
