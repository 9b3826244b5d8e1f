"""
theme_sections : moteur de sections de thème (définition, validation, rendu).

Usage :
    >>> from theme_sections import default_registry, build_instance, PreviewRenderer, render_section
    >>> registry = default_registry()
    >>> hero = registry.get("hero")
    >>> instance = build_instance(hero, "hero-defalt-1", {"placeholder": {"title": "Bonjour"}})

Usage document :
    >>> from theme_sections import create_default_document, export_theme, Tier
    >>> result = export_theme(create_default_document(), registry, Tier.FREE)
    >>> sorted(result.files)[:2]
"""

# ── Schéma / définitions ────────────────────────────────────────────────────
from .schema import (
    SettingOption, BaseSetting, ValueSetting,
    TextSetting, TextareaSetting, RichtextSetting, UrlSetting,
    ColorSetting, CheckboxSetting, RangeSetting, SelectSetting, RadioSetting,
    HeaderSetting, ParagraphSetting, SettingUnion, BlockSchema, Padding,
    parse_setting, options,
)
from .definition import SectionDefinition, SectionInstance
from .context import RenderContext

# ── Registre / gate ─────────────────────────────────────────────────────────
from .gate import Tier, GateClass, GatePolicy, GateDecision, FeatureGate, open_gate
from .registry import SectionRegistry, build_default_registry, default_registry, default_gate

# ── Validation ──────────────────────────────────────────────────────────────
from .validation import (
    ValidationWarning, ValidationResult,
    validate_section_config, parse_config_or_raise, validate_partial_config,
    validate_field, get_default_config, merge_with_defaults, validate_all_configs,
    format_warnings, build_instance,
)
from .nested import get_nested_value, set_nested_value
from .sanitizers import sanitize_hex, sanitize_href, escape_html, build_css_variables
from .tags import ContentPage, PageTag, format_internal_tag, to_api_tag_slug, find_page_by_tag, filter_pages_by_tag

# ── Rendu ───────────────────────────────────────────────────────────────────
from .renderer import Renderer, PreviewRenderer, ExportRenderer, render_section

# ── Document / pipeline ─────────────────────────────────────────────────────
from .document import (
    ThemeDocument, WorkspaceBackup, Region, SectionConfig, SectionSettings, ReconcileReport,
    load_document, parse_backup, dump_document, dump_backup, create_backup,
    migrate_legacy_ids, reconcile_region, prepare_document, create_default_document,
    active_section_ids, inactive_section_ids, resolve_padding,
)
from .pipeline import ComposedPage, ExportResult, SectionStatus, compose_page, render_preview, export_theme

# ── Erreurs ─────────────────────────────────────────────────────────────────
from .errors import (
    ThemeSectionsError, DuplicateIdError, SchemaMismatchError, RegistrySealedError,
    UnknownSectionError, ConfigValidationError, MalformedDocumentError, ContentSourceError,
)

__version__ = "0.1.0"

__all__ = [
    # schéma
    "SettingOption", "BaseSetting", "ValueSetting",
    "TextSetting", "TextareaSetting", "RichtextSetting", "UrlSetting",
    "ColorSetting", "CheckboxSetting", "RangeSetting", "SelectSetting", "RadioSetting",
    "HeaderSetting", "ParagraphSetting", "SettingUnion", "BlockSchema", "Padding",
    "parse_setting", "options",
    "SectionDefinition", "SectionInstance", "RenderContext",
    # registre / gate
    "Tier", "GateClass", "GatePolicy", "GateDecision", "FeatureGate", "open_gate",
    "SectionRegistry", "build_default_registry", "default_registry", "default_gate",
    # validation
    "ValidationWarning", "ValidationResult",
    "validate_section_config", "parse_config_or_raise", "validate_partial_config",
    "validate_field", "get_default_config", "merge_with_defaults", "validate_all_configs",
    "format_warnings", "build_instance", "get_nested_value", "set_nested_value",
    "sanitize_hex", "sanitize_href", "escape_html", "build_css_variables",
    "ContentPage", "PageTag", "format_internal_tag", "to_api_tag_slug",
    "find_page_by_tag", "filter_pages_by_tag",
    # rendu
    "Renderer", "PreviewRenderer", "ExportRenderer", "render_section",
    # document / pipeline
    "ThemeDocument", "WorkspaceBackup", "Region", "SectionConfig", "SectionSettings", "ReconcileReport",
    "load_document", "parse_backup", "dump_document", "dump_backup", "create_backup",
    "migrate_legacy_ids", "reconcile_region", "prepare_document", "create_default_document",
    "active_section_ids", "inactive_section_ids", "resolve_padding",
    "ComposedPage", "ExportResult", "SectionStatus", "compose_page", "render_preview", "export_theme",
    # erreurs
    "ThemeSectionsError", "DuplicateIdError", "SchemaMismatchError", "RegistrySealedError",
    "UnknownSectionError", "ConfigValidationError", "MalformedDocumentError", "ContentSourceError",
]
