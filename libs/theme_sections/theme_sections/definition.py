"""
SectionDefinition : descripteur statique d'un type de section.

Identité, catégorie, schéma de réglages, blocs, padding par défaut, template
jinja2 et un build_view pur (config, contexte) → variables de template.
La config par défaut est dérivée du schéma : validate(D, {}) == D.create_config().
"""
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, create_model

from .context import RenderContext
from .nested import set_nested_value
from .schema import (
    BlockSchema, CheckboxSetting, Padding, RangeSetting, SettingUnion,
    ValueSetting, ChoiceSetting,
)

SectionCategory = Literal["template", "header"]
ViewBuilder = Callable[[dict, RenderContext], dict]
InstanceHook = Callable[[dict, str], dict]


class SectionDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str = ""
    category: SectionCategory = "template"
    settings_schema: List[SettingUnion] = Field(default_factory=list)
    blocks_schema: List[BlockSchema] = Field(default_factory=list)
    default_visibility: bool = True
    default_padding: Padding = Padding(top=32, bottom=32)
    premium: bool = False
    uses_unified_padding: bool = False
    template: str
    hide_tag: Optional[str] = None
    build_view: ViewBuilder = Field(exclude=True)
    instance_hook: Optional[InstanceHook] = Field(default=None, exclude=True)

    # ── Schéma ──────────────────────────────────────────────────────────────

    def config_fields(self) -> List[ValueSetting]:
        """Réglages qui produisent un champ de config (cachés inclus)."""
        return [s for s in self.settings_schema if not s.presentational]

    def editor_settings(self) -> List[Any]:
        """Réglages exposés dans l'éditeur (header/paragraph inclus, cachés exclus)."""
        return [s for s in self.settings_schema if s.presentational or not s.hidden]

    def create_config(self) -> dict:
        config: dict = {}
        for setting in self.config_fields():
            set_nested_value(config, setting.id, setting.default_value())
        for block in self.blocks_schema:
            config[block.config_key] = block.default_items()
        return config

    def signature(self) -> dict:
        """Identité structurelle : deux définitions égales ici sont interchangeables."""
        data = self.model_dump(mode="json")
        data["build_view"] = _qualified(self.build_view)
        data["instance_hook"] = _qualified(self.instance_hook)
        return data

    def config_model(self) -> Type[BaseModel]:
        """Modèle pydantic de la config (catalogue JSON schema + vérifs de conformité)."""
        entries = [(s.id.split("."), s) for s in self.config_fields()]
        return _build_model(_pascal(self.id) + "Config", entries, self.blocks_schema)


class SectionInstance(BaseModel):
    """Occurrence concrète d'une section, avec sa config validée."""
    id: str
    definition_id: str
    label: str
    category: SectionCategory
    config: Dict[str, Any] = Field(default_factory=dict)


# ── Helpers ─────────────────────────────────────────────────────────────────

def _qualified(fn: Optional[Callable]) -> Optional[str]:
    if fn is None:
        return None
    return f"{getattr(fn, '__module__', '?')}.{getattr(fn, '__qualname__', repr(fn))}"


def _pascal(value: str) -> str:
    parts = value.replace("-", "_").replace(".", "_").split("_")
    return "".join(p[:1].upper() + p[1:] for p in parts if p)


def _annotation(setting: ValueSetting) -> Any:
    if isinstance(setting, CheckboxSetting):
        return bool
    if isinstance(setting, RangeSetting):
        return float
    if isinstance(setting, ChoiceSetting):
        return Literal[tuple(setting.option_values())]
    return str


def _field(setting: ValueSetting) -> Any:
    if isinstance(setting, RangeSetting):
        return Field(default=setting.default, ge=setting.min, le=setting.max)
    return Field(default=setting.default_value())


def _build_model(
    name: str,
    entries: List[Tuple[List[str], ValueSetting]],
    blocks: List[BlockSchema] = (),
) -> Type[BaseModel]:
    fields: Dict[str, Any] = {}
    groups: Dict[str, list] = {}
    for path, setting in entries:
        if len(path) == 1:
            fields[path[0]] = (_annotation(setting), _field(setting))
        else:
            groups.setdefault(path[0], []).append((path[1:], setting))
    for key, sub_entries in groups.items():
        sub_model = _build_model(name + _pascal(key), sub_entries)
        fields[key] = (sub_model, Field(default_factory=sub_model))
    for block in blocks:
        item_entries = [(s.id.split("."), s) for s in block.value_settings()]
        item_model = _build_model(name + _pascal(block.type), item_entries)
        fields[block.config_key] = (
            List[item_model],
            Field(default_factory=block.default_items, max_length=block.limit),
        )
    return create_model(name, __config__=ConfigDict(extra="allow"), **fields)
