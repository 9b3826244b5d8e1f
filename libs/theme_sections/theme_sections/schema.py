"""
Schema model : descripteurs de réglages (settings) et de blocs répétables.

Chaque variante porte son propre coerce(raw) → (valeur, problème) et
default_value(). Union discriminée par `type`, comme BlockUnion côté blocs.
"""
import copy
from typing import Annotated, Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .sanitizers import clamp, is_number, sanitize_hex

# (code, message), None quand la valeur brute est acceptée telle quelle
Problem = Optional[Tuple[str, str]]


class SettingOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class BaseSetting(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    info: Optional[str] = None

    @property
    def presentational(self) -> bool:
        return False


class ValueSetting(BaseSetting):
    """Réglage qui produit un champ de config."""
    hidden: bool = False

    def default_value(self) -> Any:
        return copy.deepcopy(getattr(self, "default"))

    def coerce(self, raw: Any) -> Tuple[Any, Problem]:
        raise NotImplementedError


# ── Texte ───────────────────────────────────────────────────────────────────

class StringSetting(ValueSetting):
    default: str = ""

    def coerce(self, raw: Any) -> Tuple[Any, Problem]:
        if isinstance(raw, str):
            return raw, None
        return self.default_value(), ("invalid_type", "texte attendu")


class TextSetting(StringSetting):
    type: Literal["text"] = "text"


class TextareaSetting(StringSetting):
    type: Literal["textarea"] = "textarea"


class RichtextSetting(StringSetting):
    """HTML brut autorisé au rendu : seul type de champ jamais échappé."""
    type: Literal["richtext"] = "richtext"


class UrlSetting(StringSetting):
    """Stocké tel quel ; sanitize_href s'applique au rendu."""
    type: Literal["url"] = "url"


# ── Couleur / booléen / nombre ──────────────────────────────────────────────

class ColorSetting(ValueSetting):
    type: Literal["color"] = "color"
    default: str = "#000000"

    def coerce(self, raw: Any) -> Tuple[Any, Problem]:
        if not isinstance(raw, str):
            return self.default_value(), ("invalid_type", "couleur attendue")
        color = sanitize_hex(raw, "")
        if not color:
            return self.default_value(), ("invalid_color", f"couleur invalide : {raw!r}")
        return color, None


class CheckboxSetting(ValueSetting):
    type: Literal["checkbox"] = "checkbox"
    default: bool = False

    def coerce(self, raw: Any) -> Tuple[Any, Problem]:
        if isinstance(raw, bool):
            return raw, None
        return self.default_value(), ("invalid_type", "booléen attendu")


class RangeSetting(ValueSetting):
    type: Literal["range"] = "range"
    min: Union[int, float]
    max: Union[int, float]
    step: Union[int, float] = 1
    unit: Optional[str] = None
    default: Union[int, float]

    @model_validator(mode="after")
    def _check_bounds(self) -> "RangeSetting":
        if self.min > self.max:
            raise ValueError(f"{self.id} : min > max ({self.min} > {self.max})")
        if not self.min <= self.default <= self.max:
            raise ValueError(f"{self.id} : default {self.default} hors [{self.min}, {self.max}]")
        return self

    def coerce(self, raw: Any) -> Tuple[Any, Problem]:
        if not is_number(raw):
            return self.default_value(), ("invalid_type", "nombre attendu")
        value = clamp(raw, self.min, self.max)
        if value != raw:
            return value, ("clamped", f"{raw} ramené dans [{self.min}, {self.max}]")
        return raw, None


# ── Choix ───────────────────────────────────────────────────────────────────

class ChoiceSetting(ValueSetting):
    options: List[SettingOption]
    default: str

    @model_validator(mode="after")
    def _check_default(self):
        if self.default not in self.option_values():
            raise ValueError(f"{self.id} : default {self.default!r} absent des options")
        return self

    def option_values(self) -> List[str]:
        return [o.value for o in self.options]

    def coerce(self, raw: Any) -> Tuple[Any, Problem]:
        if isinstance(raw, str) and raw in self.option_values():
            return raw, None
        return self.default_value(), ("invalid_option", f"{raw!r} hors options {self.option_values()}")


class SelectSetting(ChoiceSetting):
    type: Literal["select"] = "select"


class RadioSetting(ChoiceSetting):
    type: Literal["radio"] = "radio"


# ── Présentation (jamais de champ de config) ────────────────────────────────

class HeaderSetting(BaseSetting):
    type: Literal["header"] = "header"

    @property
    def presentational(self) -> bool:
        return True


class ParagraphSetting(BaseSetting):
    type: Literal["paragraph"] = "paragraph"
    content: str = ""

    @property
    def presentational(self) -> bool:
        return True


SettingUnion = Annotated[
    Union[
        TextSetting,
        TextareaSetting,
        RichtextSetting,
        UrlSetting,
        ColorSetting,
        CheckboxSetting,
        RangeSetting,
        SelectSetting,
        RadioSetting,
        HeaderSetting,
        ParagraphSetting,
    ],
    Field(discriminator="type"),
]

_SETTING_ADAPTER = TypeAdapter(SettingUnion)


def parse_setting(data: dict) -> BaseSetting:
    """{"type": "range", ...} → RangeSetting (ValidationError si type inconnu)."""
    return _SETTING_ADAPTER.validate_python(data)


def options(*values: str) -> List[SettingOption]:
    """Raccourci : options("left", "right") → [{label: "Left", value: "left"}, ...]."""
    return [SettingOption(label=v[:1].upper() + v[1:], value=v) for v in values]


# ── Blocs répétables ────────────────────────────────────────────────────────

class BlockSchema(BaseModel):
    """Sous-élément répétable (ex. "card" dans une grille), stocké sous config[key]."""
    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    key: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    settings: List[SettingUnion] = Field(default_factory=list)
    default: List[dict] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_default_limit(self) -> "BlockSchema":
        if self.limit is not None and len(self.default) > self.limit:
            raise ValueError(f"bloc {self.type} : {len(self.default)} éléments par défaut > limit {self.limit}")
        return self

    @property
    def config_key(self) -> str:
        return self.key or f"{self.type}s"

    def value_settings(self) -> List[ValueSetting]:
        return [s for s in self.settings if not s.presentational]

    def default_items(self) -> List[dict]:
        return copy.deepcopy(self.default)


# ── Padding ─────────────────────────────────────────────────────────────────

class Padding(BaseModel):
    """Padding d'une section, chaque côté borné à [0, 200]."""
    model_config = ConfigDict(frozen=True)

    top: int = Field(default=0, ge=0, le=200)
    bottom: int = Field(default=0, ge=0, le=200)
    left: Optional[int] = Field(default=None, ge=0, le=200)
    right: Optional[int] = Field(default=None, ge=0, le=200)

    @property
    def is_unified(self) -> bool:
        return self.left is None and self.right is None

    def to_unified(self) -> dict:
        """Mode legacy top/bottom seul : sans perte si left/right absents."""
        return {"top": self.top, "bottom": self.bottom}

    @classmethod
    def from_unified(cls, data: dict) -> "Padding":
        return cls(top=data.get("top", 0), bottom=data.get("bottom", 0))

    def as_dict(self) -> dict:
        return self.model_dump(exclude_none=True)
