"""
Sanitizers : couleurs, liens, échappement HTML et helpers CSS inline.

Ces fonctions sont reproduites à l'identique entre aperçu et export :
une valeur invalide retombe toujours sur le fallback, jamais sur l'entrée brute.
"""
import math
import re
from typing import Any, Mapping, Optional

_HEX_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$")
_CAMEL_RE = re.compile(r"([a-z0-9])([A-Z])")
_PX_KEYS = ("padding", "margin", "radius", "width", "height", "gap")
_SAFE_PREFIXES = ("http://", "https://", "mailto:", "tel:")


def sanitize_hex(value: Any, fallback: str) -> str:
    """
    "#ABC" → "#aabbcc", "#A1B2C3" → "#a1b2c3", "transparent" → "transparent".
    Tout le reste → fallback.
    """
    if not isinstance(value, str):
        return fallback
    normalized = value.strip().lower()
    if normalized == "transparent":
        return normalized
    if not _HEX_RE.match(normalized):
        return fallback
    if len(normalized) == 4:
        r, g, b = normalized[1], normalized[2], normalized[3]
        return f"#{r}{r}{g}{g}{b}{b}"
    return normalized


def sanitize_href(value: Any) -> str:
    """Neutralise javascript:, garde les liens absolus/relatifs, préfixe https:// sinon."""
    if not isinstance(value, str):
        return "#"
    trimmed = value.strip()
    if not trimmed:
        return "#"
    lower = trimmed.lower()
    if lower.startswith("javascript:"):
        return "#"
    if lower.startswith(_SAFE_PREFIXES) or trimmed.startswith(("/", "#")):
        return trimmed
    return f"https://{trimmed}"


def escape_html(value: Any) -> str:
    if not isinstance(value, str) or not value:
        return ""
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def is_number(value: Any) -> bool:
    """bool exclu : True n'est pas un nombre pour un champ range."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def clamp(value: float, minimum: float, maximum: float) -> float:
    if not math.isfinite(value):
        return minimum
    return min(max(value, minimum), maximum)


def to_px(value: Any, fallback: int = 0, maximum: Optional[int] = None) -> int:
    """Arrondit une valeur numérique en pixels positifs (fallback si non numérique)."""
    number = value if is_number(value) else fallback
    px = max(0, int(round(number)))
    if maximum is not None:
        px = min(px, maximum)
    return px


def build_padding_style(padding: Mapping[str, Any]) -> str:
    """{"top": 32, "bottom": 16} → "padding-top: 32px; padding-bottom: 16px"."""
    parts = []
    for side in ("top", "bottom", "left", "right"):
        value = padding.get(side)
        if is_number(value):
            parts.append(f"padding-{side}: {to_px(value)}px")
    return "; ".join(parts)


def camel_to_kebab(name: str) -> str:
    return _CAMEL_RE.sub(r"\1-\2", name).replace("_", "-").lower()


def build_css_variables(config: Mapping[str, Any], prefix: str = "gd") -> str:
    """
    Convertit une config plate en variables CSS inline.

    {"backgroundColor": "#fff", "paddingTop": 32} →
    "--gd-background-color: #fff; --gd-padding-top: 32px"

    Les valeurs non scalaires (dict, list) et les booléens sont ignorés.
    """
    parts = []
    for key, value in config.items():
        if isinstance(value, (dict, list, tuple, bool)) or value is None:
            continue
        name = camel_to_kebab(key)
        if is_number(value):
            unit = "px" if any(k in name for k in _PX_KEYS) else ""
            number = int(value) if float(value).is_integer() else value
            parts.append(f"--{prefix}-{name}: {number}{unit}")
        elif isinstance(value, str) and value:
            parts.append(f"--{prefix}-{name}: {value}")
    return "; ".join(parts)
