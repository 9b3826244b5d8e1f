"""
Réglages partagés entre sections (en-tête, couleurs, padding, cartes) et
helpers de vue communs aux sections liées à des pages taguées.
"""
from typing import Any, Dict, List

from markupsafe import Markup

from ..context import RenderContext
from ..schema import (
    BlockSchema, CheckboxSetting, ColorSetting, RangeSetting, SelectSetting,
    TextareaSetting, TextSetting, UrlSetting, options,
)
from ..sanitizers import build_css_variables, sanitize_hex, sanitize_href, to_px
from ..tags import ContentPage

# ── Presets de réglages ─────────────────────────────────────────────────────

def header_settings(show_header: bool = True, alignment: str = "left") -> List[Any]:
    return [
        TextSetting(id="heading", label="Heading"),
        TextSetting(id="subheading", label="Subheading"),
        CheckboxSetting(id="showHeader", label="Show heading", default=show_header),
        SelectSetting(id="headerAlignment", label="Heading alignment", default=alignment,
                      options=options("left", "center", "right")),
        SelectSetting(id="titleSize", label="Heading size", default="normal",
                      options=options("small", "normal", "large")),
    ]


def card_color_settings() -> List[Any]:
    return [
        ColorSetting(id="backgroundColor", label="Background", default="#ffffff"),
        ColorSetting(id="textColor", label="Text color", default="#151515"),
        ColorSetting(id="cardBackgroundColor", label="Card background", default="#ffffff"),
        ColorSetting(id="cardBorderColor", label="Card border", default="#e6e6e6"),
        ColorSetting(id="buttonColor", label="Button color", default="#151515"),
    ]


def padding_settings(default: int = 32, maximum: int = 200, step: int = 4) -> List[Any]:
    return [
        RangeSetting(id="paddingTop", label="Top", min=0, max=maximum, step=step, default=default, unit="px"),
        RangeSetting(id="paddingBottom", label="Bottom", min=0, max=maximum, step=step, default=default, unit="px"),
    ]


def card_block(limit: int = None, default: List[dict] = ()) -> BlockSchema:
    return BlockSchema(
        type="card",
        name="Card",
        limit=limit,
        settings=[
            TextSetting(id="title", label="Title"),
            TextareaSetting(id="description", label="Description"),
            TextSetting(id="buttonText", label="Button label"),
            UrlSetting(id="buttonHref", label="Button link"),
        ],
        default=list(default),
    )


# ── Helpers de vue ──────────────────────────────────────────────────────────

def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def section_padding(config: dict, context: RenderContext) -> Dict[str, int]:
    """paddingTop/paddingBottom de la config priment sur le padding de l'instance."""
    padding = context.padding
    return {
        "top": to_px(config.get("paddingTop"), padding.top, 200),
        "bottom": to_px(config.get("paddingBottom"), padding.bottom, 200),
        "left": to_px(padding.left, 0, 200),
        "right": to_px(padding.right, 0, 200),
    }


def card_palette(config: dict) -> Dict[str, str]:
    return {
        "background": sanitize_hex(config.get("backgroundColor"), "#ffffff"),
        "text": sanitize_hex(config.get("textColor"), "#151515"),
        "card_background": sanitize_hex(config.get("cardBackgroundColor"), "#ffffff"),
        "card_border": sanitize_hex(config.get("cardBorderColor"), "#e6e6e6"),
        "button_color": sanitize_hex(config.get("buttonColor"), "#151515"),
    }


def cards_section_style(padding: Dict[str, int], palette: Dict[str, str]) -> str:
    return build_css_variables({
        "paddingTop": padding["top"],
        "paddingBottom": padding["bottom"],
        "paddingLeft": padding["left"],
        "paddingRight": padding["right"],
        "background": palette["background"],
        "text": palette["text"],
        "cardBackground": palette["card_background"],
        "cardBorder": palette["card_border"],
        "buttonColor": palette["button_color"],
    }, prefix="gd-ghost-cards")


def header_classes(config: dict) -> List[str]:
    alignment = config.get("headerAlignment")
    alignment = alignment if alignment in ("left", "right") else "center"
    title_size = config.get("titleSize")
    title_size = title_size if title_size in ("small", "large") else "normal"
    classes = ["gd-ghost-cards-section"]
    if config.get("showHeader") is False:
        classes.append("gd-ghost-cards-hide-header")
    classes.append(f"gd-ghost-cards-header-{alignment}")
    classes.append(f"gd-ghost-title-{title_size}")
    return classes


def article(page: ContentPage) -> Dict[str, Any]:
    """Vue d'une page taguée ; page.html est du contenu riche, jamais échappé."""
    return {
        "title": page.title or "Untitled",
        "html": Markup(page.html or ""),
        "tag_classes": page.tag_classes(),
        "image_class": "" if page.feature_image else "no-image",
        "feature_image": page.feature_image or "",
        "feature_image_alt": page.feature_image_alt or page.title or "Untitled",
    }


def cards_with_content(cards: Any) -> List[Dict[str, str]]:
    """Cartes manuelles non vides : titre, description ou bouton renseigné."""
    result = []
    for card in cards if isinstance(cards, list) else []:
        if not isinstance(card, dict):
            continue
        title = _text(card.get("title"))
        description = _text(card.get("description"))
        button_text = _text(card.get("buttonText"))
        if not (title or description or button_text):
            continue
        result.append({
            "title": title,
            "description": description,
            "button_text": button_text,
            "button_href": sanitize_href(_text(card.get("buttonHref")) or "#"),
        })
    return result


def intro(config: dict) -> Dict[str, str]:
    return {"heading": _text(config.get("heading")), "subheading": _text(config.get("subheading"))}
