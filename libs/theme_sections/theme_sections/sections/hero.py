"""Section Hero : carte pleine largeur avec titre, sous-titre et bouton."""
from ..context import RenderContext
from ..definition import SectionDefinition
from ..sanitizers import sanitize_hex, sanitize_href, to_px
from ..schema import (
    CheckboxSetting, ColorSetting, HeaderSetting, Padding, RangeSetting,
    SelectSetting, TextareaSetting, TextSetting, UrlSetting, options,
)

PREVIEW_TAG = "hero-preview"

PLACEHOLDER_SAMPLE = {
    "title": "Enter heading text",
    "description": "Enter subheading text",
    "button_text": "Add button text",
}
FALLBACK_BUTTON_HREF = "https://example.com"


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def build_view(config: dict, context: RenderContext) -> dict:
    placeholder = config.get("placeholder")
    placeholder = placeholder if isinstance(placeholder, dict) else {}
    title = _text(placeholder.get("title"))
    description = _text(placeholder.get("description"))
    button_text = _text(placeholder.get("buttonText"))
    button_href = _text(placeholder.get("buttonHref")) or FALLBACK_BUTTON_HREF

    alignment = config.get("contentAlignment")
    alignment = alignment if alignment in ("left", "right") else "center"
    width_class = "gd-width-regular" if config.get("contentWidth") == "regular" else "gd-width-full"
    inner_padding = 92 if config.get("heightMode") == "expand" else 64

    card_radius = to_px(config.get("cardBorderRadius"), 24, 96)
    if width_class == "gd-width-full":
        card_radius = 0

    section_style = "; ".join([
        f"--gd-hero-padding-top: {to_px(context.padding.top, 32)}px",
        f"--gd-hero-padding-bottom: {to_px(context.padding.bottom, 32)}px",
        f"--gd-hero-card-radius: {card_radius}px",
        f"border-radius: {card_radius}px",
    ])
    card_style = "; ".join([
        f"--gd-hero-background: {sanitize_hex(config.get('backgroundColor'), '#000000')}",
        f"--gd-hero-inner-padding-top: {inner_padding}px",
        f"--gd-hero-inner-padding-bottom: {inner_padding}px",
        f"--gd-hero-card-radius: {card_radius}px",
        f"--gd-hero-button-color: {sanitize_hex(config.get('buttonColor'), '#ffffff')}",
        f"--gd-hero-button-text-color: {sanitize_hex(config.get('buttonTextColor'), '#151515')}",
        f"--gd-hero-button-radius: {to_px(config.get('buttonBorderRadius'), 3, 50)}px",
        f"border-radius: {card_radius}px",
    ])

    section_classes = ["gd-hero-section"]
    if width_class == "gd-width-regular":
        section_classes.append("gd-hero-section-regular")
    section_classes.append("gh-hero")

    return {
        "section_classes": " ".join(section_classes),
        "section_style": section_style,
        "card_style": card_style,
        "content_classes": f"gd-hero-content gd-align-{alignment} {width_class}",
        "tag": config.get("ghostPageTag") or PREVIEW_TAG,
        "title": title or PLACEHOLDER_SAMPLE["title"],
        "title_is_placeholder": not title,
        "description": description or PLACEHOLDER_SAMPLE["description"],
        "description_is_placeholder": not description,
        "button_text": button_text or PLACEHOLDER_SAMPLE["button_text"],
        "button_is_placeholder": not button_text,
        "button_href": sanitize_href(button_href),
        "show_button": config.get("showButton") is not False,
    }


_LEGACY_MARKERS = ("placeholder", "ghostPageTag", "title", "description", "primaryCtaText", "primaryCtaHref")


def migrate_legacy_config(config: dict) -> dict:
    """
    Ancien format (title, description, primaryCtaText…) → placeholder.*.
    Config sans marqueur hero : renvoyée telle quelle.
    """
    if not isinstance(config, dict) or not any(k in config for k in _LEGACY_MARKERS):
        return config
    source = config.get("placeholder") if isinstance(config.get("placeholder"), dict) else {}
    legacy_keys = {"title": "title", "description": "description",
                   "buttonText": "primaryCtaText", "buttonHref": "primaryCtaHref"}
    placeholder = dict(source)
    for key, legacy_key in legacy_keys.items():
        value = _text(source.get(key)) or _text(config.get(legacy_key))
        if value:
            placeholder[key] = value

    migrated = {k: v for k, v in config.items() if k not in legacy_keys.values()}
    migrated["placeholder"] = placeholder
    if "background" in migrated and "backgroundColor" not in migrated:
        migrated["backgroundColor"] = sanitize_hex(migrated.pop("background"), "#000000")
    if "textColor" in migrated and "buttonTextColor" not in migrated:
        migrated["buttonTextColor"] = sanitize_hex(migrated.pop("textColor"), "#151515")
    return migrated


def instance_tag(config: dict, instance_id: str) -> dict:
    """Hero resté sur le tag d'aperçu → tag = id d'instance."""
    tag = config.get("ghostPageTag")
    if tag and tag != PREVIEW_TAG:
        return config
    return {**config, "ghostPageTag": instance_id}


hero_definition = SectionDefinition(
    id="hero",
    label="Hero",
    description="Large heading with supporting copy and a call to action.",
    category="template",
    premium=True,
    default_padding=Padding(top=32, bottom=32),
    template="sections/hero.html.j2",
    build_view=build_view,
    instance_hook=instance_tag,
    settings_schema=[
        TextSetting(id="ghostPageTag", label="Ghost page tag", default=PREVIEW_TAG, hidden=True),
        HeaderSetting(id="content-header", label="Content"),
        TextSetting(id="placeholder.title", label="Heading"),
        TextareaSetting(id="placeholder.description", label="Subheading"),
        TextSetting(id="placeholder.buttonText", label="Button text"),
        UrlSetting(id="placeholder.buttonHref", label="Button link"),
        HeaderSetting(id="layout-header", label="Layout"),
        SelectSetting(id="imagePosition", label="Image position", default="background",
                      options=options("background", "left", "right")),
        SelectSetting(id="contentAlignment", label="Alignment", default="center",
                      options=options("left", "center", "right")),
        SelectSetting(id="contentWidth", label="Width", default="full",
                      options=options("narrow", "regular", "wide", "full")),
        SelectSetting(id="heightMode", label="Height", default="regular",
                      options=options("regular", "expand")),
        RangeSetting(id="cardBorderRadius", label="Card radius", min=0, max=96, step=1, default=24, unit="px"),
        HeaderSetting(id="colors-header", label="Colors"),
        ColorSetting(id="backgroundColor", label="Background", default="#000000"),
        HeaderSetting(id="button-header", label="Button"),
        CheckboxSetting(id="showButton", label="Show button", default=True),
        ColorSetting(id="buttonColor", label="Button color", default="#ffffff"),
        ColorSetting(id="buttonTextColor", label="Button text color", default="#151515"),
        RangeSetting(id="buttonBorderRadius", label="Button radius", min=0, max=50, step=1, default=3, unit="px"),
    ],
)
